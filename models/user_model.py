from datetime import datetime
from pydantic import BaseModel
from typing import List, Optional, Union

from models.account import Account


# Request bodies keep every field optional so that a missing field is
# reported by the service as a 400 with a readable message.
class RegisterRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None
    schoolId: Optional[str] = None

class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None

class MessageResponse(BaseModel):
    message: str

class LoginResponse(BaseModel):
    token: str
    role: str
    schoolId: Optional[str] = None
    message: str = "Login successful"

class DrillEntry(BaseModel):
    drillName: str
    score: Union[int, float]

class AccountSummary(BaseModel):
    id: str
    name: str
    email: str
    role: str
    schoolId: Optional[str] = None
    drills: List[DrillEntry] = []
    drillsCompleted: int = 0
    preparednessScore: Union[int, float] = 0
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

    @classmethod
    def from_account(cls, account: Account) -> "AccountSummary":
        return cls(
            id=account.id,
            name=account.name,
            email=account.email,
            role=account.role,
            schoolId=account.school_id,
            drills=[DrillEntry(drillName=d.drill_name, score=d.score) for d in account.drills],
            drillsCompleted=account.drills_completed,
            preparednessScore=account.preparedness_score,
            createdAt=account.created_at,
            updatedAt=account.updated_at,
        )

class MeResponse(BaseModel):
    id: str
    name: str
    email: str
    role: str
    schoolId: Optional[str] = None
    preparednessScore: Union[int, float] = 0
    drillsCompleted: int = 0
    completedDrills: List[str] = []

class DashboardResponse(BaseModel):
    name: str
    email: str
    preparednessScore: Union[int, float] = 0
    drillsCompleted: int = 0
