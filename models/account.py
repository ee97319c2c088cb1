from datetime import datetime
from typing import List, Optional, Union

from bson import ObjectId
from pydantic import BaseModel, Field

ROLE_STUDENT = "student"
ROLE_ADMIN = "admin"
ROLES = (ROLE_STUDENT, ROLE_ADMIN)


class DrillRecord(BaseModel):
    drill_name: str
    score: Union[int, float]

    def to_document(self) -> dict:
        return {"drillName": self.drill_name, "score": self.score}


class Account(BaseModel):
    """A registered user together with their drill history."""

    id: Optional[str] = None
    name: str
    email: str
    password_hash: str
    role: str
    school_id: Optional[str] = None
    drills: List[DrillRecord] = Field(default_factory=list)
    drills_completed: int = 0
    preparedness_score: Union[int, float] = 0
    version: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def completed_drills(self) -> List[str]:
        return [d.drill_name for d in self.drills]

    @classmethod
    def from_document(cls, doc: dict) -> "Account":
        return cls(
            id=str(doc["_id"]),
            name=doc["name"],
            email=doc["email"],
            password_hash=doc["passwordHash"],
            role=doc["role"],
            school_id=doc.get("schoolId"),
            drills=[
                DrillRecord(drill_name=d["drillName"], score=d["score"])
                for d in doc.get("drills") or []
            ],
            drills_completed=doc.get("drillsCompleted") or 0,
            preparedness_score=doc.get("preparednessScore") or 0,
            version=doc.get("version", 0),
            created_at=doc.get("createdAt"),
            updated_at=doc.get("updatedAt"),
        )

    def to_document(self) -> dict:
        doc = {
            "name": self.name,
            "email": self.email,
            "passwordHash": self.password_hash,
            "role": self.role,
            "schoolId": self.school_id,
            "drills": [d.to_document() for d in self.drills],
            "drillsCompleted": self.drills_completed,
            "preparednessScore": self.preparedness_score,
            "version": self.version,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
        if self.id is not None:
            doc["_id"] = ObjectId(self.id)
        return doc
