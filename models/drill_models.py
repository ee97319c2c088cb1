from pydantic import BaseModel, StrictFloat, StrictInt
from typing import Any, List, Optional, Union

from models.user_model import DrillEntry


class DrillSubmission(BaseModel):
    drillName: Optional[str] = None
    score: Optional[Any] = None  # checked by validate_drill_submission

class ProgressOverride(BaseModel):
    preparednessScore: Optional[Union[StrictInt, StrictFloat]] = None
    drillsCompleted: Optional[StrictInt] = None

class DrillCompletionResponse(BaseModel):
    message: str = "Drill completion recorded successfully"
    drillsCompleted: int
    preparednessScore: Union[int, float]
    completedDrills: List[str]

class DrillHistoryResponse(BaseModel):
    studentId: str
    drills: List[DrillEntry]
    drillsCompleted: int
    preparednessScore: Union[int, float]
