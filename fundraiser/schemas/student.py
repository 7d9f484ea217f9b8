from datetime import datetime
from typing import Optional

from pydantic import BaseModel, model_validator

from fundraiser.schemas.stats import StudentStatsOut


class StudentOut(BaseModel):
    id: int
    user_id: int
    school_id: int
    first_name: str
    last_name: str
    grade: str
    personal_goal: Optional[float] = None
    parent_consent: bool
    created_at: datetime

    class Config:
        from_attributes = True


def _with_student_fields(data, **extra):
    """Flattens {student: <Student>, ...} into the student's own fields plus extras."""
    fields = StudentOut.model_validate(data.student if hasattr(data, "student") else data["student"])
    return {**fields.model_dump(), **extra}


class TopStudentOut(StudentOut):
    amount_raised: float
    goal_progress: int

    @model_validator(mode="before")
    @classmethod
    def _flatten(cls, data):
        # RankedStudent from utils.stats
        if hasattr(data, "student") and hasattr(data, "amount_raised"):
            return _with_student_fields(
                data, amount_raised=data.amount_raised, goal_progress=data.goal_progress
            )
        return data


class RosterStudentOut(StudentOut):
    stats: StudentStatsOut
    goal_progress: int

    @model_validator(mode="before")
    @classmethod
    def _flatten(cls, data):
        if isinstance(data, dict) and "student" in data:
            return _with_student_fields(data, stats=data["stats"], goal_progress=data["goal_progress"])
        return data


class StudentBrief(BaseModel):
    id: int
    first_name: str
    last_name: str

    class Config:
        from_attributes = True
