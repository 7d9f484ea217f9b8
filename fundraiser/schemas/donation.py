from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, model_validator

from fundraiser.schemas.student import StudentBrief


class DonationCreate(BaseModel):
    student_id: int
    amount: Decimal = Field(ge=0, max_digits=12, decimal_places=2)
    donor_name: Optional[str] = None
    donor_email: Optional[EmailStr] = None
    message: Optional[str] = None


class DonationOut(BaseModel):
    id: int
    student_id: int
    amount: float
    donor_name: Optional[str] = None
    donor_email: Optional[str] = None
    message: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class RecentDonationOut(DonationOut):
    student: StudentBrief

    @model_validator(mode="before")
    @classmethod
    def _flatten(cls, data):
        # {"donation": <Donation>, "student": {...}} from utils.stats.recent_donations
        if isinstance(data, dict) and "donation" in data:
            fields = DonationOut.model_validate(data["donation"]).model_dump()
            return {**fields, "student": data["student"]}
        return data
