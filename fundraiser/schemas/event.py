from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field, field_validator


def _naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    # event dates are stored and compared as naive UTC
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class EventCreate(BaseModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    date: datetime
    location: Optional[str] = None

    @field_validator("date")
    @classmethod
    def date_as_naive_utc(cls, value):
        return _naive_utc(value)


class EventUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    date: Optional[datetime] = None
    location: Optional[str] = None

    @field_validator("title", "date")
    @classmethod
    def not_null(cls, value):
        # title and date may be omitted but never cleared
        if value is None:
            raise ValueError("Field cannot be null")
        return value

    @field_validator("date")
    @classmethod
    def date_as_naive_utc(cls, value):
        return _naive_utc(value)


class EventOut(BaseModel):
    id: int
    school_id: int
    title: str
    description: Optional[str] = None
    date: datetime
    location: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True
