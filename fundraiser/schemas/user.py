from datetime import datetime
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator


class UserCreate(BaseModel):
    username: str = Field(min_length=3)
    email: EmailStr
    password: str = Field(min_length=6)
    role: Literal["school", "student"]


class UserResponse(BaseModel):
    id: int
    username: str
    email: EmailStr
    role: str
    created_at: datetime

    class Config:
        from_attributes = True


class SchoolRegister(BaseModel):
    username: str = Field(min_length=3)
    email: EmailStr
    password: str = Field(min_length=6)
    confirm_password: Optional[str] = None
    school_name: str = Field(min_length=1)
    admin_name: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    fundraising_goal: Decimal = Field(default=Decimal("0"), ge=0, max_digits=12, decimal_places=2)

    @model_validator(mode="after")
    def passwords_match(self):
        if self.confirm_password is not None and self.confirm_password != self.password:
            raise ValueError("Passwords do not match")
        return self


class StudentRegister(BaseModel):
    username: str = Field(min_length=3)
    email: EmailStr
    password: str = Field(min_length=6)
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    grade: str = Field(min_length=1)
    school_id: int
    personal_goal: Optional[Decimal] = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    parent_consent: bool

    @field_validator("parent_consent")
    @classmethod
    def consent_given(cls, value):
        if not value:
            raise ValueError("Parent consent is required to register a student")
        return value


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
