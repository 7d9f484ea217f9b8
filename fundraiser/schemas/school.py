from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class SchoolOut(BaseModel):
    id: int
    user_id: int
    name: str
    admin_name: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    fundraising_goal: float
    created_at: datetime

    class Config:
        from_attributes = True
