# fundraiser/models/school.py
from datetime import datetime

from sqlalchemy import Column, Integer, String, Numeric, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from fundraiser.database import Base


class School(Base):
    """
    A school running a fundraising campaign.
    The campaign window is counted from created_at, there is no stored end date.
    """
    __tablename__ = "schools"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    name = Column(String, nullable=False)
    admin_name = Column(String, nullable=True)
    address = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    fundraising_goal = Column(Numeric(12, 2), nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="school")
    students = relationship("Student", back_populates="school")
    events = relationship("Event", back_populates="school", cascade="all, delete-orphan")
