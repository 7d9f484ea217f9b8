from datetime import datetime

from sqlalchemy import Column, Boolean, Integer, String, Numeric, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from fundraiser.database import Base


class Student(Base):
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    school_id = Column(Integer, ForeignKey("schools.id"), index=True, nullable=False)

    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    grade = Column(String, nullable=False)                  # free-form label, e.g. "5" or "K"
    personal_goal = Column(Numeric(12, 2), nullable=True)
    parent_consent = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="student")
    school = relationship("School", back_populates="students")
    donations = relationship("Donation", back_populates="student")
