from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship

from fundraiser.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    role = Column(String, nullable=False)  # school | student
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # 1:1, a user owns at most one school or one student profile
    school = relationship("School", back_populates="user", uselist=False)
    student = relationship("Student", back_populates="user", uselist=False)
