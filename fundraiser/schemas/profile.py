from typing import Optional, Union

from pydantic import BaseModel

from fundraiser.schemas.school import SchoolOut
from fundraiser.schemas.stats import SchoolStatsOut, StudentStatsOut
from fundraiser.schemas.student import StudentOut
from fundraiser.schemas.user import UserResponse


class SchoolRegistered(BaseModel):
    user: UserResponse
    school: SchoolOut
    access_token: str


class StudentRegistered(BaseModel):
    user: UserResponse
    student: StudentOut
    access_token: str


class ProfileOut(BaseModel):
    user: UserResponse
    school: Optional[SchoolOut] = None
    student: Optional[StudentOut] = None
    # student stats for a student profile, school stats for a school profile
    stats: Union[StudentStatsOut, SchoolStatsOut]
