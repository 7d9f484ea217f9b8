from typing import List

from pydantic import BaseModel

from fundraiser.schemas.donation import DonationOut, RecentDonationOut
from fundraiser.schemas.event import EventOut
from fundraiser.schemas.school import SchoolOut
from fundraiser.schemas.stats import GradeRankingOut, SchoolStatsOut, StudentStatsOut
from fundraiser.schemas.student import StudentOut, TopStudentOut


class SchoolDashboardOut(BaseModel):
    school: SchoolOut
    stats: SchoolStatsOut
    top_students: List[TopStudentOut]
    recent_donations: List[RecentDonationOut]


class StudentDashboardOut(BaseModel):
    student: StudentOut
    school: SchoolOut
    stats: StudentStatsOut
    goal_progress: int
    school_stats: SchoolStatsOut
    school_goal_progress: int
    class_rankings: List[GradeRankingOut]
    recent_donations: List[DonationOut]
    days_remaining: int


class SchoolPageOut(BaseModel):
    school: SchoolOut
    stats: SchoolStatsOut
    goal_progress: int
    top_students: List[TopStudentOut]
    upcoming_events: List[EventOut]
