from pydantic import BaseModel


class StudentStatsOut(BaseModel):
    total_raised: float
    total_donations: int
    largest_donation: float
    average_donation: float

    class Config:
        from_attributes = True


class SchoolStatsOut(BaseModel):
    total_raised: float
    total_donations: int
    active_students: int

    class Config:
        from_attributes = True


class GradeRankingOut(BaseModel):
    grade: str
    total_raised: float
    student_count: int
    percentage: int

    class Config:
        from_attributes = True
