# fundraiser/routers/stats.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from fundraiser.schemas.stats import SchoolStatsOut, StudentStatsOut
from fundraiser.schemas.student import TopStudentOut
from fundraiser.storage import Storage, get_storage
from fundraiser.utils.stats import (
    TOP_STUDENTS_LIMIT,
    get_school_stats,
    get_student_stats,
    get_top_performing_students,
)

router = APIRouter(prefix="/api/stats", tags=["Stats"])


@router.get("/students/{student_id}", response_model=StudentStatsOut)
def student_stats(student_id: int, storage: Storage = Depends(get_storage)):
    """
    Totals of one student:
    - total raised and number of donations
    - largest and average donation (0 when there are none)
    """
    if not storage.get_student(student_id):
        raise HTTPException(status_code=404, detail="Student not found")
    return get_student_stats(storage, student_id)


@router.get("/schools/{school_id}", response_model=SchoolStatsOut)
def school_stats(school_id: int, storage: Storage = Depends(get_storage)):
    if not storage.get_school(school_id):
        raise HTTPException(status_code=404, detail="School not found")
    return get_school_stats(storage, school_id)


@router.get("/schools/{school_id}/top-students", response_model=List[TopStudentOut])
def top_students(
    school_id: int,
    limit: int = Query(TOP_STUDENTS_LIMIT, ge=1, le=100),
    storage: Storage = Depends(get_storage),
):
    """Students ranked by amount raised. goal_progress is not capped at 100 here."""
    if not storage.get_school(school_id):
        raise HTTPException(status_code=404, detail="School not found")
    return get_top_performing_students(storage, school_id, limit)
