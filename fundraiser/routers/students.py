import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from fundraiser.models import User
from fundraiser.schemas.dashboard import StudentDashboardOut
from fundraiser.schemas.donation import DonationOut
from fundraiser.storage import Storage, get_storage
from fundraiser.utils.auth import get_current_user, require_role
from fundraiser.utils.dashboards import student_dashboard
from fundraiser.utils.stats import newest_first

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/students", tags=["Students"])


@router.get("/dashboard", response_model=StudentDashboardOut)
def get_student_dashboard(
    user: User = Depends(require_role("student")),
    storage: Storage = Depends(get_storage),
):
    student = storage.get_student_by_user_id(user.id)
    if not student:
        raise HTTPException(status_code=404, detail="Student not found")

    school = storage.get_school(student.school_id)
    if not school:
        raise HTTPException(status_code=404, detail="School not found")

    return student_dashboard(storage, student, school)


@router.get("/{student_id}/donations", response_model=List[DonationOut])
def list_student_donations(
    student_id: int,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """
    Donation history of a student, newest first.
    Visible to the student themselves and to the admin of their school.
    """
    student = storage.get_student(student_id)
    if not student:
        raise HTTPException(status_code=404, detail="Student not found")

    if user.role == "student":
        own = storage.get_student_by_user_id(user.id)
        allowed = own is not None and own.id == student_id
    elif user.role == "school":
        own_school = storage.get_school_by_user_id(user.id)
        allowed = own_school is not None and own_school.id == student.school_id
    else:
        allowed = False

    if not allowed:
        logger.warning("User %s denied access to donations of student %s", user.id, student_id)
        raise HTTPException(status_code=403, detail="Access denied")

    return newest_first(storage.get_donations_by_student_id(student_id))
