import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from fundraiser.models import School, User
from fundraiser.schemas.dashboard import SchoolDashboardOut, SchoolPageOut
from fundraiser.schemas.event import EventCreate, EventOut
from fundraiser.schemas.school import SchoolOut
from fundraiser.schemas.student import RosterStudentOut
from fundraiser.storage import Storage, get_storage
from fundraiser.utils.auth import require_role
from fundraiser.utils.dashboards import school_dashboard, school_page, school_roster

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/schools", tags=["Schools"])


def get_school_or_404(storage: Storage, school_id: int) -> School:
    school = storage.get_school(school_id)
    if not school:
        raise HTTPException(status_code=404, detail="School not found")
    return school


def get_own_school(storage: Storage, user: User, school_id: int) -> School:
    """The school administered by `user`, which must be `school_id`."""
    school = storage.get_school_by_user_id(user.id)
    if not school or school.id != school_id:
        logger.warning("User %s denied access to school %s", user.id, school_id)
        raise HTTPException(status_code=403, detail="Access denied")
    return school


@router.get("", response_model=List[SchoolOut])
def list_schools(storage: Storage = Depends(get_storage)):
    """Public list of schools, used by the student registration form."""
    return storage.get_all_schools()


@router.get("/dashboard", response_model=SchoolDashboardOut)
def get_school_dashboard(
    user: User = Depends(require_role("school")),
    storage: Storage = Depends(get_storage),
):
    school = storage.get_school_by_user_id(user.id)
    if not school:
        raise HTTPException(status_code=404, detail="School not found")
    return school_dashboard(storage, school)


@router.get("/{school_id}", response_model=SchoolPageOut)
def get_school_page(school_id: int, storage: Storage = Depends(get_storage)):
    """Public school page: progress, leaders and the next events."""
    school = get_school_or_404(storage, school_id)
    return school_page(storage, school)


@router.get("/{school_id}/students", response_model=List[RosterStudentOut])
def list_school_students(
    school_id: int,
    user: User = Depends(require_role("school")),
    storage: Storage = Depends(get_storage),
):
    get_own_school(storage, user, school_id)
    return school_roster(storage, school_id)


@router.get("/{school_id}/events", response_model=List[EventOut])
def list_school_events(school_id: int, storage: Storage = Depends(get_storage)):
    get_school_or_404(storage, school_id)
    return sorted(storage.get_events_by_school_id(school_id), key=lambda e: e.date)


@router.post("/{school_id}/events", response_model=EventOut, status_code=status.HTTP_201_CREATED)
def create_school_event(
    school_id: int,
    payload: EventCreate,
    user: User = Depends(require_role("school")),
    storage: Storage = Depends(get_storage),
):
    get_own_school(storage, user, school_id)
    event = storage.create_event({**payload.model_dump(), "school_id": school_id})
    logger.info("Event %s created for school %s", event.id, school_id)
    return event
