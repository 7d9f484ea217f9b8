import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from fundraiser.models import Event, User
from fundraiser.schemas.event import EventOut, EventUpdate
from fundraiser.storage import Storage, get_storage
from fundraiser.utils.auth import require_role

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/events", tags=["Events"])


def get_managed_event(storage: Storage, user: User, event_id: int) -> Event:
    event = storage.get_event(event_id)
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")

    school = storage.get_school_by_user_id(user.id)
    if not school or school.id != event.school_id:
        logger.warning("User %s denied access to event %s", user.id, event_id)
        raise HTTPException(status_code=403, detail="Access denied")
    return event


@router.put("/{event_id}", response_model=EventOut)
def update_event(
    event_id: int,
    payload: EventUpdate,
    user: User = Depends(require_role("school")),
    storage: Storage = Depends(get_storage),
):
    """Partial update, only the fields present in the body change."""
    get_managed_event(storage, user, event_id)
    event = storage.update_event(event_id, payload.model_dump(exclude_unset=True))
    logger.info("Event %s updated", event_id)
    return event


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_event(
    event_id: int,
    user: User = Depends(require_role("school")),
    storage: Storage = Depends(get_storage),
):
    get_managed_event(storage, user, event_id)
    storage.delete_event(event_id)
    logger.info("Event %s deleted", event_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
