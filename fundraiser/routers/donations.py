import logging

from fastapi import APIRouter, Depends, HTTPException, status

from fundraiser.schemas.donation import DonationCreate, DonationOut
from fundraiser.storage import Storage, get_storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/donations", tags=["Donations"])


@router.post("", response_model=DonationOut, status_code=status.HTTP_201_CREATED)
def create_donation(payload: DonationCreate, storage: Storage = Depends(get_storage)):
    """Donations are public, donors do not need an account."""
    if not storage.get_student(payload.student_id):
        raise HTTPException(status_code=404, detail="Student not found")

    donation = storage.create_donation(payload.model_dump())
    logger.info("Donation %s of %s to student %s", donation.id, donation.amount, donation.student_id)
    return donation
