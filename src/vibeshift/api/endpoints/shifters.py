"""Count, check and shift endpoints consumed by the landing page."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from vibeshift.db.session import get_db
from vibeshift.repositories.shifter_repo import ShifterRepository
from vibeshift.schemas.shifter import CheckOut, CountOut, FingerprintIn, ShiftOut
from vibeshift.services.assignment import AssignmentService

router = APIRouter(tags=["shifters"])

# Error message returned with a 500 when the identity store fails, per route path.
STORE_FAILURE_MESSAGES = {
    "/api/count": "Failed to fetch count",
    "/api/check": "Failed to check fingerprint",
    "/api/shift": "Failed to shift",
}

SessionDep = Annotated[Session, Depends(get_db)]


def get_assignment_service(db: SessionDep) -> AssignmentService:
    """Build an assignment service bound to the request's session."""
    return AssignmentService(ShifterRepository(db))


AssignmentServiceDep = Annotated[AssignmentService, Depends(get_assignment_service)]


@router.get("/count")
def get_count(service: AssignmentServiceDep) -> CountOut:
    """Return the global number of claimed membership slots."""
    return service.get_count()


@router.post("/check", response_model_exclude_none=True)
def check_fingerprint(payload: FingerprintIn, service: AssignmentServiceDep) -> CheckOut:
    """Report whether a fingerprint already holds a membership number.

    Unclaimed fingerprints get ``{"shifted": false}`` with no other fields.
    """
    return service.check_status(payload.fingerprint)


@router.post("/shift")
def shift(payload: FingerprintIn, service: AssignmentServiceDep) -> ShiftOut:
    """Claim a membership number; repeated claims return the same number."""
    return service.claim(payload.fingerprint)
