"""
Reservation endpoints.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from hostelhub.api.deps import get_clock, get_db, require_roles
from hostelhub.api.responses import respond
from hostelhub.models.base.enums import UserRole
from hostelhub.models.user.user import User
from hostelhub.schemas.reservation.reservation import (
    ReservationCreate,
    ReservationResponse,
    ReservationReview,
)
from hostelhub.services.reservation import ReservationService
from hostelhub.utils.datetime_utils import Clock

router = APIRouter(prefix="/reservations", tags=["Reservations"])


def get_reservation_service(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> ReservationService:
    return ReservationService(db, clock)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_reservation(
    payload: ReservationCreate,
    current_user: User = Depends(require_roles(UserRole.STUDENT)),
    service: ReservationService = Depends(get_reservation_service),
):
    return respond(
        service.create_reservation(current_user.id, payload),
        ReservationResponse,
        status_code=status.HTTP_201_CREATED,
    )


@router.get("/my")
def get_my_reservations(
    current_user: User = Depends(require_roles(UserRole.STUDENT, allow_terminated=True)),
    service: ReservationService = Depends(get_reservation_service),
):
    return respond(service.get_my_reservations(current_user.id), ReservationResponse)


@router.post("/{reservation_id}/cancel")
def cancel_reservation(
    reservation_id: str,
    current_user: User = Depends(require_roles(UserRole.STUDENT)),
    service: ReservationService = Depends(get_reservation_service),
):
    return respond(service.cancel_reservation(current_user.id, reservation_id), ReservationResponse)


@router.get("/hostel/{hostel_id}")
def get_hostel_reservations(
    hostel_id: str,
    current_user: User = Depends(require_roles(UserRole.MANAGER, allow_terminated=True)),
    service: ReservationService = Depends(get_reservation_service),
):
    return respond(service.get_hostel_reservations(current_user.id, hostel_id), ReservationResponse)


@router.post("/{reservation_id}/review")
def review_reservation(
    reservation_id: str,
    payload: ReservationReview,
    current_user: User = Depends(require_roles(UserRole.MANAGER)),
    service: ReservationService = Depends(get_reservation_service),
):
    return respond(
        service.review_reservation(current_user.id, reservation_id, payload),
        ReservationResponse,
    )
