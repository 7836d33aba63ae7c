"""
Booking endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from hostelhub.api.deps import ADMIN_ROLES, get_clock, get_current_user, get_db, require_roles
from hostelhub.api.responses import respond
from hostelhub.models.base.enums import BookingStatus, UserRole
from hostelhub.models.user.user import User
from hostelhub.schemas.booking.booking import (
    BookingCreate,
    BookingDisapprove,
    BookingResponse,
    KickStudentRequest,
    LeaveHostelRequest,
)
from hostelhub.services.booking import BookingService
from hostelhub.utils.datetime_utils import Clock

router = APIRouter(prefix="/bookings", tags=["Bookings"])


def get_booking_service(db: Session = Depends(get_db), clock: Clock = Depends(get_clock)) -> BookingService:
    return BookingService(db, clock)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_booking(
    payload: BookingCreate,
    current_user: User = Depends(require_roles(UserRole.STUDENT)),
    service: BookingService = Depends(get_booking_service),
):
    return respond(
        service.create_booking(current_user.id, payload),
        BookingResponse,
        status_code=status.HTTP_201_CREATED,
    )


@router.get("/my")
def get_my_bookings(
    current_user: User = Depends(require_roles(UserRole.STUDENT, allow_terminated=True)),
    service: BookingService = Depends(get_booking_service),
):
    return respond(service.get_my_bookings(current_user.id), BookingResponse)


@router.post("/leave")
def leave_hostel(
    payload: LeaveHostelRequest,
    current_user: User = Depends(require_roles(UserRole.STUDENT)),
    service: BookingService = Depends(get_booking_service),
):
    """Leave the current hostel and review it."""
    return respond(service.leave_hostel(current_user.id, payload), BookingResponse)


@router.get("/manager")
def get_manager_bookings(
    current_user: User = Depends(require_roles(UserRole.MANAGER, allow_terminated=True)),
    service: BookingService = Depends(get_booking_service),
):
    return respond(service.get_manager_bookings(current_user.id), BookingResponse)


@router.get("/hostel/{hostel_id}")
def get_hostel_bookings(
    hostel_id: str,
    status_filter: Optional[BookingStatus] = Query(default=None, alias="status"),
    current_user: User = Depends(require_roles(UserRole.MANAGER, allow_terminated=True)),
    service: BookingService = Depends(get_booking_service),
):
    return respond(service.get_hostel_bookings(current_user.id, hostel_id, status_filter), BookingResponse)


@router.post("/urgent/complete")
def complete_urgent_bookings(
    current_user: User = Depends(require_roles(UserRole.ADMIN)),
    service: BookingService = Depends(get_booking_service),
):
    """Complete URGENT stays whose leave date has arrived."""
    return respond(service.complete_due_urgent_bookings())


@router.post("/{booking_id}/approve")
def approve_booking(
    booking_id: str,
    current_user: User = Depends(require_roles(UserRole.MANAGER)),
    service: BookingService = Depends(get_booking_service),
):
    return respond(service.approve_booking(current_user.id, booking_id), BookingResponse)


@router.post("/{booking_id}/disapprove")
def disapprove_booking(
    booking_id: str,
    payload: BookingDisapprove,
    current_user: User = Depends(require_roles(UserRole.MANAGER)),
    service: BookingService = Depends(get_booking_service),
):
    return respond(service.disapprove_booking(current_user.id, booking_id, payload), BookingResponse)


@router.post("/{booking_id}/kick")
def kick_student(
    booking_id: str,
    payload: KickStudentRequest,
    current_user: User = Depends(require_roles(UserRole.MANAGER)),
    service: BookingService = Depends(get_booking_service),
):
    return respond(service.kick_student(current_user.id, booking_id, payload), BookingResponse)


@router.get("")
def list_bookings(
    status_filter: Optional[BookingStatus] = Query(default=None, alias="status"),
    current_user: User = Depends(require_roles(*ADMIN_ROLES)),
    service: BookingService = Depends(get_booking_service),
):
    return respond(service.get_all_bookings(status_filter), BookingResponse)


@router.get("/{booking_id}")
def get_booking(
    booking_id: str,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    return respond(service.get_booking(booking_id, current_user), BookingResponse)
