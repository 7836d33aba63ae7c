"""
Hostel endpoints: public search and details, manager CRUD, admin listing.
"""

from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from hostelhub.api.deps import ADMIN_ROLES, get_clock, get_db, require_roles
from hostelhub.api.responses import respond
from hostelhub.models.base.enums import HostelFor, RoomType, UserRole
from hostelhub.models.user.user import User
from hostelhub.schemas.hostel.hostel import (
    HostelCreate,
    HostelResponse,
    HostelSearchParams,
    HostelUpdate,
)
from hostelhub.services.hostel import HostelService
from hostelhub.utils.datetime_utils import Clock

router = APIRouter(prefix="/hostels", tags=["Hostels"])


def get_hostel_service(db: Session = Depends(get_db), clock: Clock = Depends(get_clock)) -> HostelService:
    return HostelService(db, clock)


@router.get("/search")
def search_hostels(
    city: Optional[str] = Query(default=None, max_length=100),
    nearby_location: Optional[str] = Query(default=None, max_length=200),
    room_type: Optional[RoomType] = Query(default=None),
    hostel_for: Optional[HostelFor] = Query(default=None),
    min_price: Optional[Decimal] = Query(default=None, ge=0),
    max_price: Optional[Decimal] = Query(default=None, ge=0),
    service: HostelService = Depends(get_hostel_service),
):
    """Active hostels matching the filters, best rated first."""
    params = HostelSearchParams(
        city=city,
        nearby_location=nearby_location,
        room_type=room_type,
        hostel_for=hostel_for,
        min_price=min_price,
        max_price=max_price,
    )
    return respond(service.search_hostels(params), HostelResponse)


@router.get("/reviews/random")
def random_reviews(
    limit: Optional[int] = Query(default=None, ge=1, le=20),
    service: HostelService = Depends(get_hostel_service),
):
    return respond(service.get_random_reviews(limit))


@router.get("/manager/my")
def get_my_hostels(
    current_user: User = Depends(require_roles(UserRole.MANAGER, allow_terminated=True)),
    service: HostelService = Depends(get_hostel_service),
):
    return respond(service.get_my_hostels(current_user.id), HostelResponse)


@router.get("/admin/all")
def get_all_hostels(
    current_user: User = Depends(require_roles(*ADMIN_ROLES)),
    service: HostelService = Depends(get_hostel_service),
):
    return respond(service.get_all_hostels(), HostelResponse)


@router.get("/{hostel_id}")
def get_hostel(hostel_id: str, service: HostelService = Depends(get_hostel_service)):
    return respond(service.get_hostel(hostel_id))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_hostel(
    payload: HostelCreate,
    current_user: User = Depends(require_roles(UserRole.MANAGER)),
    service: HostelService = Depends(get_hostel_service),
):
    return respond(
        service.create_hostel(current_user.id, payload),
        HostelResponse,
        status_code=status.HTTP_201_CREATED,
    )


@router.patch("/{hostel_id}")
def update_hostel(
    hostel_id: str,
    payload: HostelUpdate,
    current_user: User = Depends(require_roles(UserRole.MANAGER)),
    service: HostelService = Depends(get_hostel_service),
):
    return respond(service.update_hostel(current_user.id, hostel_id, payload), HostelResponse)


@router.delete("/{hostel_id}")
def delete_hostel(
    hostel_id: str,
    current_user: User = Depends(require_roles(UserRole.MANAGER)),
    service: HostelService = Depends(get_hostel_service),
):
    return respond(service.delete_hostel(current_user.id, hostel_id))


@router.get("/{hostel_id}/students")
def get_hostel_students(
    hostel_id: str,
    current_user: User = Depends(require_roles(UserRole.MANAGER, allow_terminated=True)),
    service: HostelService = Depends(get_hostel_service),
):
    return respond(service.get_hostel_students(current_user.id, hostel_id))
