"""
Monthly platform fee endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from hostelhub.api.deps import ADMIN_ROLES, get_clock, get_db, require_roles
from hostelhub.api.responses import respond
from hostelhub.models.base.enums import FeeStatus, UserRole
from hostelhub.models.user.user import User
from hostelhub.schemas.fee.fee import FeeResponse, FeeReview, FeeSubmit
from hostelhub.services.fee import FeeService
from hostelhub.utils.datetime_utils import Clock

router = APIRouter(prefix="/fees", tags=["Monthly Fees"])


def get_fee_service(db: Session = Depends(get_db), clock: Clock = Depends(get_clock)) -> FeeService:
    return FeeService(db, clock)


@router.post("", status_code=status.HTTP_201_CREATED)
def submit_monthly_fee(
    payload: FeeSubmit,
    current_user: User = Depends(require_roles(UserRole.MANAGER)),
    service: FeeService = Depends(get_fee_service),
):
    return respond(
        service.submit_monthly_fee(current_user.id, payload),
        FeeResponse,
        status_code=status.HTTP_201_CREATED,
    )


@router.get("/my")
def get_my_fees(
    current_user: User = Depends(require_roles(UserRole.MANAGER, allow_terminated=True)),
    service: FeeService = Depends(get_fee_service),
):
    return respond(service.get_my_fees(current_user.id), FeeResponse)


@router.get("/pending-summary")
def get_pending_fee_summary(
    current_user: User = Depends(require_roles(UserRole.MANAGER, allow_terminated=True)),
    service: FeeService = Depends(get_fee_service),
):
    """Amount owed this month for each of the manager's hostels."""
    return respond(service.get_pending_fee_summary(current_user.id))


@router.get("")
def list_fees(
    status_filter: Optional[FeeStatus] = Query(default=None, alias="status"),
    current_user: User = Depends(require_roles(*ADMIN_ROLES)),
    service: FeeService = Depends(get_fee_service),
):
    return respond(service.get_all_fees(status_filter), FeeResponse)


@router.post("/{fee_id}/review")
def review_fee(
    fee_id: str,
    payload: FeeReview,
    current_user: User = Depends(require_roles(*ADMIN_ROLES)),
    service: FeeService = Depends(get_fee_service),
):
    return respond(service.review_fee(fee_id, current_user.id, payload), FeeResponse)
