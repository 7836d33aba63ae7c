"""
Manager verification endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from hostelhub.api.deps import ADMIN_ROLES, get_clock, get_db, require_roles
from hostelhub.api.responses import respond
from hostelhub.models.base.enums import UserRole, VerificationStatus
from hostelhub.models.user.user import User
from hostelhub.schemas.verification.verification import (
    VerificationResponse,
    VerificationReview,
    VerificationSubmit,
)
from hostelhub.services.verification import VerificationService
from hostelhub.utils.datetime_utils import Clock

router = APIRouter(prefix="/verifications", tags=["Manager Verification"])


def get_verification_service(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> VerificationService:
    return VerificationService(db, clock)


@router.post("", status_code=status.HTTP_201_CREATED)
def submit_verification(
    payload: VerificationSubmit,
    current_user: User = Depends(require_roles(UserRole.MANAGER)),
    service: VerificationService = Depends(get_verification_service),
):
    return respond(
        service.submit_verification(current_user.id, payload),
        VerificationResponse,
        status_code=status.HTTP_201_CREATED,
    )


@router.get("/my")
def get_my_verifications(
    current_user: User = Depends(require_roles(UserRole.MANAGER, allow_terminated=True)),
    service: VerificationService = Depends(get_verification_service),
):
    return respond(service.get_my_verifications(current_user.id), VerificationResponse)


@router.get("")
def list_verifications(
    status_filter: Optional[VerificationStatus] = Query(default=None, alias="status"),
    current_user: User = Depends(require_roles(*ADMIN_ROLES)),
    service: VerificationService = Depends(get_verification_service),
):
    return respond(service.get_all_verifications(status_filter), VerificationResponse)


@router.get("/{verification_id}")
def get_verification(
    verification_id: str,
    current_user: User = Depends(require_roles(*ADMIN_ROLES)),
    service: VerificationService = Depends(get_verification_service),
):
    return respond(service.get_verification(verification_id), VerificationResponse)


@router.post("/{verification_id}/review")
def review_verification(
    verification_id: str,
    payload: VerificationReview,
    current_user: User = Depends(require_roles(*ADMIN_ROLES)),
    service: VerificationService = Depends(get_verification_service),
):
    return respond(
        service.review_verification(verification_id, current_user.id, payload),
        VerificationResponse,
    )
