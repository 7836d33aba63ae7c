"""
User profile, moderation and account endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from hostelhub.api.deps import ADMIN_ROLES, get_clock, get_current_user, get_db, require_roles
from hostelhub.api.responses import respond
from hostelhub.models.base.enums import UserRole
from hostelhub.models.user.user import User
from hostelhub.schemas.user.user import (
    ManagerProfileResponse,
    ManagerProfileUpdate,
    StudentProfileResponse,
    StudentSelfVerifyRequest,
    UserResponse,
)
from hostelhub.services.user import UserService
from hostelhub.utils.datetime_utils import Clock

router = APIRouter(prefix="/users", tags=["Users"])


def get_user_service(db: Session = Depends(get_db), clock: Clock = Depends(get_clock)) -> UserService:
    return UserService(db, clock)


@router.post("/student/self-verify")
def self_verify(
    payload: StudentSelfVerifyRequest,
    current_user: User = Depends(require_roles(UserRole.STUDENT)),
    service: UserService = Depends(get_user_service),
):
    return respond(service.self_verify_student(current_user.id, payload), StudentProfileResponse)


@router.get("/student/profile")
def get_student_profile(
    current_user: User = Depends(require_roles(UserRole.STUDENT, allow_terminated=True)),
    service: UserService = Depends(get_user_service),
):
    return respond(service.get_student_profile(current_user.id), StudentProfileResponse)


@router.get("/manager/profile")
def get_manager_profile(
    current_user: User = Depends(require_roles(UserRole.MANAGER, allow_terminated=True)),
    service: UserService = Depends(get_user_service),
):
    return respond(service.get_manager_profile(current_user.id), ManagerProfileResponse)


@router.patch("/manager/profile")
def update_manager_profile(
    payload: ManagerProfileUpdate,
    current_user: User = Depends(require_roles(UserRole.MANAGER)),
    service: UserService = Depends(get_user_service),
):
    return respond(service.update_manager_profile(current_user.id, payload), ManagerProfileResponse)


@router.get("")
def list_users(
    role: Optional[UserRole] = Query(default=None),
    current_user: User = Depends(require_roles(*ADMIN_ROLES)),
    service: UserService = Depends(get_user_service),
):
    return respond(service.get_all_users(role), UserResponse)


@router.post("/{user_id}/terminate")
def terminate_user(
    user_id: str,
    current_user: User = Depends(require_roles(*ADMIN_ROLES)),
    service: UserService = Depends(get_user_service),
):
    return respond(service.terminate_user(user_id, current_user.id), UserResponse)


@router.delete("/delete")
def delete_my_account(
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    """Permanently delete the caller's account and everything it owns."""
    return respond(service.delete_my_account(current_user.id))
