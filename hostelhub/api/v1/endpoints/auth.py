"""
Authentication endpoints.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from hostelhub.api.deps import get_clock, get_current_user, get_db
from hostelhub.api.responses import respond
from hostelhub.models.user.user import User
from hostelhub.schemas.auth.auth import LoginRequest, RegisterRequest
from hostelhub.schemas.user.user import UserResponse
from hostelhub.services.auth import AuthService
from hostelhub.utils.datetime_utils import Clock

router = APIRouter(prefix="/auth", tags=["Authentication"])


def get_auth_service(db: Session = Depends(get_db), clock: Clock = Depends(get_clock)) -> AuthService:
    return AuthService(db, clock)


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, service: AuthService = Depends(get_auth_service)):
    """Register a student or manager account and return an access token."""
    return respond(service.register(payload), status_code=status.HTTP_201_CREATED)


@router.post("/login")
def login(payload: LoginRequest, service: AuthService = Depends(get_auth_service)):
    return respond(service.login(payload))


@router.get("/me")
def me(
    current_user: User = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
):
    return respond(service.me(current_user.id), UserResponse)
