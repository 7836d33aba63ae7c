"""
FastAPI dependencies: database session, clock, image storage and the
authenticated user with role checks.
"""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from hostelhub.core.exceptions import AccountTerminatedError, AuthenticationError, AuthorizationError
from hostelhub.core.logging import user_id as user_id_var
from hostelhub.core.security import verify_access_token
from hostelhub.db.session import get_db
from hostelhub.integrations.storage import ImageStorage, get_image_storage
from hostelhub.models.base.enums import UserRole
from hostelhub.models.user.user import User
from hostelhub.utils.datetime_utils import Clock, utcnow

# Missing credentials are reported as 401 by get_current_user
security = HTTPBearer(auto_error=False)

ADMIN_ROLES = (UserRole.ADMIN, UserRole.SUBADMIN)


def get_clock() -> Clock:
    return utcnow


def get_storage() -> ImageStorage:
    return get_image_storage()


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    if credentials is None:
        raise AuthenticationError("Authentication required")

    payload = verify_access_token(credentials.credentials)
    user = db.get(User, payload["sub"])
    if user is None:
        raise AuthenticationError("User no longer exists")

    user_id_var.set(user.id)
    return user


async def require_active_user(current_user: User = Depends(get_current_user)) -> User:
    """Authenticated user whose account has not been terminated."""
    if current_user.is_terminated:
        raise AccountTerminatedError()
    return current_user


class RoleChecker:
    """
    Dependency allowing only the given roles.

    Terminated accounts are rejected unless ``allow_terminated`` is set,
    which read-only endpoints use.
    """

    def __init__(self, *roles: UserRole, allow_terminated: bool = False):
        self.roles = roles
        self.allow_terminated = allow_terminated

    async def __call__(self, current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in self.roles:
            raise AuthorizationError(
                "You do not have permission to perform this action",
                required_role=" or ".join(role.value for role in self.roles),
            )
        if current_user.is_terminated and not self.allow_terminated:
            raise AccountTerminatedError()
        return current_user


def require_roles(*roles: UserRole, allow_terminated: bool = False) -> RoleChecker:
    return RoleChecker(*roles, allow_terminated=allow_terminated)


__all__ = [
    "ADMIN_ROLES",
    "get_db",
    "get_clock",
    "get_storage",
    "get_current_user",
    "require_active_user",
    "require_roles",
]
