"""
Authentication service: registration, login and the current user.
"""

from typing import Optional

from sqlalchemy.orm import Session

from hostelhub.core.exceptions import AuthenticationError, ConflictError, UserNotFoundError
from hostelhub.core.security import create_access_token, hash_password, verify_password
from hostelhub.models.base.enums import UserRole
from hostelhub.models.user.user import ManagerProfile, StudentProfile, User
from hostelhub.repositories.user.user_repository import (
    ManagerProfileRepository,
    StudentProfileRepository,
    UserRepository,
)
from hostelhub.schemas.auth.auth import LoginRequest, RegisterRequest, TokenResponse
from hostelhub.schemas.user.user import UserResponse
from hostelhub.services.base import BaseService, ServiceResult
from hostelhub.utils.datetime_utils import Clock


class AuthService(BaseService):
    """
    Account registration and credential checks.

    Terminated users can still log in; the API blocks their mutations.
    """

    def __init__(self, db_session: Session, clock: Optional[Clock] = None):
        super().__init__(db_session, clock)
        self.users = UserRepository(db_session)
        self.students = StudentProfileRepository(db_session)
        self.managers = ManagerProfileRepository(db_session)

    def register(self, data: RegisterRequest) -> ServiceResult[TokenResponse]:
        """
        Create a user together with its empty role profile.

        Returns:
            ServiceResult with an access token for the new account
        """
        try:
            if self.users.find_by_email(data.email) is not None:
                raise ConflictError("Email already registered")

            with self.transaction():
                user = self.users.create(
                    User(
                        email=data.email,
                        password_hash=hash_password(data.password),
                        role=data.role,
                    )
                )
                if data.role == UserRole.STUDENT:
                    self.students.create(StudentProfile(user_id=user.id))
                else:
                    self.managers.create(ManagerProfile(user_id=user.id))

            self._logger.info(f"User {user.id} registered", extra={"role": data.role.value})
            return ServiceResult.success(
                self._token_for(user),
                message="Registration successful",
            )
        except Exception as e:
            return self._handle_exception(e, "register user", data.email)

    def login(self, data: LoginRequest) -> ServiceResult[TokenResponse]:
        try:
            user = self.users.find_by_email(data.email)
            if user is None or not verify_password(data.password, user.password_hash):
                raise AuthenticationError("Invalid email or password")

            self._logger.info(f"User {user.id} logged in")
            return ServiceResult.success(self._token_for(user), message="Login successful")
        except Exception as e:
            return self._handle_exception(e, "login", data.email)

    def me(self, user_id: str) -> ServiceResult[User]:
        try:
            user = self.users.find_by_id(user_id)
            if user is None:
                raise UserNotFoundError(user_id)
            return ServiceResult.success(user)
        except Exception as e:
            return self._handle_exception(e, "get current user", user_id)

    @staticmethod
    def _token_for(user: User) -> TokenResponse:
        return TokenResponse(
            access_token=create_access_token(user.id, user.role.value),
            user=UserResponse.model_validate(user),
        )
