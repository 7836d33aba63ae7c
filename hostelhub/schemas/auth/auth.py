"""
Registration and login schemas.
"""

from pydantic import EmailStr, Field, field_validator

from hostelhub.models.base.enums import UserRole
from hostelhub.schemas.common.base import BaseCreateSchema, BaseSchema
from hostelhub.schemas.user.user import UserResponse

__all__ = ["RegisterRequest", "LoginRequest", "TokenResponse"]

SELF_REGISTER_ROLES = (UserRole.STUDENT, UserRole.MANAGER)


class RegisterRequest(BaseCreateSchema):
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    role: UserRole

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("role")
    @classmethod
    def validate_role(cls, v: UserRole) -> UserRole:
        if v not in SELF_REGISTER_ROLES:
            raise ValueError("Role must be STUDENT or MANAGER")
        return v


class LoginRequest(BaseSchema):
    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class TokenResponse(BaseSchema):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
