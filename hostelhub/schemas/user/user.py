"""
User account and role profile schemas.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from hostelhub.models.base.enums import UserRole
from hostelhub.schemas.common.base import BaseCreateSchema, BaseResponseSchema, BaseSchema, BaseUpdateSchema

__all__ = [
    "UserResponse",
    "StudentSelfVerifyRequest",
    "StudentProfileResponse",
    "ManagerProfileUpdate",
    "ManagerProfileResponse",
    "ManagerHostelSummary",
]


class UserResponse(BaseSchema):
    id: str
    email: str
    role: UserRole
    is_terminated: bool
    created_at: datetime


class StudentSelfVerifyRequest(BaseCreateSchema):
    """Details a student provides once to become self-verified."""

    full_name: str = Field(..., min_length=1, max_length=150)
    phone_number: str = Field(..., min_length=7, max_length=30)
    cnic: Optional[str] = Field(default=None, max_length=30)
    institute: str = Field(..., min_length=1, max_length=200)
    city: str = Field(..., min_length=1, max_length=100)


class StudentProfileResponse(BaseResponseSchema):
    user_id: str
    email: Optional[str] = None
    self_verified: bool
    full_name: Optional[str] = None
    phone_number: Optional[str] = None
    cnic: Optional[str] = None
    institute: Optional[str] = None
    city: Optional[str] = None
    current_hostel_id: Optional[str] = None


class ManagerProfileUpdate(BaseUpdateSchema):
    full_name: Optional[str] = Field(default=None, min_length=1, max_length=150)
    phone_number: Optional[str] = Field(default=None, min_length=7, max_length=30)
    business_name: Optional[str] = Field(default=None, min_length=1, max_length=200)


class ManagerHostelSummary(BaseSchema):
    id: str
    hostel_name: str
    city: str
    is_active: bool


class ManagerProfileResponse(BaseResponseSchema):
    user_id: str
    email: Optional[str] = None
    verified: bool
    full_name: Optional[str] = None
    phone_number: Optional[str] = None
    business_name: Optional[str] = None
    hostels: List[ManagerHostelSummary] = Field(default_factory=list)
