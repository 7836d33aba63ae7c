"""
Manager verification schemas.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field, HttpUrl, field_validator

from hostelhub.models.base.enums import HostelFor, VerificationStatus
from hostelhub.schemas.common.base import BaseCreateSchema, BaseResponseSchema, BaseSchema

__all__ = [
    "CustomBankAccount",
    "VerificationSubmit",
    "VerificationReview",
    "VerificationResponse",
]


class CustomBankAccount(BaseSchema):
    bank_name: str = Field(..., min_length=1, max_length=100)
    account_number: str = Field(..., min_length=1, max_length=50)
    iban: Optional[str] = Field(default=None, max_length=50)


class VerificationSubmit(BaseCreateSchema):
    initial_hostel_names: List[str] = Field(..., min_length=1)
    owner_name: str = Field(..., min_length=1, max_length=150)
    city: str = Field(..., min_length=1, max_length=100)
    address: str = Field(..., min_length=1, max_length=500)
    building_images: List[HttpUrl] = Field(default_factory=list)
    hostel_for: HostelFor
    easypaisa_number: Optional[str] = Field(default=None, max_length=30)
    jazzcash_number: Optional[str] = Field(default=None, max_length=30)
    custom_banks: List[CustomBankAccount] = Field(default_factory=list)
    accepted_rules: bool

    @field_validator("accepted_rules")
    @classmethod
    def validate_accepted_rules(cls, v: bool) -> bool:
        if v is not True:
            raise ValueError("Must accept rules")
        return v


class VerificationReview(BaseSchema):
    status: VerificationStatus
    admin_comment: Optional[str] = Field(default=None, max_length=2000)

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: VerificationStatus) -> VerificationStatus:
        if v not in (VerificationStatus.APPROVED, VerificationStatus.REJECTED):
            raise ValueError("Status must be APPROVED or REJECTED")
        return v


class VerificationResponse(BaseResponseSchema):
    manager_id: str
    initial_hostel_names: List[str]
    owner_name: str
    city: str
    address: str
    building_images: List[str]
    hostel_for: HostelFor
    easypaisa_number: Optional[str] = None
    jazzcash_number: Optional[str] = None
    custom_banks: List[CustomBankAccount]
    accepted_rules: bool
    status: VerificationStatus
    admin_comment: Optional[str] = None
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
