"""Manager verification request reviewed by an administrator."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, Boolean, DateTime, Enum, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from hostelhub.models.base.base_model import TimestampModel
from hostelhub.models.base.enums import HostelFor, VerificationStatus

__all__ = ["ManagerVerification"]


class ManagerVerification(TimestampModel):
    __tablename__ = "manager_verifications"

    manager_id: Mapped[str] = mapped_column(
        ForeignKey("manager_profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    initial_hostel_names: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    owner_name: Mapped[str] = mapped_column(String(150), nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    address: Mapped[str] = mapped_column(String(500), nullable=False)
    building_images: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    hostel_for: Mapped[HostelFor] = mapped_column(Enum(HostelFor, name="hostel_for"), nullable=False)
    easypaisa_number: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    jazzcash_number: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    custom_banks: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    accepted_rules: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    status: Mapped[VerificationStatus] = mapped_column(
        Enum(VerificationStatus, name="verification_status"),
        nullable=False,
        default=VerificationStatus.PENDING,
        index=True,
    )
    admin_comment: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    reviewed_by: Mapped[Optional[str]] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    reviewed_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
