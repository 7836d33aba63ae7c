"""
Monthly platform fee owed by a manager for one hostel.

One record per ``(manager_id, hostel_id, month)``. An APPROVED record is
re-opened to PENDING when new REGULAR students join in the same month.
"""

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import DateTime, Enum, ForeignKey, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hostelhub.models.base.base_model import TimestampModel
from hostelhub.models.base.enums import FeeStatus

if TYPE_CHECKING:
    from hostelhub.models.hostel.hostel import Hostel

__all__ = ["MonthlyAdminFee"]


class MonthlyAdminFee(TimestampModel):
    __tablename__ = "monthly_admin_fees"
    __table_args__ = (
        UniqueConstraint("manager_id", "hostel_id", "month", name="uq_monthly_fee_period"),
    )

    manager_id: Mapped[str] = mapped_column(
        ForeignKey("manager_profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    hostel_id: Mapped[str] = mapped_column(
        ForeignKey("hostels.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    month: Mapped[str] = mapped_column(String(7), nullable=False, comment="YYYY-MM")
    student_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_revenue: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0"))
    fee_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0"))
    payment_proof_image: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    submitted_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    status: Mapped[FeeStatus] = mapped_column(
        Enum(FeeStatus, name="fee_status"),
        nullable=False,
        default=FeeStatus.PENDING,
        index=True,
    )
    reviewed_by: Mapped[Optional[str]] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    reviewed_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    hostel: Mapped["Hostel"] = relationship(foreign_keys=[hostel_id])
