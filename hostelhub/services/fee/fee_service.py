"""
Monthly platform fee service.

Managers owe ``FEE_PER_STUDENT`` for every REGULAR booking created in a
calendar month that reached APPROVED, whether the student is still there
(APPROVED) or has since left or completed the stay. URGENT bookings are
never charged.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from hostelhub.config.settings import settings
from hostelhub.core.exceptions import InvalidStateError, ResourceNotFoundError
from hostelhub.models.audit.audit_log import SYSTEM_ACTOR
from hostelhub.models.base.enums import FeeStatus
from hostelhub.models.fee.monthly_admin_fee import MonthlyAdminFee
from hostelhub.repositories.audit.audit_repository import AuditLogRepository
from hostelhub.repositories.booking.booking_repository import BookingRepository
from hostelhub.repositories.fee.fee_repository import MonthlyFeeRepository
from hostelhub.schemas.fee.fee import FeeReview, FeeSubmit, PendingFeeSummary
from hostelhub.services.base import BaseService, ProfileLookupMixin, ServiceResult
from hostelhub.utils.datetime_utils import Clock, DateRangeCalculator

FEE_TARGET_TYPE = "MonthlyAdminFee"


class FeeService(ProfileLookupMixin, BaseService):
    """Submission, review and re-opening of monthly platform fees."""

    def __init__(self, db_session: Session, clock: Optional[Clock] = None):
        super().__init__(db_session, clock)
        self.fees = MonthlyFeeRepository(db_session)
        self.bookings = BookingRepository(db_session)
        self.audit = AuditLogRepository(db_session)

    def _month_stats(self, hostel_id: str, month: str) -> Tuple[int, Decimal]:
        window_start, window_end = DateRangeCalculator.month_window(month)
        return self.bookings.regular_month_stats(hostel_id, window_start, window_end)

    @staticmethod
    def _fee_for(student_count: int) -> Decimal:
        return Decimal(student_count * settings.FEE_PER_STUDENT)

    # -------------------------------------------------------------------------
    # Manager operations
    # -------------------------------------------------------------------------

    def submit_monthly_fee(self, user_id: str, data: FeeSubmit) -> ServiceResult[MonthlyAdminFee]:
        """
        Submit (or resubmit) the fee for one hostel and month.

        A PENDING record blocks resubmission until reviewed. An APPROVED
        record can only be resubmitted once more students have been counted.
        A REJECTED record is always replaced.
        """
        try:
            manager = self._manager_profile(user_id)
            hostel = self._owned_hostel(manager, data.hostel_id)

            student_count, total_revenue = self._month_stats(hostel.id, data.month)
            values = {
                "student_count": student_count,
                "total_revenue": total_revenue,
                "fee_amount": self._fee_for(student_count),
                "payment_proof_image": str(data.payment_proof_image) if data.payment_proof_image else None,
                "submitted_at": self.now(),
                "status": FeeStatus.PENDING,
                "reviewed_by": None,
                "reviewed_at": None,
            }

            existing = self.fees.find_period(manager.id, hostel.id, data.month)
            if existing is not None:
                if existing.status == FeeStatus.PENDING:
                    raise InvalidStateError(
                        "Fee already submitted for this month and pending review",
                        current_status=existing.status.value,
                    )
                if existing.status == FeeStatus.APPROVED and student_count <= existing.student_count:
                    raise InvalidStateError(
                        "Fee already approved for this month with same student count",
                        current_status=existing.status.value,
                    )

            with self.transaction():
                if existing is not None:
                    fee = self.fees.update(existing, values)
                else:
                    fee = self.fees.create(
                        MonthlyAdminFee(
                            manager_id=manager.id,
                            hostel_id=hostel.id,
                            month=data.month,
                            **values,
                        )
                    )

            self._logger.info(
                f"Monthly fee submitted for hostel {hostel.id}",
                extra={
                    "month": data.month,
                    "student_count": student_count,
                    "fee_amount": str(fee.fee_amount),
                    "resubmission": existing is not None,
                },
            )
            return ServiceResult.success(fee, message="Monthly fee submitted successfully")
        except Exception as e:
            return self._handle_exception(e, "submit monthly fee", data.hostel_id)

    def get_my_fees(self, user_id: str) -> ServiceResult[List[MonthlyAdminFee]]:
        try:
            manager = self._manager_profile(user_id)
            return ServiceResult.success(self.fees.find_by_manager(manager.id))
        except Exception as e:
            return self._handle_exception(e, "get manager fees", user_id)

    def get_pending_fee_summary(self, user_id: str) -> ServiceResult[List[PendingFeeSummary]]:
        """
        What the manager owes for the current month, per hostel.

        An APPROVED fee whose student count has since grown is shown as
        PENDING with the additional amount due.
        """
        try:
            manager = self._manager_profile(user_id)
            month = DateRangeCalculator.month_key(self.now())

            summary = []
            for hostel in manager.hostels:
                existing = self.fees.find_period(manager.id, hostel.id, month)
                active_students, _ = self._month_stats(hostel.id, month)

                approved = existing is not None and existing.status == FeeStatus.APPROVED
                paid_count = existing.student_count if approved else 0
                additional = max(0, active_students - paid_count)
                needs_additional = approved and additional > 0

                status = existing.status if existing is not None else None
                if needs_additional:
                    status = FeeStatus.PENDING

                summary.append(
                    PendingFeeSummary(
                        hostel_id=hostel.id,
                        hostel_name=hostel.hostel_name,
                        month=month,
                        active_students=active_students,
                        paid_student_count=paid_count,
                        additional_students=additional if needs_additional else 0,
                        fee_amount=float(self._fee_for(active_students)),
                        additional_fee_amount=float(self._fee_for(additional)) if needs_additional else 0.0,
                        submitted=existing is not None and not needs_additional,
                        status=status,
                        needs_additional_payment=needs_additional,
                        note=(
                            f"{additional} new student(s) joined after fee was approved. "
                            "Please submit updated payment."
                            if needs_additional
                            else None
                        ),
                    )
                )
            return ServiceResult.success(summary)
        except Exception as e:
            return self._handle_exception(e, "get pending fee summary", user_id)

    # -------------------------------------------------------------------------
    # Admin operations
    # -------------------------------------------------------------------------

    def get_all_fees(self, status: Optional[FeeStatus] = None) -> ServiceResult[List[MonthlyAdminFee]]:
        try:
            return ServiceResult.success(self.fees.find_all_by_status(status))
        except Exception as e:
            return self._handle_exception(e, "get all fees")

    def review_fee(self, fee_id: str, reviewer_id: str, data: FeeReview) -> ServiceResult[MonthlyAdminFee]:
        try:
            fee = self.fees.find_by_id(fee_id)
            if fee is None:
                raise ResourceNotFoundError("Fee record", fee_id)
            if fee.status != FeeStatus.PENDING:
                raise InvalidStateError("Fee already reviewed", current_status=fee.status.value)

            with self.transaction():
                self.fees.update(
                    fee,
                    {"status": data.status, "reviewed_by": reviewer_id, "reviewed_at": self.now()},
                )
                self.audit.log(
                    f"MONTHLY_FEE_{data.status.value}",
                    reviewer_id,
                    FEE_TARGET_TYPE,
                    fee.id,
                    {"hostel_id": fee.hostel_id, "month": fee.month},
                )

            self._logger.info(f"Monthly fee {fee.id} reviewed", extra={"status": data.status.value})
            return ServiceResult.success(fee, message=f"Fee {data.status.value.lower()}")
        except Exception as e:
            return self._handle_exception(e, "review fee", fee_id)

    # -------------------------------------------------------------------------
    # Re-opening after new approvals
    # -------------------------------------------------------------------------

    def reset_fee_for_new_student(self, hostel_id: str, booking_created_at: datetime) -> ServiceResult[Optional[MonthlyAdminFee]]:
        try:
            with self.transaction():
                fee = self.reopen_for_new_student(hostel_id, booking_created_at)
            return ServiceResult.success(fee)
        except Exception as e:
            return self._handle_exception(e, "reset fee for new student", hostel_id)

    def reopen_for_new_student(self, hostel_id: str, booking_created_at: datetime) -> Optional[MonthlyAdminFee]:
        """
        Put an APPROVED fee back to PENDING when the month's REGULAR count
        has grown past what was paid. Runs inside the caller's transaction.

        Returns:
            The re-opened fee, or None when nothing changed
        """
        month = DateRangeCalculator.month_key(booking_created_at)
        fee = self.fees.find_for_hostel_month(hostel_id, month)
        if fee is None or fee.status != FeeStatus.APPROVED:
            return None

        self.db.flush()
        student_count, _ = self._month_stats(hostel_id, month)
        if student_count <= fee.student_count:
            return None

        previous_count = fee.student_count
        self.fees.update(fee, {"status": FeeStatus.PENDING, "reviewed_by": None, "reviewed_at": None})
        self.audit.log(
            "MONTHLY_FEE_RESET_NEW_STUDENT",
            SYSTEM_ACTOR,
            FEE_TARGET_TYPE,
            fee.id,
            {
                "previous_student_count": previous_count,
                "new_student_count": student_count,
                "hostel_id": hostel_id,
                "month": month,
            },
        )
        self._logger.info(
            f"Monthly fee {fee.id} re-opened for additional students",
            extra={"previous_student_count": previous_count, "new_student_count": student_count},
        )
        return fee
