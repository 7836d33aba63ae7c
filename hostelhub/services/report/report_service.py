"""
Report service: students raise disputes about hostels they stayed in,
admins resolve or dismiss them.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from hostelhub.core.exceptions import (
    BookingNotFoundError,
    BusinessRuleError,
    HostelNotFoundError,
    InvalidStateError,
    ResourceNotFoundError,
)
from hostelhub.models.base.enums import ReportStatus
from hostelhub.models.report.report import Report
from hostelhub.repositories.audit.audit_repository import AuditLogRepository
from hostelhub.repositories.booking.booking_repository import BookingRepository
from hostelhub.repositories.hostel.hostel_repository import HostelRepository
from hostelhub.repositories.report.report_repository import ReportRepository
from hostelhub.schemas.report.report import ReportCreate, ReportResolve
from hostelhub.services.base import BaseService, ProfileLookupMixin, ServiceResult
from hostelhub.utils.datetime_utils import Clock


class ReportService(ProfileLookupMixin, BaseService):

    def __init__(self, db_session: Session, clock: Optional[Clock] = None):
        super().__init__(db_session, clock)
        self.reports = ReportRepository(db_session)
        self.hostels = HostelRepository(db_session)
        self.bookings = BookingRepository(db_session)
        self.audit = AuditLogRepository(db_session)

    def create_report(self, user_id: str, data: ReportCreate) -> ServiceResult[Report]:
        try:
            student = self._student_profile(user_id)
            hostel = self.hostels.find_by_id(data.hostel_id)
            if hostel is None:
                raise HostelNotFoundError(data.hostel_id)
            if not self.bookings.has_stayed(student.id, hostel.id):
                raise BusinessRuleError("You can only report hostels you have stayed in")

            if data.booking_id:
                booking = self.bookings.find_by_id(data.booking_id)
                if booking is None or booking.student_id != student.id or booking.hostel_id != hostel.id:
                    raise BookingNotFoundError(data.booking_id)

            with self.transaction():
                report = self.reports.create(
                    Report(
                        student_id=student.id,
                        manager_id=hostel.manager_id,
                        hostel_id=hostel.id,
                        booking_id=data.booking_id,
                        reason=data.reason,
                        description=data.description,
                        status=ReportStatus.PENDING,
                    )
                )

            self._logger.info(f"Report {report.id} filed", extra={"hostel_id": hostel.id})
            return ServiceResult.success(report, message="Report submitted successfully")
        except Exception as e:
            return self._handle_exception(e, "create report", data.hostel_id)

    def get_my_reports(self, user_id: str) -> ServiceResult[List[Report]]:
        try:
            student = self._student_profile(user_id)
            return ServiceResult.success(self.reports.find_by_student(student.id))
        except Exception as e:
            return self._handle_exception(e, "get student reports", user_id)

    def get_all_reports(self, status: Optional[ReportStatus] = None) -> ServiceResult[List[Report]]:
        try:
            return ServiceResult.success(self.reports.find_all_by_status(status))
        except Exception as e:
            return self._handle_exception(e, "get all reports")

    def resolve_report(self, report_id: str, admin_id: str, data: ReportResolve) -> ServiceResult[Report]:
        try:
            report = self.reports.find_by_id(report_id)
            if report is None:
                raise ResourceNotFoundError("Report", report_id)
            if report.status != ReportStatus.PENDING:
                raise InvalidStateError("Report already resolved", current_status=report.status.value)

            with self.transaction():
                self.reports.update(
                    report,
                    {
                        "status": data.status,
                        "admin_note": data.admin_note,
                        "resolved_by": admin_id,
                        "resolved_at": self.now(),
                    },
                )
                self.audit.log(f"REPORT_{data.status.value}", admin_id, "Report", report.id)

            self._logger.info(f"Report {report.id} closed", extra={"status": data.status.value})
            return ServiceResult.success(report, message=f"Report {data.status.value.lower()}")
        except Exception as e:
            return self._handle_exception(e, "resolve report", report_id)
