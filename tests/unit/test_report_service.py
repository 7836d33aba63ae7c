import pytest

from hostelhub.core.exceptions import ErrorCode
from hostelhub.models.base.enums import ReportStatus
from hostelhub.schemas.report.report import ReportCreate, ReportResolve
from hostelhub.services.booking import BookingService
from hostelhub.services.report import ReportService
from tests.conftest import booking_payload, make_student


@pytest.fixture
def service(db, clock):
    return ReportService(db, clock)


@pytest.fixture
def stay(db, clock, student, manager, hostel):
    bookings = BookingService(db, clock)
    booking = bookings.create_booking(student.id, booking_payload(hostel.id)).data
    assert bookings.approve_booking(manager.id, booking.id).is_success
    return booking


def _report(hostel, **overrides):
    fields = dict(hostel_id=hostel.id, reason="Broken water heater", description="No hot water for two weeks")
    fields.update(overrides)
    return ReportCreate(**fields)


def test_only_residents_can_report(db, service, hostel):
    stranger = make_student(db, "stranger@uni.edu.pk")

    result = service.create_report(stranger.id, _report(hostel))

    assert result.error_code == ErrorCode.BUSINESS_RULE_VIOLATION
    assert result.message == "You can only report hostels you have stayed in"


def test_report_goes_to_the_hostel_manager(service, student, manager, hostel, stay):
    result = service.create_report(student.id, _report(hostel, booking_id=stay.id))

    assert result.is_success
    assert result.data.status == ReportStatus.PENDING
    assert result.data.manager_id == manager.manager_profile.id
    assert result.data.booking_id == stay.id


def test_booking_must_belong_to_reporter(service, student, hostel, stay):
    result = service.create_report(student.id, _report(hostel, booking_id="someone-elses"))

    assert result.error_code == ErrorCode.NOT_FOUND


def test_admin_resolves_once(service, admin, student, hostel, stay):
    report = service.create_report(student.id, _report(hostel)).data

    resolved = service.resolve_report(
        report.id, admin.id, ReportResolve(status=ReportStatus.RESOLVED, admin_note="Manager fixed the heater")
    )
    again = service.resolve_report(report.id, admin.id, ReportResolve(status=ReportStatus.DISMISSED))

    assert resolved.data.status == ReportStatus.RESOLVED
    assert resolved.data.resolved_by == admin.id
    assert again.error_code == ErrorCode.INVALID_STATE
    assert [r.id for r in service.get_all_reports(ReportStatus.RESOLVED).data] == [report.id]
    assert len(service.get_my_reports(student.id).data) == 1
