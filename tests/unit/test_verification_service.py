import pytest

from hostelhub.core.exceptions import ErrorCode
from hostelhub.models.audit.audit_log import AuditLog
from hostelhub.models.base.enums import HostelFor, VerificationStatus
from hostelhub.schemas.verification.verification import (
    CustomBankAccount,
    VerificationReview,
    VerificationSubmit,
)
from hostelhub.services.hostel import HostelService
from hostelhub.services.verification import VerificationService
from tests.conftest import hostel_payload, make_manager


@pytest.fixture
def service(db, clock):
    return VerificationService(db, clock)


@pytest.fixture
def applicant(db):
    return make_manager(db, "applicant@hostels.com.pk", verified=False)


def _request(**overrides):
    fields = dict(
        initial_hostel_names=["Green View Hostel"],
        owner_name="Kamran Shah",
        city="Lahore",
        address="12 Canal Road",
        building_images=["https://res.cloudinary.com/demo/image/upload/front.jpg"],
        hostel_for=HostelFor.BOYS,
        easypaisa_number="03001234567",
        custom_banks=[CustomBankAccount(bank_name="Meezan Bank", account_number="0101-2233")],
        accepted_rules=True,
    )
    fields.update(overrides)
    return VerificationSubmit(**fields)


def test_rules_must_be_accepted():
    with pytest.raises(ValueError):
        _request(accepted_rules=False)


def test_submit_creates_pending_request(service, applicant):
    result = service.submit_verification(applicant.id, _request())

    assert result.is_success
    assert result.data.status == VerificationStatus.PENDING
    assert result.data.custom_banks[0]["bank_name"] == "Meezan Bank"


def test_only_one_pending_request(service, applicant):
    service.submit_verification(applicant.id, _request())

    result = service.submit_verification(applicant.id, _request())

    assert result.error_code == ErrorCode.CONFLICT


def test_verified_manager_cannot_apply(service, manager):
    assert service.submit_verification(manager.id, _request()).error_code == ErrorCode.BUSINESS_RULE_VIOLATION


def test_approval_unlocks_hostel_creation(db, clock, service, admin, applicant):
    verification = service.submit_verification(applicant.id, _request()).data
    hostels = HostelService(db, clock)
    assert not hostels.create_hostel(applicant.id, hostel_payload()).is_success

    result = service.review_verification(
        verification.id, admin.id, VerificationReview(status=VerificationStatus.APPROVED, admin_comment="Documents ok")
    )

    assert result.data.status == VerificationStatus.APPROVED
    assert result.data.reviewed_by == admin.id
    assert hostels.create_hostel(applicant.id, hostel_payload()).is_success
    entry = db.query(AuditLog).filter(AuditLog.target_id == verification.id).one()
    assert entry.action == "VERIFICATION_APPROVED"


def test_rejection_allows_a_new_request(service, admin, applicant):
    verification = service.submit_verification(applicant.id, _request()).data
    service.review_verification(verification.id, admin.id, VerificationReview(status=VerificationStatus.REJECTED))

    again = service.submit_verification(applicant.id, _request())

    assert again.is_success
    assert len(service.get_my_verifications(applicant.id).data) == 2
    assert len(service.get_all_verifications(VerificationStatus.PENDING).data) == 1


def test_request_reviewed_once(service, admin, applicant):
    verification = service.submit_verification(applicant.id, _request()).data
    decision = VerificationReview(status=VerificationStatus.REJECTED)
    service.review_verification(verification.id, admin.id, decision)

    assert service.review_verification(verification.id, admin.id, decision).error_code == ErrorCode.INVALID_STATE


def test_unknown_verification(service):
    assert service.get_verification("missing").error_code == ErrorCode.NOT_FOUND
