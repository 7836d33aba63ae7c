"""
Manager verification service. A manager must be verified by an admin
before listing hostels.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from hostelhub.core.exceptions import BusinessRuleError, ConflictError, InvalidStateError, ResourceNotFoundError
from hostelhub.models.base.enums import VerificationStatus
from hostelhub.models.verification.manager_verification import ManagerVerification
from hostelhub.repositories.audit.audit_repository import AuditLogRepository
from hostelhub.repositories.user.user_repository import ManagerProfileRepository
from hostelhub.repositories.verification.verification_repository import VerificationRepository
from hostelhub.schemas.verification.verification import VerificationReview, VerificationSubmit
from hostelhub.services.base import BaseService, ProfileLookupMixin, ServiceResult
from hostelhub.utils.datetime_utils import Clock


class VerificationService(ProfileLookupMixin, BaseService):

    def __init__(self, db_session: Session, clock: Optional[Clock] = None):
        super().__init__(db_session, clock)
        self.verifications = VerificationRepository(db_session)
        self.managers = ManagerProfileRepository(db_session)
        self.audit = AuditLogRepository(db_session)

    def submit_verification(self, user_id: str, data: VerificationSubmit) -> ServiceResult[ManagerVerification]:
        try:
            manager = self._manager_profile(user_id)
            if manager.verified:
                raise BusinessRuleError("Manager is already verified")
            if self.verifications.find_pending_for_manager(manager.id) is not None:
                raise ConflictError("A verification request is already pending")

            with self.transaction():
                verification = self.verifications.create(
                    ManagerVerification(
                        manager_id=manager.id,
                        initial_hostel_names=list(data.initial_hostel_names),
                        owner_name=data.owner_name,
                        city=data.city,
                        address=data.address,
                        building_images=[str(url) for url in data.building_images],
                        hostel_for=data.hostel_for,
                        easypaisa_number=data.easypaisa_number,
                        jazzcash_number=data.jazzcash_number,
                        custom_banks=[bank.model_dump() for bank in data.custom_banks],
                        accepted_rules=data.accepted_rules,
                        status=VerificationStatus.PENDING,
                    )
                )

            self._logger.info(f"Verification {verification.id} submitted", extra={"manager_id": manager.id})
            return ServiceResult.success(verification, message="Verification submitted successfully")
        except Exception as e:
            return self._handle_exception(e, "submit verification", user_id)

    def get_my_verifications(self, user_id: str) -> ServiceResult[List[ManagerVerification]]:
        try:
            manager = self._manager_profile(user_id)
            return ServiceResult.success(self.verifications.find_by_manager(manager.id))
        except Exception as e:
            return self._handle_exception(e, "get manager verifications", user_id)

    def get_all_verifications(
        self,
        status: Optional[VerificationStatus] = None,
    ) -> ServiceResult[List[ManagerVerification]]:
        try:
            return ServiceResult.success(self.verifications.find_all_by_status(status))
        except Exception as e:
            return self._handle_exception(e, "get all verifications")

    def get_verification(self, verification_id: str) -> ServiceResult[ManagerVerification]:
        try:
            verification = self.verifications.find_by_id(verification_id)
            if verification is None:
                raise ResourceNotFoundError("Verification", verification_id)
            return ServiceResult.success(verification)
        except Exception as e:
            return self._handle_exception(e, "get verification", verification_id)

    def review_verification(
        self,
        verification_id: str,
        reviewer_id: str,
        data: VerificationReview,
    ) -> ServiceResult[ManagerVerification]:
        """Approve or reject a PENDING request; approval verifies the manager."""
        try:
            verification = self.verifications.find_by_id(verification_id)
            if verification is None:
                raise ResourceNotFoundError("Verification", verification_id)
            if verification.status != VerificationStatus.PENDING:
                raise InvalidStateError(
                    "Verification already reviewed",
                    current_status=verification.status.value,
                )

            with self.transaction():
                self.verifications.update(
                    verification,
                    {
                        "status": data.status,
                        "admin_comment": data.admin_comment,
                        "reviewed_by": reviewer_id,
                        "reviewed_at": self.now(),
                    },
                )
                if data.status == VerificationStatus.APPROVED:
                    manager = self.managers.get_by_id(verification.manager_id)
                    self.managers.update(manager, {"verified": True})
                self.audit.log(
                    f"VERIFICATION_{data.status.value}",
                    reviewer_id,
                    "ManagerVerification",
                    verification.id,
                    {"manager_id": verification.manager_id},
                )

            self._logger.info(
                f"Verification {verification.id} reviewed",
                extra={"status": data.status.value, "manager_id": verification.manager_id},
            )
            return ServiceResult.success(verification, message=f"Verification {data.status.value.lower()}")
        except Exception as e:
            return self._handle_exception(e, "review verification", verification_id)
