"""Manager verification repository."""

from typing import List, Optional

from sqlalchemy.orm import Session

from hostelhub.models.base.enums import VerificationStatus
from hostelhub.models.verification.manager_verification import ManagerVerification
from hostelhub.repositories.base.base_repository import BaseRepository


class VerificationRepository(BaseRepository[ManagerVerification]):

    def __init__(self, db: Session):
        super().__init__(ManagerVerification, db)

    def find_pending_for_manager(self, manager_id: str) -> Optional[ManagerVerification]:
        return self.find_one_by_criteria(
            {"manager_id": manager_id, "status": VerificationStatus.PENDING}
        )

    def find_by_manager(self, manager_id: str) -> List[ManagerVerification]:
        return self.find_by_criteria({"manager_id": manager_id}, order_by=["-created_at"])

    def find_all_by_status(self, status: Optional[VerificationStatus] = None) -> List[ManagerVerification]:
        criteria = {"status": status} if status is not None else {}
        return self.find_by_criteria(criteria, order_by=["-created_at"])
