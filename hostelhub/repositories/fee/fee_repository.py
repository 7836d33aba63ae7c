"""Monthly admin fee repository."""

from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from hostelhub.models.base.enums import FeeStatus
from hostelhub.models.fee.monthly_admin_fee import MonthlyAdminFee
from hostelhub.repositories.base.base_repository import BaseRepository


class MonthlyFeeRepository(BaseRepository[MonthlyAdminFee]):

    def __init__(self, db: Session):
        super().__init__(MonthlyAdminFee, db)

    def find_period(self, manager_id: str, hostel_id: str, month: str) -> Optional[MonthlyAdminFee]:
        return (
            self.db.query(MonthlyAdminFee)
            .filter(
                MonthlyAdminFee.manager_id == manager_id,
                MonthlyAdminFee.hostel_id == hostel_id,
                MonthlyAdminFee.month == month,
            )
            .first()
        )

    def find_for_hostel_month(self, hostel_id: str, month: str) -> Optional[MonthlyAdminFee]:
        return (
            self.db.query(MonthlyAdminFee)
            .filter(MonthlyAdminFee.hostel_id == hostel_id, MonthlyAdminFee.month == month)
            .first()
        )

    def find_by_manager(self, manager_id: str) -> List[MonthlyAdminFee]:
        return (
            self.db.query(MonthlyAdminFee)
            .options(joinedload(MonthlyAdminFee.hostel))
            .filter(MonthlyAdminFee.manager_id == manager_id)
            .order_by(MonthlyAdminFee.month.desc(), MonthlyAdminFee.created_at.desc())
            .all()
        )

    def find_all_by_status(self, status: Optional[FeeStatus] = None) -> List[MonthlyAdminFee]:
        query = self.db.query(MonthlyAdminFee).options(joinedload(MonthlyAdminFee.hostel))
        if status is not None:
            query = query.filter(MonthlyAdminFee.status == status)
        return query.order_by(MonthlyAdminFee.submitted_at.desc()).all()
