"""Report (dispute) repository."""

from typing import List, Optional

from sqlalchemy.orm import Session

from hostelhub.models.base.enums import ReportStatus
from hostelhub.models.report.report import Report
from hostelhub.repositories.base.base_repository import BaseRepository


class ReportRepository(BaseRepository[Report]):

    def __init__(self, db: Session):
        super().__init__(Report, db)

    def find_by_student(self, student_id: str) -> List[Report]:
        return self.find_by_criteria({"student_id": student_id}, order_by=["-created_at"])

    def find_all_by_status(self, status: Optional[ReportStatus] = None) -> List[Report]:
        criteria = {"status": status} if status is not None else {}
        return self.find_by_criteria(criteria, order_by=["-created_at"])
