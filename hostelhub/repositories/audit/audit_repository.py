"""Audit log repository."""

from typing import Any, Dict, List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from hostelhub.models.audit.audit_log import AuditLog
from hostelhub.repositories.base.base_repository import BaseRepository


class AuditLogRepository(BaseRepository[AuditLog]):

    def __init__(self, db: Session):
        super().__init__(AuditLog, db)

    def log(
        self,
        action: str,
        performed_by: str,
        target_type: str,
        target_id: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> AuditLog:
        """Append an audit entry to the current unit of work."""
        return self.create(
            AuditLog(
                action=action,
                performed_by=performed_by,
                target_type=target_type,
                target_id=target_id,
                details=details,
            )
        )

    def find_for_target(self, target_type: str, target_id: str) -> List[AuditLog]:
        return (
            self.db.query(AuditLog)
            .filter(AuditLog.target_type == target_type, AuditLog.target_id == target_id)
            .order_by(AuditLog.created_at.desc())
            .all()
        )

    def delete_involving(self, user_id: str) -> int:
        """Remove entries performed by or targeting ``user_id``."""
        return self.delete_where(
            or_(AuditLog.performed_by == user_id, AuditLog.target_id == user_id)
        )
