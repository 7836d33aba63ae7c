"""
Append-only audit trail of privileged actions.

``performed_by`` holds a user id, or ``SYSTEM`` for automatic actions,
so it is not a foreign key.
"""

from typing import Any, Dict, Optional

from sqlalchemy import JSON, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from hostelhub.models.base.base_model import TimestampModel

__all__ = ["AuditLog", "SYSTEM_ACTOR"]

SYSTEM_ACTOR = "SYSTEM"


class AuditLog(TimestampModel):
    __tablename__ = "audit_logs"
    __table_args__ = (
        Index("ix_audit_logs_target", "target_type", "target_id"),
    )

    action: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    performed_by: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    target_type: Mapped[str] = mapped_column(String(50), nullable=False)
    target_id: Mapped[str] = mapped_column(String(36), nullable=False)
    details: Mapped[Optional[Dict[str, Any]]] = mapped_column(JSON, nullable=True)
