from hostelhub.models.audit.audit_log import SYSTEM_ACTOR, AuditLog

__all__ = ["AuditLog", "SYSTEM_ACTOR"]
