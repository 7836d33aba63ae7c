from hostelhub.services.base.base_service import BaseService
from hostelhub.services.base.profile_lookup import ProfileLookupMixin
from hostelhub.services.base.service_result import (
    ErrorCode,
    ErrorSeverity,
    ServiceError,
    ServiceResult,
)

__all__ = [
    "BaseService",
    "ErrorCode",
    "ErrorSeverity",
    "ProfileLookupMixin",
    "ServiceError",
    "ServiceResult",
]
