"""
Outcome of a service call.

Services never raise to the API layer. They return a ``ServiceResult``
whose ``error.code`` the API maps onto an HTTP status.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Generic, Optional, TypeVar

from hostelhub.core.exceptions import ErrorCode


class ErrorSeverity(str, Enum):
    """WARNING for rejected requests, CRITICAL for unexpected failures."""

    WARNING = "WARNING"
    CRITICAL = "CRITICAL"


@dataclass
class ServiceError:
    code: ErrorCode
    message: str
    severity: ErrorSeverity = ErrorSeverity.WARNING
    details: Optional[Dict[str, Any]] = None

    @property
    def field_errors(self) -> Optional[Dict[str, Any]]:
        return (self.details or {}).get("field_errors")


TData = TypeVar("TData")


@dataclass
class ServiceResult(Generic[TData]):
    """
    Success with ``data`` or failure with ``error``.

    ``message`` is shown to the client in both cases: the success message
    chosen by the service, or the error message on failure.
    """

    is_success: bool
    data: Optional[TData] = None
    error: Optional[ServiceError] = None
    message: Optional[str] = None

    @classmethod
    def success(cls, data: Optional[TData] = None, message: Optional[str] = None) -> "ServiceResult[TData]":
        return cls(is_success=True, data=data, message=message)

    @classmethod
    def failure(cls, error: ServiceError) -> "ServiceResult[TData]":
        return cls(is_success=False, error=error, message=error.message)

    @property
    def error_code(self) -> Optional[ErrorCode]:
        return self.error.code if self.error else None

    def __bool__(self) -> bool:
        return self.is_success

    def __repr__(self) -> str:
        if self.is_success:
            return f"ServiceResult(success: {self.message or 'ok'})"
        return f"ServiceResult(failure {self.error_code.value}: {self.message})"


__all__ = [
    "ErrorCode",
    "ErrorSeverity",
    "ServiceError",
    "ServiceResult",
]
