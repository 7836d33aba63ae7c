"""
Custom Exceptions for the Hostel Booking Application

This module defines the exception classes raised by repositories and
services. Each one carries an error code and an HTTP status so the API
layer can render it without knowing where it came from.
"""

from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorCode(str, Enum):
    """Standard error codes for the application"""

    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    ALREADY_EXISTS = "ALREADY_EXISTS"

    # Business logic errors
    BUSINESS_RULE_VIOLATION = "BUSINESS_RULE_VIOLATION"
    INVALID_STATE = "INVALID_STATE"
    CONFLICT = "CONFLICT"
    ROOM_UNAVAILABLE = "ROOM_UNAVAILABLE"
    BOOKING_PERIOD_CLOSED = "BOOKING_PERIOD_CLOSED"
    DUPLICATE_REVIEW = "DUPLICATE_REVIEW"

    # Security errors
    UNAUTHORIZED = "UNAUTHORIZED"
    INSUFFICIENT_PERMISSIONS = "INSUFFICIENT_PERMISSIONS"
    ACCOUNT_TERMINATED = "ACCOUNT_TERMINATED"

    # Data errors
    DATABASE_ERROR = "DATABASE_ERROR"

    # External service errors
    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"


class BaseAppException(Exception):
    """
    Base exception class for all application exceptions.

    Provides consistent error handling across the application with
    structured error information.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format"""
        return {
            "message": self.message,
            "code": self.error_code.value,
            "details": self.details,
            "type": self.__class__.__name__,
        }

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', error_code='{self.error_code.value}')"


# ========================================
# General Application Exceptions
# ========================================

class ValidationError(BaseAppException):
    """Exception raised when data validation fails"""

    def __init__(
        self,
        message: str = "Validation failed",
        field_errors: Optional[Dict[str, List[str]]] = None,
    ):
        details = {"field_errors": field_errors} if field_errors else {}
        super().__init__(message, ErrorCode.VALIDATION_ERROR, details, 400)

    @property
    def field_errors(self) -> Dict[str, List[str]]:
        return self.details.get("field_errors", {})


class ResourceNotFoundError(BaseAppException):
    """Exception raised when a requested resource is not found"""

    def __init__(
        self,
        resource_type: str = "Resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
    ):
        if not message:
            message = f"{resource_type} not found"

        details = {
            "resource_type": resource_type,
            "resource_id": resource_id,
        }
        super().__init__(message, ErrorCode.NOT_FOUND, details, 404)


class UserNotFoundError(ResourceNotFoundError):
    def __init__(self, user_id: Optional[str] = None):
        super().__init__("User", user_id)


class StudentProfileNotFoundError(ResourceNotFoundError):
    def __init__(self, user_id: Optional[str] = None):
        super().__init__("Student profile", user_id)


class ManagerProfileNotFoundError(ResourceNotFoundError):
    def __init__(self, user_id: Optional[str] = None):
        super().__init__("Manager profile", user_id)


class HostelNotFoundError(ResourceNotFoundError):
    def __init__(self, hostel_id: Optional[str] = None):
        super().__init__("Hostel", hostel_id)


class BookingNotFoundError(ResourceNotFoundError):
    def __init__(self, booking_id: Optional[str] = None):
        super().__init__("Booking", booking_id)


class ReservationNotFoundError(ResourceNotFoundError):
    def __init__(self, reservation_id: Optional[str] = None):
        super().__init__("Reservation", reservation_id)


# ========================================
# Authentication & Authorization Exceptions
# ========================================

class AuthenticationError(BaseAppException):
    """Exception raised when authentication fails"""

    def __init__(
        self,
        message: str = "Authentication failed",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, ErrorCode.UNAUTHORIZED, details, 401)


class AuthorizationError(BaseAppException):
    """Exception raised when the actor may not act on the resource"""

    def __init__(
        self,
        message: str = "Not authorized",
        required_role: Optional[str] = None,
        error_code: ErrorCode = ErrorCode.INSUFFICIENT_PERMISSIONS,
    ):
        details = {"required_role": required_role} if required_role else {}
        super().__init__(message, error_code, details, 403)


class AccountTerminatedError(AuthorizationError):
    """Exception raised when a terminated account attempts a mutation"""

    def __init__(self, message: str = "Your account has been terminated"):
        super().__init__(message, error_code=ErrorCode.ACCOUNT_TERMINATED)


# ========================================
# Business Logic Exceptions
# ========================================

class InvalidStateError(BaseAppException):
    """Exception raised when an operation is invalid for the current status"""

    def __init__(
        self,
        message: str,
        current_status: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        details = dict(details or {})
        if current_status is not None:
            details["current_status"] = current_status
        super().__init__(message, ErrorCode.INVALID_STATE, details, 409)


class ConflictError(BaseAppException):
    """Exception raised when the request duplicates existing state"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.CONFLICT, details, 409)


class BusinessRuleError(BaseAppException):
    """Exception raised when a domain rule rejects the request"""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.BUSINESS_RULE_VIOLATION,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, error_code, details, 400)


class RoomUnavailableError(BusinessRuleError):
    """Exception raised when a room type has no available rooms"""

    def __init__(
        self,
        message: str = "No rooms available for this room type",
        hostel_id: Optional[str] = None,
        room_type: Optional[str] = None,
    ):
        super().__init__(
            message,
            ErrorCode.ROOM_UNAVAILABLE,
            {"hostel_id": hostel_id, "room_type": room_type},
        )


class BookingPeriodError(BusinessRuleError):
    """Exception raised when the booking type is not accepted on this day"""

    def __init__(self, message: str, day_of_month: Optional[int] = None):
        super().__init__(
            message,
            ErrorCode.BOOKING_PERIOD_CLOSED,
            {"day_of_month": day_of_month},
        )


class DuplicateReviewError(BusinessRuleError):
    """Exception raised when a booking has already been reviewed"""

    def __init__(self, booking_id: Optional[str] = None):
        super().__init__(
            "You have already submitted a review for this booking",
            ErrorCode.DUPLICATE_REVIEW,
            {"booking_id": booking_id},
        )


# ========================================
# Infrastructure Exceptions
# ========================================

class RepositoryError(BaseAppException):
    """Exception raised when a repository operation fails"""

    def __init__(self, message: str = "Database operation failed"):
        super().__init__(message, ErrorCode.DATABASE_ERROR, None, 500)


class ExternalServiceError(BaseAppException):
    """Exception raised when an external collaborator fails"""

    def __init__(self, service_name: str, message: Optional[str] = None):
        super().__init__(
            message or f"{service_name} is unavailable",
            ErrorCode.EXTERNAL_SERVICE_ERROR,
            {"service": service_name},
            502,
        )


def create_validation_error(field_errors: Dict[str, List[str]]) -> ValidationError:
    """Create a validation error with field-specific errors"""
    total_errors = sum(len(errors) for errors in field_errors.values())
    message = f"Validation failed with {total_errors} error(s)"
    return ValidationError(message, field_errors)


__all__ = [
    "ErrorCode",
    "BaseAppException",
    "ValidationError",
    "ResourceNotFoundError",
    "UserNotFoundError",
    "StudentProfileNotFoundError",
    "ManagerProfileNotFoundError",
    "HostelNotFoundError",
    "BookingNotFoundError",
    "ReservationNotFoundError",
    "AuthenticationError",
    "AuthorizationError",
    "AccountTerminatedError",
    "InvalidStateError",
    "ConflictError",
    "BusinessRuleError",
    "RoomUnavailableError",
    "BookingPeriodError",
    "DuplicateReviewError",
    "RepositoryError",
    "ExternalServiceError",
    "create_validation_error",
]
