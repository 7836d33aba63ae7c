"""
Base service class providing common functionality for all services.
"""

from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hostelhub.core.exceptions import BaseAppException, ErrorCode
from hostelhub.core.logging import get_logger
from hostelhub.services.base.service_result import (
    ErrorSeverity,
    ServiceError,
    ServiceResult,
)
from hostelhub.utils.datetime_utils import Clock, utcnow


class BaseService:
    """
    Base service with common behaviors:
    - Shared logger, db session and clock
    - Consistent error handling via ServiceResult
    - Transaction management utilities
    """

    def __init__(self, db_session: Session, clock: Optional[Clock] = None):
        """
        Initialize base service.

        Args:
            db_session: SQLAlchemy database session
            clock: Callable returning the current naive UTC datetime
        """
        self.db: Session = db_session
        self._clock: Clock = clock or utcnow
        self._logger = get_logger(self.__class__.__name__)

    def now(self) -> datetime:
        return self._clock()

    # -------------------------------------------------------------------------
    # Exception & Error Handling
    # -------------------------------------------------------------------------

    def _handle_exception(
        self,
        exception: Exception,
        operation: str,
        entity_ref: Optional[Any] = None,
        additional_context: Optional[Dict[str, Any]] = None,
    ) -> ServiceResult:
        """
        Convert exception to a ServiceResult failure with logging.

        Domain exceptions keep their code and message. Anything else is
        logged with its traceback and reported generically.

        Args:
            exception: The caught exception
            operation: Description of the operation that failed
            entity_ref: Reference to the entity involved (ID, name, etc.)
            additional_context: Extra context for logging/debugging

        Returns:
            ServiceResult with failure status and error details
        """
        context = {
            "operation": operation,
            "entity_ref": str(entity_ref) if entity_ref is not None else None,
            "exception_type": type(exception).__name__,
        }
        if additional_context:
            context.update(additional_context)

        if isinstance(exception, BaseAppException):
            self._logger.info(
                f"{operation} rejected: {exception.message}",
                extra={**context, "error_code": exception.error_code.value},
            )
            return ServiceResult.failure(
                ServiceError(
                    code=exception.error_code,
                    message=exception.message,
                    details=exception.details or None,
                    severity=ErrorSeverity.WARNING,
                )
            )

        self._logger.error(
            f"Error during {operation}: {exception}",
            exc_info=True,
            extra=context,
        )
        return ServiceResult.failure(
            ServiceError(
                code=self._map_exception_to_error_code(exception),
                message=f"Failed to {operation}",
                details={"entity_ref": context["entity_ref"]},
                severity=ErrorSeverity.CRITICAL,
            )
        )

    def _map_exception_to_error_code(self, exception: Exception) -> ErrorCode:
        if isinstance(exception, SQLAlchemyError):
            return ErrorCode.DATABASE_ERROR
        return ErrorCode.INTERNAL_ERROR

    # -------------------------------------------------------------------------
    # Transaction Management
    # -------------------------------------------------------------------------

    @contextmanager
    def transaction(self):
        """
        Context manager for database transactions with automatic rollback.

        Example:
            with self.transaction():
                self.bookings.create(booking)
                # commit on success, rollback on exception
        """
        try:
            yield self.db
            self._commit()
        except Exception as e:
            self._rollback()
            self._logger.debug(f"Transaction rolled back: {e}")
            raise

    def _commit(self) -> None:
        """Commit the current transaction."""
        self.db.commit()
        self._logger.debug("Transaction committed successfully")

    def _rollback(self) -> None:
        """Rollback the current transaction, suppressing rollback errors."""
        try:
            self.db.rollback()
        except SQLAlchemyError as e:
            # Rollback errors must not mask the original error
            self._logger.warning(f"Rollback failed: {e}")
