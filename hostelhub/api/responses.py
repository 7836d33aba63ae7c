"""
Translate service results into the standard response envelope.
"""

from typing import Any, Optional, Type

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from hostelhub.core.exceptions import ErrorCode
from hostelhub.schemas.common.response import ErrorResponse, SuccessResponse
from hostelhub.services.base.service_result import ServiceResult

HTTP_STATUS_BY_ERROR_CODE = {
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.BUSINESS_RULE_VIOLATION: status.HTTP_400_BAD_REQUEST,
    ErrorCode.ROOM_UNAVAILABLE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.BOOKING_PERIOD_CLOSED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.DUPLICATE_REVIEW: status.HTTP_400_BAD_REQUEST,
    ErrorCode.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.INSUFFICIENT_PERMISSIONS: status.HTTP_403_FORBIDDEN,
    ErrorCode.ACCOUNT_TERMINATED: status.HTTP_403_FORBIDDEN,
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    ErrorCode.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.INVALID_STATE: status.HTTP_409_CONFLICT,
    ErrorCode.DATABASE_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.EXTERNAL_SERVICE_ERROR: status.HTTP_502_BAD_GATEWAY,
}


def status_for(error_code: ErrorCode) -> int:
    return HTTP_STATUS_BY_ERROR_CODE.get(error_code, status.HTTP_500_INTERNAL_SERVER_ERROR)


def _serialize(data: Any, serializer: Optional[Type[BaseModel]]) -> Any:
    if serializer is None or data is None:
        return data
    if isinstance(data, (list, tuple)):
        return [serializer.model_validate(item) for item in data]
    return serializer.model_validate(data)


def error_response(
    status_code: int,
    message: str,
    errors: Any = None,
    error_code: Optional[str] = None,
) -> JSONResponse:
    body = ErrorResponse.create(message=message, errors=errors, error_code=error_code)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


def respond(
    result: ServiceResult,
    serializer: Optional[Type[BaseModel]] = None,
    status_code: int = status.HTTP_200_OK,
) -> JSONResponse:
    """
    Build the HTTP response for a service result.

    Args:
        result: Outcome of the service call
        serializer: Response schema applied to ORM data (each item for lists)
        status_code: Status used on success
    """
    if not result.is_success:
        error = result.error
        return error_response(
            status_for(error.code),
            error.message,
            errors=error.field_errors,
            error_code=error.code.value,
        )

    body = SuccessResponse.create(
        data=jsonable_encoder(_serialize(result.data, serializer)),
        message=result.message or "Success",
    )
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))
