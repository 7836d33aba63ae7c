"""
Standard API response envelope: ``{success, message, data, errors}``.
"""

from typing import Any, Dict, Generic, List, Optional, TypeVar, Union

from pydantic import Field

from hostelhub.schemas.common.base import BaseSchema

T = TypeVar("T")

__all__ = [
    "SuccessResponse",
    "ErrorResponse",
]


class SuccessResponse(BaseSchema, Generic[T]):
    """Standard success response."""

    success: bool = Field(default=True, description="Success flag")
    message: Optional[str] = Field(default=None, description="Response message")
    data: Union[T, None] = Field(default=None, description="Response data")

    @classmethod
    def create(cls, data: Union[T, None] = None, message: Optional[str] = None):
        """Create success response."""
        return cls(success=True, message=message, data=data)


class ErrorResponse(BaseSchema):
    """Standard error response."""

    success: bool = Field(default=False, description="Success flag")
    message: str = Field(..., description="Error message")
    errors: Union[Dict[str, List[str]], List[Any], None] = Field(
        default=None,
        description="Field-level errors or additional detail",
    )
    error_code: Optional[str] = Field(default=None, description="Application error code")

    @classmethod
    def create(
        cls,
        message: str,
        errors: Union[Dict[str, List[str]], List[Any], None] = None,
        error_code: Optional[str] = None,
    ):
        """Create error response."""
        return cls(success=False, message=message, errors=errors, error_code=error_code)
