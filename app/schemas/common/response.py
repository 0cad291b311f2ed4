# --- File: app/schemas/common/response.py ---
"""
Standard API response wrappers.
"""

from typing import Any, Dict, Union

from pydantic import Field

from app.schemas.common.base import BaseSchema

__all__ = [
    "MessageResponse",
    "ErrorBody",
    "ErrorResponse",
]


class MessageResponse(BaseSchema):
    """Simple message response."""

    message: str = Field(..., description="Response message")


class ErrorBody(BaseSchema):
    """Error payload produced by BaseAppException.to_dict()."""

    message: str = Field(..., description="Error message")
    code: str = Field(..., description="Application error code")
    details: Dict[str, Any] = Field(default_factory=dict, description="Error details")
    type: Union[str, None] = Field(default=None, description="Exception class name")


class ErrorResponse(BaseSchema):
    """Standard error response."""

    error: ErrorBody
