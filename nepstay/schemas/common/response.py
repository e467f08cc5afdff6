"""
Standard API response envelopes.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import Field

from nepstay.schemas.common.base import BaseSchema

__all__ = [
    "ErrorDetail",
    "ErrorBody",
    "ErrorResponse",
    "success_response",
]


class ErrorDetail(BaseSchema):
    """One field-level validation problem."""

    field: str = Field(..., description="Dotted path of the offending field")
    message: str = Field(..., description="Error message")


class ErrorBody(BaseSchema):
    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable message")
    details: Union[List[ErrorDetail], None] = None


class ErrorResponse(BaseSchema):
    """Standard error response, used for OpenAPI documentation."""

    success: bool = Field(default=False, description="Success flag")
    error: ErrorBody


def success_response(
    data: Optional[Dict[str, Any]] = None,
    message: Optional[str] = None,
    **extra: Any,
) -> Dict[str, Any]:
    """
    Build a ``{"success": true, ...}`` envelope.

    ``extra`` keys (``count``, ``pagination``...) sit beside ``data``.
    """
    body: Dict[str, Any] = {"success": True}
    if message is not None:
        body["message"] = message
    body.update(extra)
    if data is not None:
        body["data"] = data
    return body
