"""API error bodies."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ErrorCodes:
    """Machine-readable error codes used in ``ErrorDetail.code``."""

    INVALID_LAYOUT = "INVALID_LAYOUT"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorDetail(BaseModel):
    code: str = Field(..., description="One of ErrorCodes")
    message: str = Field(..., description="Human-readable explanation")
    details: dict[str, Any] | None = Field(default=None, description="Extra context, if any")


class ErrorResponse(BaseModel):
    """Body returned under ``detail`` for 4xx/5xx scan errors."""

    error: ErrorDetail

    model_config = {
        "json_schema_extra": {
            "example": {
                "error": {
                    "code": ErrorCodes.INVALID_LAYOUT,
                    "message": "Page info has no item id",
                    "details": None,
                }
            }
        }
    }

    @classmethod
    def build(cls, code: str, message: str, details: dict[str, Any] | None = None) -> ErrorResponse:
        return cls(error=ErrorDetail(code=code, message=message, details=details))
