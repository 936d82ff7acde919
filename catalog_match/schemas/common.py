"""Common schemas used across the API."""

from typing import Any

from pydantic import BaseModel


class ErrorDetail(BaseModel):
    """Structured error detail (stable machine-readable code + human message)."""

    code: str
    message: str
    detail: dict[str, Any] | None = None


class ErrorResponse(BaseModel):
    """Error envelope for every non-2xx response raised by the app.

    Format: { "error": { "code": str, "message": str, "detail": object } }
    """

    error: ErrorDetail

    @classmethod
    def build(cls, code: str, message: str, detail: dict[str, Any] | None = None) -> "ErrorResponse":
        return cls(error=ErrorDetail(code=code, message=message, detail=detail))
