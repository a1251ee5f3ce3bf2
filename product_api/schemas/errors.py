"""
schemas/errors.py — Structured error response model

Shared by every exception handler in main.py.
"""

from pydantic import BaseModel


class FieldError(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    error: str
    status_code: int
    request_id: str = ""
    detail: list[FieldError] | None = None
