"""Common Pydantic schemas shared across the API."""

from typing import Any

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """The error envelope every failing request returns."""

    error_code: str
    message: str
    details: Any | None = None
