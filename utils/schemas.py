"""
Pydantic schemas shared across the API: response envelope and public views.
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel


class ApiResponse(BaseModel):
    """Envelope used by every endpoint, success or failure."""

    statusCode: int
    data: Optional[Any] = None
    message: str = ""


def envelope(status_code: int, data: Any = None, message: str = "") -> dict:
    return ApiResponse(
        statusCode=status_code,
        data=jsonable_encoder(data),
        message=message,
    ).model_dump()


class PublicUser(BaseModel):
    """Redacted user view — never includes the password hash."""

    id: str
    name: str
    email: str


class AuthResult(BaseModel):
    token: str
    user: PublicUser
