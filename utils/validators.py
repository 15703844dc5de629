"""
Input validators for the auth flows.

Each check raises ``ValidationError`` with a client-facing message; the
registration checks run in a fixed order and stop at the first failure.
"""

from __future__ import annotations

import re
from typing import Optional

from utils.errors import ValidationError

MIN_PASSWORD_LENGTH = 6
MAX_PASSWORD_BYTES = 72

_EMAIL_RE = re.compile(r"^\S+@\S+\.\S+$")


def _blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


# Passwords are compared verbatim, never stripped.
def _missing(value: Optional[str]) -> bool:
    return value is None or value == ""


def is_valid_email(email: str) -> bool:
    """Basic ``local@domain.tld`` shape check."""
    return bool(_EMAIL_RE.match(email))


def normalize_email(email: str) -> str:
    return email.strip().lower()


def validate_registration(
    name: Optional[str],
    email: Optional[str],
    password: Optional[str],
) -> None:
    if _blank(name) or _blank(email) or _missing(password):
        raise ValidationError("Name, email, and password are required")
    if not is_valid_email(email.strip()):
        raise ValidationError("Please provide a valid email address")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )
    if len(password.encode()) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes long")


def validate_login(email: Optional[str], password: Optional[str]) -> None:
    if _blank(email) or _missing(password):
        raise ValidationError("Email and password are required")


def validate_title(title: Optional[str]) -> str:
    """Return the stripped title or raise when it is missing/blank."""
    if _blank(title):
        raise ValidationError("Title is required")
    return title.strip()
