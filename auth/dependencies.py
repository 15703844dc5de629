"""
FastAPI dependencies for authentication.

Provides ``db_session``, ``get_token_codec``, ``get_auth_service`` and the
``get_current_user_id`` dependency used across all protected routes.
The resolved user id is returned to the route handler, which passes it on
explicitly; nothing is stashed on the request.
"""

from __future__ import annotations

import logging
import uuid
from typing import AsyncGenerator, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from auth.jwt import TokenCodec
from auth.service import AuthService
from database.session import get_db_session
from utils.errors import InvalidTokenError, UnauthenticatedError

logger = logging.getLogger(__name__)

# auto_error=False so a missing header goes through our own 401 path.
_bearer_scheme = HTTPBearer(auto_error=False)


async def db_session(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a DB session for route handlers."""
    yield session


def get_token_codec(request: Request) -> TokenCodec:
    return request.app.state.token_codec


def get_auth_service(
    request: Request,
    session: AsyncSession = Depends(db_session),
    codec: TokenCodec = Depends(get_token_codec),
) -> AuthService:
    return AuthService(session, codec, request.app.state.settings.bcrypt_rounds)


def authenticate_bearer(
    credentials: Optional[HTTPAuthorizationCredentials],
    codec: TokenCodec,
) -> uuid.UUID:
    """
    Resolve the caller's user id from Bearer credentials.

    Raises ``UnauthenticatedError`` when the header is missing, uses another
    scheme, or carries a token the codec rejects.  The rejection reason is
    only logged; clients always see the same message.
    """
    if (
        credentials is None
        or credentials.scheme.lower() != "bearer"
        or not credentials.credentials
    ):
        raise UnauthenticatedError("Missing Bearer token")

    try:
        user_id = codec.verify(credentials.credentials)
        return uuid.UUID(user_id)
    except (InvalidTokenError, ValueError) as exc:
        logger.debug("Rejected bearer token: %s", exc)
        raise UnauthenticatedError("Invalid or expired token") from exc


async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    codec: TokenCodec = Depends(get_token_codec),
) -> uuid.UUID:
    """
    Extract and verify the Bearer token, returning the authenticated
    ``user_id``.
    """
    return authenticate_bearer(credentials, codec)
