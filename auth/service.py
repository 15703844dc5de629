"""
Auth service — registration and login orchestration.

Both flows return an ``AuthResult`` (token + redacted user view) or raise
an ``AppError`` subclass.  Storage failures are logged here and surfaced
only as a generic ``InternalError``.
"""

from __future__ import annotations

import asyncio
import functools
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from auth.jwt import TokenCodec
from auth.password import hash_password, verify_password
from database.helpers import create_user, get_user_by_email
from database.models import User
from utils.errors import ConflictError, InternalError, UnauthorizedError
from utils.schemas import AuthResult, PublicUser
from utils.validators import normalize_email, validate_login, validate_registration

logger = logging.getLogger(__name__)

# Same message for unknown email and wrong password.
INVALID_CREDENTIALS = "Invalid email or password"
EMAIL_TAKEN = "An account with this email already exists"


@functools.lru_cache(maxsize=None)
def _dummy_hash(rounds: Optional[int]) -> str:
    """bcrypt digest checked against when the email is unknown, at the real cost."""
    return hash_password("dummy-password-for-timing", rounds)


def _verify_against_dummy(password: str, rounds: Optional[int]) -> bool:
    return verify_password(password, _dummy_hash(rounds))


def public_view(user: User) -> PublicUser:
    return PublicUser(id=str(user.user_id), name=user.display_name, email=user.email)


class AuthService:
    def __init__(
        self,
        session: AsyncSession,
        codec: TokenCodec,
        password_rounds: Optional[int] = None,
    ) -> None:
        self._session = session
        self._codec = codec
        self._rounds = password_rounds

    def _issue(self, user: User) -> AuthResult:
        return AuthResult(token=self._codec.mint(str(user.user_id)), user=public_view(user))

    async def register(
        self,
        name: Optional[str],
        email: Optional[str],
        password: Optional[str],
    ) -> AuthResult:
        """Create a user and return a token bound to it."""
        validate_registration(name, email, password)
        email = normalize_email(email)

        try:
            if await get_user_by_email(self._session, email) is not None:
                raise ConflictError(EMAIL_TAKEN)

            password_hash = await asyncio.to_thread(hash_password, password, self._rounds)
            try:
                user = await create_user(self._session, email, name.strip(), password_hash)
                await self._session.commit()
            except IntegrityError:
                # Lost a race with a concurrent registration for the same email.
                await self._session.rollback()
                raise ConflictError(EMAIL_TAKEN)
        except SQLAlchemyError as exc:
            logger.exception("Registration failed for %s", email)
            raise InternalError("Internal server error during registration") from exc

        logger.info("Registered user %s (%s)", user.display_name, user.user_id)
        return self._issue(user)

    async def login(self, email: Optional[str], password: Optional[str]) -> AuthResult:
        """Check credentials and return a fresh token."""
        validate_login(email, password)
        email = normalize_email(email)

        try:
            user = await get_user_by_email(self._session, email)
        except SQLAlchemyError as exc:
            logger.exception("Login lookup failed")
            raise InternalError("Internal server error during login") from exc

        if user is None:
            # Spend the same bcrypt time as a wrong password would.
            await asyncio.to_thread(_verify_against_dummy, password, self._rounds)
            logger.warning("Login rejected: unknown email")
            raise UnauthorizedError(INVALID_CREDENTIALS)

        valid = await asyncio.to_thread(verify_password, password, user.password_hash)
        if not valid:
            logger.warning("Login rejected: bad password for user %s", user.user_id)
            raise UnauthorizedError(INVALID_CREDENTIALS)

        logger.info("Login: %s (%s)", user.display_name, user.user_id)
        return self._issue(user)
