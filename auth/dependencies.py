"""
FastAPI dependencies for authentication.

Provides ``db_session``, ``get_current_user`` and
``get_current_user_optional`` which are used across the protected routes.
"""

from __future__ import annotations

import logging
from typing import AsyncGenerator, Optional

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from auth.jwt import TokenError, TokenSigner
from auth.password import PasswordHasher
from database.session import get_db_session
from utils.errors import AccessDenied
from utils.schemas import UserSnapshot

logger = logging.getLogger(__name__)

# Cookie a browser client may keep the token in; cleared on logout and on
# rejected tokens.
AUTH_COOKIE = "authToken"


async def db_session(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a DB session for route handlers."""
    yield session


def get_token_signer(request: Request) -> TokenSigner:
    return request.app.state.token_signer


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def _extract_token(authorization: Optional[str]) -> Optional[str]:
    """Accept either ``Bearer <token>`` or the bare token."""
    if not authorization:
        return None
    value = authorization.strip()
    scheme, _, rest = value.partition(" ")
    if rest and scheme.lower() == "bearer":
        value = rest.strip()
    return value or None


async def get_current_user(
    request: Request,
    authorization: Optional[str] = Header(default=None),
    signer: TokenSigner = Depends(get_token_signer),
) -> UserSnapshot:
    """
    Verify the bearer token and return the embedded ``UserSnapshot``.

    Every failure is reported to the client as the same 401 Access Denied;
    the actual reason only goes to the log.
    """
    token = _extract_token(authorization)
    if token is None:
        logger.warning("%s %s rejected: no auth token", request.method, request.url.path)
        raise AccessDenied()

    try:
        user = signer.verify(token)
    except TokenError as exc:
        logger.warning(
            "%s %s rejected: %s (%s)",
            request.method, request.url.path, type(exc).__name__, exc,
        )
        raise AccessDenied() from exc

    request.state.user = user
    return user


async def get_current_user_optional(
    authorization: Optional[str] = Header(default=None),
    signer: TokenSigner = Depends(get_token_signer),
) -> Optional[UserSnapshot]:
    """Same as ``get_current_user`` but returns ``None`` instead of raising."""
    token = _extract_token(authorization)
    if token is None:
        return None
    try:
        return signer.verify(token)
    except TokenError:
        return None
