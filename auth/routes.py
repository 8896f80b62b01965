"""
Auth API routes — signup, login, logout.

Route prefix: /api/auth
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from auth.dependencies import (
    AUTH_COOKIE,
    db_session,
    get_current_user_optional,
    get_password_hasher,
    get_token_signer,
)
from auth.jwt import TokenSigner
from auth.password import MAX_PASSWORD_BYTES, PasswordHasher
from database.helpers import create_user, find_user_by_login, user_exists
from utils.errors import AuthenticationError, ConflictError, NotFoundError, ValidationError
from utils.responses import success_response
from utils.schemas import LoginRequest, SignupRequest, UserSnapshot
from utils.validators import require_fields

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(
    req: SignupRequest,
    session: AsyncSession = Depends(db_session),
    hasher: PasswordHasher = Depends(get_password_hasher),
    signer: TokenSigner = Depends(get_token_signer),
) -> Dict[str, Any]:
    """Create an account and log it in."""
    require_fields(req.full_name, req.email, req.username, req.password)
    if len(req.password.encode()) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")

    if await user_exists(session, req.email, req.username):
        raise ConflictError("Account with same email or username already exists")

    try:
        user = await create_user(
            session,
            full_name=req.full_name,
            email=req.email,
            username=req.username,
            password_hash=hasher.hash(req.password),
        )
        await session.commit()
    except IntegrityError as exc:
        # Lost a race against a concurrent signup with the same email/username.
        raise ConflictError("Account with same email or username already exists") from exc

    snapshot = UserSnapshot.model_validate(user)
    token = signer.issue(snapshot)
    logger.info("Registered user %s (%s)", user.username, user.id)

    return success_response(
        "User signup successful!",
        {"user": snapshot.to_json(), "authToken": token},
    )


@router.post("/login")
async def login(
    req: LoginRequest,
    session: AsyncSession = Depends(db_session),
    hasher: PasswordHasher = Depends(get_password_hasher),
    signer: TokenSigner = Depends(get_token_signer),
) -> Dict[str, Any]:
    """Login with username or email + password."""
    require_fields(req.user, req.password)

    user = await find_user_by_login(session, req.user)
    if user is None:
        raise NotFoundError("User does not exist!")

    if not hasher.verify(req.password, user.password_hash):
        raise AuthenticationError("Invalid Password")

    snapshot = UserSnapshot.model_validate(user)
    token = signer.issue(snapshot)
    logger.info("Login: %s (%s)", user.username, user.id)

    return success_response(
        "User login successful!",
        {"user": snapshot.to_json(), "authToken": token},
    )


@router.post("/logout")
async def logout(
    response: Response,
    user: Optional[UserSnapshot] = Depends(get_current_user_optional),
) -> Dict[str, Any]:
    """
    Tell the client to drop its token.

    Tokens are stateless, so one that was copied elsewhere stays valid
    until it expires.
    """
    response.delete_cookie(AUTH_COOKIE)
    if user is not None:
        logger.info("Logout: %s (%s)", user.username, user.id)
    return success_response("User logout successful!")
