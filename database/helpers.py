"""
Database helper functions — user and post store operations.

Every helper takes the request's ``AsyncSession`` and flushes but never
commits. Route handlers commit before they build the response, and the
session dependency rolls back on any error.
"""

from __future__ import annotations

import logging
import uuid
from typing import List, Optional

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from database.models import Post, User

logger = logging.getLogger(__name__)


def _to_uuid(value: str | uuid.UUID) -> uuid.UUID:
    return uuid.UUID(value) if isinstance(value, str) else value


# ── Users ───────────────────────────────────────────────────────────


async def find_user_by_login(session: AsyncSession, login: str) -> Optional[User]:
    """Return the user whose email OR username equals ``login``."""
    result = await session.execute(
        select(User).where(or_(User.email == login, User.username == login)).limit(1)
    )
    return result.scalar_one_or_none()


async def user_exists(session: AsyncSession, email: str, username: str) -> bool:
    """True if any account already uses ``email`` or ``username``."""
    result = await session.execute(
        select(User.id).where(or_(User.email == email, User.username == username)).limit(1)
    )
    return result.scalar_one_or_none() is not None


async def create_user(
    session: AsyncSession,
    full_name: str,
    email: str,
    username: str,
    password_hash: str,
) -> User:
    user = User(
        id=uuid.uuid4(),
        full_name=full_name,
        email=email,
        username=username,
        password_hash=password_hash,
    )
    session.add(user)
    await session.flush()
    return user


# ── Posts ───────────────────────────────────────────────────────────


async def create_post(session: AsyncSession, title: str, created_by: str | uuid.UUID) -> Post:
    post = Post(id=uuid.uuid4(), title=title, created_by=_to_uuid(created_by))
    session.add(post)
    await session.flush()
    await session.refresh(post)
    return post


async def list_posts_with_authors(session: AsyncSession) -> List[Post]:
    """All posts in insertion order, with ``author`` eagerly loaded."""
    result = await session.execute(
        select(Post)
        .options(selectinload(Post.author))
        .order_by(Post.created_at.asc(), Post.id.asc())
    )
    return list(result.scalars().all())


async def find_owned_post(
    session: AsyncSession,
    post_id: str | uuid.UUID,
    owner_id: str | uuid.UUID,
) -> Optional[Post]:
    """
    Fetch a post by id that belongs to ``owner_id``.

    Existence and ownership are matched in one query, so a post owned by
    someone else is indistinguishable from a missing one.
    """
    result = await session.execute(
        select(Post).where(
            Post.id == _to_uuid(post_id),
            Post.created_by == _to_uuid(owner_id),
        )
    )
    return result.scalar_one_or_none()


async def update_post_title(session: AsyncSession, post: Post, title: str) -> Post:
    post.title = title
    await session.flush()
    await session.refresh(post)
    return post


async def delete_post(session: AsyncSession, post: Post) -> None:
    await session.delete(post)
    await session.flush()
    logger.debug("Deleted post %s", post.id)
