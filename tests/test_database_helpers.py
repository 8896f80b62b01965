"""
Tests for the user / post store helpers against a SQLite database.
"""

import uuid
from contextlib import asynccontextmanager

import pytest

from database.helpers import (
    create_post,
    create_user,
    delete_post,
    find_owned_post,
    find_user_by_login,
    list_posts_with_authors,
    update_post_title,
    user_exists,
)
from database.session import build_engine, build_session_factory, init_db


@asynccontextmanager
async def _session(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'helpers.sqlite3'}")
    await init_db(engine)
    factory = build_session_factory(engine)
    try:
        async with factory() as session:
            yield session
    finally:
        await engine.dispose()


async def _john(session):
    return await create_user(
        session,
        full_name="John Doe",
        email="doe.john@example.com",
        username="doe.john",
        password_hash="$2b$04$hash",
    )


class TestUserStore:
    @pytest.mark.asyncio
    async def test_find_by_username_or_email(self, tmp_path):
        async with _session(tmp_path) as session:
            user = await _john(session)
            assert (await find_user_by_login(session, "doe.john")).id == user.id
            assert (await find_user_by_login(session, "doe.john@example.com")).id == user.id
            assert await find_user_by_login(session, "nobody") is None

    @pytest.mark.asyncio
    async def test_user_exists_matches_either_field(self, tmp_path):
        async with _session(tmp_path) as session:
            await _john(session)
            assert await user_exists(session, "doe.john@example.com", "someone.else")
            assert await user_exists(session, "other@example.com", "doe.john")
            assert not await user_exists(session, "other@example.com", "someone.else")


class TestPostStore:
    @pytest.mark.asyncio
    async def test_owned_lookup_requires_matching_owner(self, tmp_path):
        async with _session(tmp_path) as session:
            owner = await _john(session)
            post = await create_post(session, "Hello", owner.id)

            assert (await find_owned_post(session, post.id, owner.id)).id == post.id
            assert await find_owned_post(session, post.id, uuid.uuid4()) is None
            assert await find_owned_post(session, uuid.uuid4(), owner.id) is None

    @pytest.mark.asyncio
    async def test_update_and_delete(self, tmp_path):
        async with _session(tmp_path) as session:
            owner = await _john(session)
            post = await create_post(session, "Hello", str(owner.id))

            updated = await update_post_title(session, post, "Bye")
            assert updated.title == "Bye"
            assert updated.created_by == owner.id

            await delete_post(session, updated)
            assert await find_owned_post(session, post.id, owner.id) is None

    @pytest.mark.asyncio
    async def test_list_loads_authors(self, tmp_path):
        async with _session(tmp_path) as session:
            owner = await _john(session)
            await create_post(session, "first", owner.id)
            await create_post(session, "second", owner.id)

            posts = await list_posts_with_authors(session)
            assert [p.title for p in posts] == ["first", "second"]
            assert all(p.author.username == "doe.john" for p in posts)
