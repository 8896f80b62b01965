"""
Post API routes — create, list, update, delete.

Route prefix: /api/post
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from auth.dependencies import db_session, get_current_user
from database.helpers import (
    create_post,
    delete_post,
    find_owned_post,
    list_posts_with_authors,
    update_post_title,
)
from utils.errors import NotFoundError
from utils.responses import success_response
from utils.schemas import (
    CreatePostRequest,
    DeletePostRequest,
    PostAuthor,
    PostOut,
    PostWithAuthor,
    UpdatePostRequest,
    UserSnapshot,
)
from utils.validators import parse_id, require_fields

logger = logging.getLogger(__name__)

router = APIRouter(tags=["post"])
health_router = APIRouter(tags=["health"])


@router.post("/create", status_code=status.HTTP_201_CREATED)
async def create(
    req: CreatePostRequest,
    session: AsyncSession = Depends(db_session),
    user: UserSnapshot = Depends(get_current_user),
) -> Dict[str, Any]:
    """Create a post owned by the authenticated user."""
    require_fields(req.title)

    post = await create_post(session, title=req.title, created_by=user.id)
    await session.commit()
    logger.info("Post %s created by %s", post.id, user.id)

    return success_response(
        "Post created successfully!",
        {"post": PostOut.model_validate(post).to_json()},
    )


@router.get("/")
async def list_posts(
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    """Every post, with the author's name and username."""
    posts = await list_posts_with_authors(session)
    return success_response(
        "Posts fetched successfully!",
        {
            "posts": [
                PostWithAuthor.model_validate(
                    {
                        "id": p.id,
                        "title": p.title,
                        "created_by": PostAuthor.model_validate(p.author),
                        "created_at": p.created_at,
                        "updated_at": p.updated_at,
                    }
                ).to_json()
                for p in posts
            ]
        },
    )


@router.put("/update")
async def update(
    req: UpdatePostRequest,
    session: AsyncSession = Depends(db_session),
    user: UserSnapshot = Depends(get_current_user),
) -> Dict[str, Any]:
    """Change the title of a post the caller owns."""
    require_fields(req.title, req.post_id)
    post_id = parse_id(req.post_id)

    post = await find_owned_post(session, post_id, user.id)
    if post is None:
        raise NotFoundError(f"Post with id: {req.post_id} does not exist!")

    post = await update_post_title(session, post, req.title)
    await session.commit()
    logger.info("Post %s updated by %s", post.id, user.id)

    return success_response(
        "Post updated successfully!",
        {"post": PostOut.model_validate(post).to_json()},
    )


@router.post("/delete")
async def delete(
    req: DeletePostRequest,
    session: AsyncSession = Depends(db_session),
    user: UserSnapshot = Depends(get_current_user),
) -> Dict[str, Any]:
    """Delete a post the caller owns."""
    post_id = parse_id(req.post_id)

    post = await find_owned_post(session, post_id, user.id)
    if post is None:
        raise NotFoundError(f"Post with id: {req.post_id} does not exist!")

    await delete_post(session, post)
    await session.commit()
    logger.info("Post %s deleted by %s", post_id, user.id)

    return success_response("Post deleted successfully!")


@health_router.get("/health")
async def health_check() -> Dict[str, Any]:
    return success_response("Service is healthy", {"status": "ok"})
