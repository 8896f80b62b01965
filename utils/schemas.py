"""
Pydantic schemas for requests, responses and the token identity snapshot.

Field names are snake_case in Python and camelCase on the wire.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


# ═══════════════════════════════════════════════════════════════════════════════
# Identity
# ═══════════════════════════════════════════════════════════════════════════════


class UserSnapshot(CamelModel):
    """
    Public view of a user account.

    This is what the signer embeds in a token and what auth responses
    return as ``user``.  It never carries the password hash.
    """

    model_config = ConfigDict(extra="ignore")

    id: uuid.UUID
    full_name: str
    email: str
    username: str


# ═══════════════════════════════════════════════════════════════════════════════
# Requests
# ═══════════════════════════════════════════════════════════════════════════════
#
# Every field is optional so that a missing value reaches the handler and
# is reported as a 400 rather than a schema error.


class SignupRequest(CamelModel):
    full_name: Optional[str] = None
    email: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(CamelModel):
    user: Optional[str] = Field(default=None, description="Username or email")
    password: Optional[str] = None


class CreatePostRequest(CamelModel):
    title: Optional[str] = None


class UpdatePostRequest(CamelModel):
    post_id: Optional[str] = None
    title: Optional[str] = None


class DeletePostRequest(CamelModel):
    post_id: Optional[str] = None


# ═══════════════════════════════════════════════════════════════════════════════
# Responses
# ═══════════════════════════════════════════════════════════════════════════════


class PostOut(CamelModel):
    id: uuid.UUID
    title: str
    created_by: uuid.UUID
    created_at: datetime
    updated_at: datetime


class PostAuthor(CamelModel):
    id: uuid.UUID
    full_name: str
    username: str


class PostWithAuthor(CamelModel):
    id: uuid.UUID
    title: str
    created_by: PostAuthor
    created_at: datetime
    updated_at: datetime


class Envelope(BaseModel):
    message: str
    data: Dict[str, Any] = Field(default_factory=dict)
    success: bool = True

