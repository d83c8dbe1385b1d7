"""Shared FastAPI dependencies."""

import uuid

from fastapi import Header, HTTPException

from liftlog.core.enums import UserRole
from liftlog.core.identity import Actor


async def get_actor(
    x_user_id: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
) -> Actor:
    """Caller identity from headers set by the upstream identity provider."""
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    try:
        user_id = uuid.UUID(x_user_id)
        role = UserRole(x_user_role or UserRole.USER.value)
    except ValueError:
        raise HTTPException(status_code=401, detail="Invalid identity headers")
    return Actor(user_id=user_id, role=role)
