"""User deletion endpoint (account removal)."""

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from liftlog.api.deps import get_actor
from liftlog.core.identity import Actor
from liftlog.db.session import get_db
from liftlog.services.deletion_guard import DeletionGuard

router = APIRouter()


@router.delete("/{user_id}", status_code=204)
async def delete_user(
    user_id: uuid.UUID,
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    """Delete a user and everything they own. Self or admin only."""
    await DeletionGuard(db).delete_user(actor, user_id)
    return None
