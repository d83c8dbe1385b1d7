"""Exercise history and deletion endpoints."""

import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from liftlog.api.deps import get_actor
from liftlog.core.constants import DEFAULT_HISTORY_LIMIT
from liftlog.core.identity import Actor
from liftlog.db.session import get_db
from liftlog.schemas.workout import LoggedSetRead
from liftlog.services.deletion_guard import DeletionGuard
from liftlog.services.stats_reader import StatsReader

router = APIRouter()


@router.get("/{exercise_id}/history", response_model=list[LoggedSetRead])
async def exercise_history(
    exercise_id: uuid.UUID,
    limit: int = Query(DEFAULT_HISTORY_LIMIT, ge=1, le=1000),
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    """Chronological sets for an exercise with their PR flags."""
    return await StatsReader(db).exercise_history(actor, exercise_id, limit=limit)


@router.delete("/{exercise_id}", status_code=204)
async def delete_exercise(
    exercise_id: uuid.UUID,
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    """Delete an exercise no logged set references (409 otherwise)."""
    await DeletionGuard(db).delete_exercise(actor, exercise_id)
    return None
