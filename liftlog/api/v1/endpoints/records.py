"""Personal record (ledger) endpoints."""

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from liftlog.api.deps import get_actor
from liftlog.core.identity import Actor
from liftlog.db.session import get_db
from liftlog.schemas.records import LedgerEntryRead, UserRecordRead
from liftlog.services.stats_reader import StatsReader

router = APIRouter()


@router.get("", response_model=list[UserRecordRead])
async def list_records(
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    """Every record the caller holds, newest first."""
    rows = await StatsReader(db).list_user_records(actor)
    return [
        UserRecordRead(
            exercise_id=entry.exercise_id,
            exercise_name=name,
            record_type=entry.record_type,
            value=entry.value,
            achieved_at=entry.achieved_at,
        )
        for entry, name in rows
    ]


@router.get("/{exercise_id}", response_model=list[LedgerEntryRead])
async def exercise_records(
    exercise_id: uuid.UUID,
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    return await StatsReader(db).get_exercise_records(actor, exercise_id)
