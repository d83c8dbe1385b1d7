"""Set logging and per-session endpoints."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from liftlog.api.deps import get_actor
from liftlog.core.identity import Actor
from liftlog.db.session import get_db
from liftlog.schemas.workout import LoggedSetCreate, LoggedSetRead, SessionDeleted, SessionVolumeRead
from liftlog.services.deletion_guard import DeletionGuard
from liftlog.services.set_ingestion import SetIngestionGateway
from liftlog.services.stats_reader import StatsReader

router = APIRouter()


@router.post("/{session_id}/sets", response_model=LoggedSetRead, status_code=201)
async def log_set(
    session_id: uuid.UUID,
    payload: LoggedSetCreate,
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    """Log a set; the response carries the personal records it established."""
    return await SetIngestionGateway(db).log_set(
        actor,
        session_id,
        payload.exercise_id,
        payload.set_number,
        payload.reps,
        payload.weight,
        payload.rpe,
    )


@router.get("/{session_id}/sets", response_model=list[LoggedSetRead])
async def list_session_sets(
    session_id: uuid.UUID,
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    return await StatsReader(db).list_session_sets(actor, session_id)


@router.get("/{session_id}/volume", response_model=SessionVolumeRead)
async def session_volume(
    session_id: uuid.UUID,
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    """Total volume (weight × reps) of the session."""
    volume = await StatsReader(db).session_volume(actor, session_id)
    return SessionVolumeRead(session_id=session_id, volume=volume)


@router.delete("/{session_id}", response_model=SessionDeleted)
async def delete_session(
    session_id: uuid.UUID,
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    """Delete a session and its sets. Records already earned stay in the ledger."""
    removed = await DeletionGuard(db).delete_session(actor, session_id)
    return SessionDeleted(session_id=session_id, removed_sets=removed)
