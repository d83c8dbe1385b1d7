"""Read-only queries over logged sets and ledger entries."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import date, timedelta

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from liftlog.core.constants import DEFAULT_HISTORY_LIMIT, SUMMARY_MONTH_DAYS, SUMMARY_WEEK_DAYS
from liftlog.core.enums import RecordType
from liftlog.core.identity import Actor
from liftlog.models.exercise import Exercise
from liftlog.models.ledger import LedgerEntry
from liftlog.models.workout import LoggedSet, WorkoutSession
from liftlog.services.set_ingestion import get_owned_session, get_visible_exercise

_RECORD_ORDER = {record_type: i for i, record_type in enumerate(RecordType)}


@dataclass(frozen=True, slots=True)
class TrainingSummary:
    workouts_last_7_days: int
    workouts_last_30_days: int
    volume_last_7_days: float


class StatsReader:
    """Pass-through queries on the storage the gateway writes. No caching."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_best(
        self, actor: Actor, exercise_id: uuid.UUID, record_type: RecordType
    ) -> LedgerEntry | None:
        result = await self.db.execute(
            select(LedgerEntry).where(
                LedgerEntry.user_id == actor.user_id,
                LedgerEntry.exercise_id == exercise_id,
                LedgerEntry.record_type == record_type,
            )
        )
        return result.scalar_one_or_none()

    async def get_exercise_records(self, actor: Actor, exercise_id: uuid.UUID) -> list[LedgerEntry]:
        """Every record type the caller holds for one exercise, in ledger order."""
        await get_visible_exercise(self.db, actor, exercise_id)
        result = await self.db.execute(
            select(LedgerEntry).where(
                LedgerEntry.user_id == actor.user_id,
                LedgerEntry.exercise_id == exercise_id,
            )
        )
        return sorted(result.scalars().all(), key=lambda e: _RECORD_ORDER[e.record_type])

    async def list_user_records(self, actor: Actor) -> list[tuple[LedgerEntry, str]]:
        """All ledger entries of the caller with the exercise name, newest achievement first."""
        result = await self.db.execute(
            select(LedgerEntry, Exercise.name)
            .join(Exercise, Exercise.id == LedgerEntry.exercise_id)
            .where(LedgerEntry.user_id == actor.user_id)
            .order_by(LedgerEntry.achieved_at.desc(), Exercise.name)
        )
        return [(entry, name) for entry, name in result.all()]

    async def exercise_history(
        self, actor: Actor, exercise_id: uuid.UUID, limit: int = DEFAULT_HISTORY_LIMIT
    ) -> list[LoggedSet]:
        """The caller's most recent `limit` sets for an exercise, oldest first, with PR flags as persisted."""
        await get_visible_exercise(self.db, actor, exercise_id)
        result = await self.db.execute(
            select(LoggedSet)
            .join(WorkoutSession, WorkoutSession.id == LoggedSet.session_id)
            .where(
                WorkoutSession.user_id == actor.user_id,
                LoggedSet.exercise_id == exercise_id,
            )
            .options(selectinload(LoggedSet.exercise))
            .order_by(LoggedSet.created_at.desc(), LoggedSet.set_number.desc())
            .limit(limit)
        )
        return list(reversed(result.scalars().all()))

    async def list_session_sets(self, actor: Actor, session_id: uuid.UUID) -> list[LoggedSet]:
        await get_owned_session(self.db, actor, session_id)
        result = await self.db.execute(
            select(LoggedSet)
            .where(LoggedSet.session_id == session_id)
            .options(selectinload(LoggedSet.exercise))
            .order_by(LoggedSet.created_at.asc(), LoggedSet.set_number.asc())
        )
        return list(result.scalars().all())

    async def session_volume(self, actor: Actor, session_id: uuid.UUID) -> float:
        """Sum of weight × reps over the session's sets (0 for an empty session)."""
        await get_owned_session(self.db, actor, session_id)
        result = await self.db.execute(
            select(func.coalesce(func.sum(LoggedSet.weight * LoggedSet.reps), 0.0)).where(
                LoggedSet.session_id == session_id
            )
        )
        return float(result.scalar() or 0.0)

    async def training_summary(self, actor: Actor, today: date | None = None) -> TrainingSummary:
        """Workout counts for the last 7 and 30 days and the last 7 days' volume."""
        today = today or date.today()
        week_start = today - timedelta(days=SUMMARY_WEEK_DAYS)
        month_start = today - timedelta(days=SUMMARY_MONTH_DAYS)

        counts = await self.db.execute(
            select(
                func.count(WorkoutSession.id).filter(WorkoutSession.date >= week_start),
                func.count(WorkoutSession.id).filter(WorkoutSession.date >= month_start),
            ).where(WorkoutSession.user_id == actor.user_id)
        )
        week_count, month_count = counts.one()

        volume = await self.db.execute(
            select(func.coalesce(func.sum(LoggedSet.weight * LoggedSet.reps), 0.0))
            .join(WorkoutSession, WorkoutSession.id == LoggedSet.session_id)
            .where(WorkoutSession.user_id == actor.user_id, WorkoutSession.date >= week_start)
        )
        return TrainingSummary(
            workouts_last_7_days=int(week_count or 0),
            workouts_last_30_days=int(month_count or 0),
            volume_last_7_days=float(volume.scalar() or 0.0),
        )
