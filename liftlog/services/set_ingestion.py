"""Set ingestion: validate a set, reconcile its candidates with the ledger, persist it.

Validation happens before anything is written. Ledger advances and the set
row are written in one unit of work, so a failure at any later step leaves
neither a set nor a partially advanced ledger behind.
"""

from __future__ import annotations

import logging
import math
import uuid
from datetime import datetime, timezone
from numbers import Real

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.attributes import set_committed_value

from liftlog.core.constants import RPE_MAX, RPE_MIN
from liftlog.core.errors import ForbiddenError, NotFoundError, ValidationError
from liftlog.core.identity import Actor
from liftlog.db.session import lock_exercise_pair, unit_of_work
from liftlog.models.exercise import Exercise
from liftlog.models.workout import PR_FLAG_COLUMNS, LoggedSet, WorkoutSession
from liftlog.services.record_evaluator import evaluate_set
from liftlog.services.record_ledger import RecordLedger

logger = logging.getLogger(__name__)


def validate_set_input(reps: int, weight: float, rpe: int | None, set_number: int | None) -> None:
    """Reject malformed numbers. Raises ValidationError."""
    if isinstance(reps, bool) or not isinstance(reps, int):
        raise ValidationError("reps must be an integer")
    if reps < 0:
        raise ValidationError("reps must be >= 0")
    if isinstance(weight, bool) or not isinstance(weight, Real) or not math.isfinite(weight):
        raise ValidationError("weight must be a finite number")
    if weight < 0:
        raise ValidationError("weight must be >= 0")
    if rpe is not None:
        if isinstance(rpe, bool) or not isinstance(rpe, int):
            raise ValidationError("rpe must be an integer")
        if not RPE_MIN <= rpe <= RPE_MAX:
            raise ValidationError(f"rpe must be between {RPE_MIN} and {RPE_MAX}")
    if set_number is not None:
        if isinstance(set_number, bool) or not isinstance(set_number, int) or set_number < 1:
            raise ValidationError("set_number must be a positive integer")


async def get_owned_session(db: AsyncSession, actor: Actor, session_id: uuid.UUID) -> WorkoutSession:
    """Session that belongs to the caller, else NotFoundError / ForbiddenError."""
    session = await db.get(WorkoutSession, session_id)
    if session is None:
        raise NotFoundError("Workout session not found")
    if session.user_id != actor.user_id:
        raise ForbiddenError("Workout session belongs to another user")
    return session


async def get_visible_exercise(db: AsyncSession, actor: Actor, exercise_id: uuid.UUID) -> Exercise:
    """Shared or caller-owned exercise. Invisible ones look missing."""
    exercise = await db.get(Exercise, exercise_id)
    if exercise is None or not exercise.is_visible_to(actor.user_id):
        raise NotFoundError("Exercise not found")
    return exercise


async def next_set_number(db: AsyncSession, session_id: uuid.UUID, exercise_id: uuid.UUID) -> int:
    """1 + highest set number already logged for this exercise in the session."""
    result = await db.execute(
        select(func.max(LoggedSet.set_number)).where(
            LoggedSet.session_id == session_id,
            LoggedSet.exercise_id == exercise_id,
        )
    )
    current = result.scalar()
    return (current or 0) + 1


class SetIngestionGateway:
    """Admits new sets and flags the personal records they establish."""

    def __init__(self, db: AsyncSession, *, ledger_max_attempts: int | None = None) -> None:
        self.db = db
        self.ledger_max_attempts = ledger_max_attempts

    async def log_set(
        self,
        actor: Actor,
        session_id: uuid.UUID,
        exercise_id: uuid.UUID,
        set_number: int | None,
        reps: int,
        weight: float,
        rpe: int | None = None,
    ) -> LoggedSet:
        """
        Log one set and return it with its PR flags.

        Raises ValidationError, NotFoundError, ForbiddenError before any write;
        LedgerConflictError if ledger contention outlasts the retry bound.
        """
        validate_set_input(reps, weight, rpe, set_number)

        async with unit_of_work(self.db):
            session = await get_owned_session(self.db, actor, session_id)
            exercise = await get_visible_exercise(self.db, actor, exercise_id)
            user_id = session.user_id
            # Set numbering and the timestamp are taken under the pair lock
            await lock_exercise_pair(self.db, user_id, exercise.id)
            if set_number is None:
                set_number = await next_set_number(self.db, session.id, exercise.id)

            logged_at = datetime.now(timezone.utc)
            candidates = evaluate_set(reps, float(weight), rpe)

            ledger = RecordLedger(self.db, max_attempts=self.ledger_max_attempts)
            flags = {column: False for column in PR_FLAG_COLUMNS.values()}
            for record_type, candidate in candidates.items():
                outcome = await ledger.try_advance(user_id, exercise.id, record_type, candidate, logged_at)
                flags[PR_FLAG_COLUMNS[record_type]] = outcome.advanced

            logged = LoggedSet(
                session_id=session.id,
                exercise_id=exercise.id,
                set_number=set_number,
                reps=reps,
                weight=float(weight),
                rpe=rpe,
                created_at=logged_at,
                **flags,
            )
            self.db.add(logged)
            await self.db.flush()
            set_committed_value(logged, "exercise", exercise)

        logger.info(
            "Logged set %s (%s x %s) on exercise %s for user %s; records: %s",
            logged.id,
            logged.weight,
            logged.reps,
            exercise.id,
            user_id,
            ", ".join(rt.value for rt in logged.pr_types) or "none",
        )
        return logged
