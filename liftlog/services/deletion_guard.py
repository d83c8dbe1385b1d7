"""Deletion guard: referential policy for removing exercises, sessions and users.

Exercises are restrict-referenced by logged sets. Sessions own their sets.
Ledger entries are an advance-only summary: deleting the set that set a
record does not roll the record back.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Sequence

from sqlalchemy import delete, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from liftlog.core.errors import ForbiddenError, NotFoundError, RestrictedError
from liftlog.core.identity import Actor
from liftlog.db.session import unit_of_work
from liftlog.models.exercise import Exercise
from liftlog.models.ledger import LedgerEntry
from liftlog.models.user import AuthSession, User
from liftlog.models.workout import LoggedSet, WorkoutSession

logger = logging.getLogger(__name__)


class DeletionGuard:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def _count_referencing_sets(self, exercise_ids: Sequence[uuid.UUID]) -> int:
        result = await self.db.execute(
            select(func.count(LoggedSet.id)).where(LoggedSet.exercise_id.in_(exercise_ids))
        )
        return int(result.scalar() or 0)

    async def delete_exercise(self, actor: Actor, exercise_id: uuid.UUID) -> None:
        """Delete an unreferenced exercise and its ledger entries. Raises RestrictedError if sets use it."""
        try:
            async with unit_of_work(self.db):
                exercise = await self.db.get(Exercise, exercise_id)
                if exercise is None or not (actor.is_admin or exercise.is_visible_to(actor.user_id)):
                    raise NotFoundError("Exercise not found")
                if not actor.is_admin and exercise.user_id != actor.user_id:
                    raise ForbiddenError("Only an admin can delete a shared exercise")

                referencing = await self._count_referencing_sets([exercise_id])
                if referencing:
                    logger.warning(
                        "Refused to delete exercise %s: %d logged sets reference it", exercise_id, referencing
                    )
                    raise RestrictedError(
                        f"Exercise is used by {referencing} logged set(s); delete those sessions first"
                    )

                await self.db.execute(delete(LedgerEntry).where(LedgerEntry.exercise_id == exercise_id))
                await self.db.execute(delete(Exercise).where(Exercise.id == exercise_id))
                self.db.expunge(exercise)
        except IntegrityError as exc:
            # A set referencing the exercise was committed after our count
            raise RestrictedError("Exercise is referenced by logged sets") from exc
        logger.info("Deleted exercise %s", exercise_id)

    async def delete_session(self, actor: Actor, session_id: uuid.UUID) -> int:
        """Delete a session and its sets; returns how many sets went with it. Ledger is untouched."""
        async with unit_of_work(self.db):
            session = await self.db.get(WorkoutSession, session_id)
            if session is None:
                raise NotFoundError("Workout session not found")
            if session.user_id != actor.user_id and not actor.is_admin:
                raise ForbiddenError("Workout session belongs to another user")

            removed = await self.db.execute(delete(LoggedSet).where(LoggedSet.session_id == session_id))
            await self.db.execute(delete(WorkoutSession).where(WorkoutSession.id == session_id))
            self.db.expunge(session)
        logger.info("Deleted workout session %s with %d sets", session_id, removed.rowcount)
        return removed.rowcount

    async def delete_user(self, actor: Actor, user_id: uuid.UUID) -> None:
        """
        Delete a user with their sessions, sets, custom exercises, ledger
        entries and auth sessions. If another user's sets still reference
        one of their custom exercises, nothing is deleted and
        RestrictedError is raised.
        """
        if actor.user_id != user_id and not actor.is_admin:
            raise ForbiddenError("Only an admin can delete another user")
        try:
            async with unit_of_work(self.db):
                user = await self.db.get(User, user_id)
                if user is None:
                    raise NotFoundError("User not found")

                own_sessions = select(WorkoutSession.id).where(WorkoutSession.user_id == user_id)
                await self.db.execute(delete(LoggedSet).where(LoggedSet.session_id.in_(own_sessions)))
                await self.db.execute(delete(WorkoutSession).where(WorkoutSession.user_id == user_id))

                custom_ids = list(
                    (await self.db.execute(select(Exercise.id).where(Exercise.user_id == user_id))).scalars()
                )
                if custom_ids:
                    referencing = await self._count_referencing_sets(custom_ids)
                    if referencing:
                        logger.warning(
                            "Refused to delete user %s: %d sets of other users reference their exercises",
                            user_id,
                            referencing,
                        )
                        raise RestrictedError(
                            f"Custom exercises of this user are used by {referencing} logged set(s) of other users"
                        )

                await self.db.execute(
                    delete(LedgerEntry).where(
                        or_(LedgerEntry.user_id == user_id, LedgerEntry.exercise_id.in_(custom_ids))
                    )
                )
                await self.db.execute(delete(Exercise).where(Exercise.user_id == user_id))
                await self.db.execute(delete(AuthSession).where(AuthSession.user_id == user_id))
                await self.db.execute(delete(User).where(User.id == user_id))
                self.db.expunge(user)
        except IntegrityError as exc:
            raise RestrictedError("User data is still referenced elsewhere") from exc
        logger.info("Deleted user %s", user_id)
