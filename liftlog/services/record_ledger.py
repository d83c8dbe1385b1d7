"""Record ledger: atomic compare-and-advance of best values per triple.

Each (user, exercise, record type) owns exactly one ledger row, guarded by
a unique constraint. Advancing is a conditional UPDATE that only matches
when the stored value is strictly lower than the candidate, so the
read-compare-write happens inside the database under the row lock. The
first value for a triple is INSERTed inside a SAVEPOINT; when a concurrent
transaction wins that insert, the savepoint is rolled back and tenacity
retries the compare against the row the winner created.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from tenacity import (
    AsyncRetrying,
    RetryError,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
)

from liftlog.core.config import get_settings
from liftlog.core.enums import RecordType
from liftlog.core.errors import LedgerConflictError
from liftlog.models.ledger import LedgerEntry

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AdvanceResult:
    """Outcome of one compare-and-advance. new_best is the ledger value afterwards."""

    advanced: bool
    new_best: float


class RecordLedger:
    """Compare-and-write access to ledger rows, bound to the caller's session/transaction."""

    def __init__(self, db: AsyncSession, *, max_attempts: int | None = None) -> None:
        self.db = db
        self.max_attempts = max_attempts or get_settings().ledger_max_attempts

    async def get(
        self, user_id: uuid.UUID, exercise_id: uuid.UUID, record_type: RecordType
    ) -> LedgerEntry | None:
        result = await self.db.execute(
            select(LedgerEntry).where(
                LedgerEntry.user_id == user_id,
                LedgerEntry.exercise_id == exercise_id,
                LedgerEntry.record_type == record_type,
            )
        )
        return result.scalar_one_or_none()

    async def try_advance(
        self,
        user_id: uuid.UUID,
        exercise_id: uuid.UUID,
        record_type: RecordType,
        candidate: float,
        achieved_at: datetime,
    ) -> AdvanceResult:
        """
        Store candidate as the new best if there is no entry yet or it is
        strictly greater than the stored value. Ties never advance.
        Raises LedgerConflictError after max_attempts lost insert races.
        """
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.max_attempts),
                retry=retry_if_exception_type(IntegrityError),
                before_sleep=before_sleep_log(logger, logging.WARNING),
            ):
                with attempt:
                    outcome = await self._advance_once(
                        user_id, exercise_id, record_type, candidate, achieved_at
                    )
        except RetryError as exc:
            logger.error(
                "Ledger contention on %s for user %s exercise %s exceeded %d attempts",
                record_type.value,
                user_id,
                exercise_id,
                self.max_attempts,
            )
            raise LedgerConflictError(
                f"Could not record {record_type.value} after {self.max_attempts} attempts; retry the request"
            ) from exc
        return outcome

    async def _advance_once(
        self,
        user_id: uuid.UUID,
        exercise_id: uuid.UUID,
        record_type: RecordType,
        candidate: float,
        achieved_at: datetime,
    ) -> AdvanceResult:
        """One compare-and-advance pass. IntegrityError means another transaction opened the entry first."""
        triple = (
            LedgerEntry.user_id == user_id,
            LedgerEntry.exercise_id == exercise_id,
            LedgerEntry.record_type == record_type,
        )
        result = await self.db.execute(
            update(LedgerEntry)
            .where(*triple, LedgerEntry.value < candidate)
            .values(value=candidate, achieved_at=achieved_at)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 1:
            logger.debug(
                "Ledger %s advanced to %s for user %s exercise %s",
                record_type.value,
                candidate,
                user_id,
                exercise_id,
            )
            return AdvanceResult(advanced=True, new_best=candidate)

        current = (
            await self.db.execute(select(LedgerEntry.value).where(*triple))
        ).scalar_one_or_none()
        if current is not None:
            logger.debug(
                "Ledger %s kept at %s (candidate %s)", record_type.value, current, candidate
            )
            return AdvanceResult(advanced=False, new_best=current)

        # A lost unique race rolls back only this savepoint
        async with self.db.begin_nested():
            await self.db.execute(
                insert(LedgerEntry).values(
                    id=uuid.uuid4(),
                    user_id=user_id,
                    exercise_id=exercise_id,
                    record_type=record_type,
                    value=candidate,
                    achieved_at=achieved_at,
                )
            )
        logger.debug(
            "Ledger %s opened at %s for user %s exercise %s",
            record_type.value,
            candidate,
            user_id,
            exercise_id,
        )
        return AdvanceResult(advanced=True, new_best=candidate)
