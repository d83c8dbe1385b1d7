"""Print table row counts and audit the one-row-per-triple ledger invariant."""

import asyncio

from sqlalchemy import func, select, text

from liftlog.db.session import async_session_maker, engine
from liftlog.models import LedgerEntry

TABLES = ["users", "exercises", "workout_sessions", "logged_sets", "ledger_entries", "auth_sessions"]


async def check_data():
    async with async_session_maker() as session:
        for table in TABLES:
            result = await session.execute(text(f"SELECT count(*) FROM {table}"))
            print(f"Table '{table}' row count: {result.scalar()}")

        duplicates = await session.execute(
            select(LedgerEntry.user_id, LedgerEntry.exercise_id, LedgerEntry.record_type, func.count())
            .group_by(LedgerEntry.user_id, LedgerEntry.exercise_id, LedgerEntry.record_type)
            .having(func.count() > 1)
        )
        rows = duplicates.all()
        if rows:
            print(f"Ledger invariant violated for {len(rows)} triple(s):")
            for user_id, exercise_id, record_type, count in rows:
                print(f"  user={user_id} exercise={exercise_id} type={record_type.value} rows={count}")
        else:
            print("Ledger invariant holds: one entry per (user, exercise, record type)")
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(check_data())
