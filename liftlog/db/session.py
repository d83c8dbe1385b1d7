"""Async database engine and session factory.

Writers are serialized per (user, exercise) pair before a set is stamped.
PostgreSQL takes a transaction-scoped advisory lock on the pair; SQLite has
no row or advisory locks and relies on BEGIN IMMEDIATE, which already holds
the database-wide write lock for the whole transaction.
"""

import hashlib
import uuid
from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import event, func, select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from liftlog.core.config import Settings, get_settings


def install_sqlite_pragmas(engine: AsyncEngine) -> None:
    """Enforce foreign keys and take the write lock at BEGIN on SQLite.

    pysqlite's implicit transactions would otherwise let two writers read
    the same ledger row and break SAVEPOINT handling.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def build_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine for the configured backend."""
    url = settings.async_database_url
    if url.startswith("sqlite"):
        engine = create_async_engine(
            url,
            echo=settings.debug,
            connect_args={"timeout": settings.sqlite_busy_timeout_seconds},
        )
        install_sqlite_pragmas(engine)
        return engine
    return create_async_engine(
        url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_pre_ping=True,
        echo=settings.debug,
    )


def build_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


settings = get_settings()
engine = build_engine(settings)
async_session_maker = build_session_maker(engine)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency that yields an async DB session, committed when the request succeeds."""
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


@asynccontextmanager
async def unit_of_work(db: AsyncSession) -> AsyncIterator[AsyncSession]:
    """
    Run a block all-or-nothing. Opens (and commits) a transaction when the
    session has none; inside a caller's transaction it uses a SAVEPOINT so a
    failure undoes only this block and the caller decides when to commit.
    """
    if db.in_transaction():
        async with db.begin_nested():
            yield db
    else:
        async with db.begin():
            yield db


def pair_lock_key(user_id: uuid.UUID, exercise_id: uuid.UUID) -> int:
    """Stable signed 64-bit key for one (user, exercise) pair, the same in every process."""
    digest = hashlib.blake2b(user_id.bytes + exercise_id.bytes, digest_size=8).digest()
    return int.from_bytes(digest, "big", signed=True)


async def lock_exercise_pair(db: AsyncSession, user_id: uuid.UUID, exercise_id: uuid.UUID) -> None:
    """Block until no other transaction is writing sets for this pair. Released at commit/rollback."""
    if db.get_bind().dialect.name != "postgresql":
        return
    await db.execute(select(func.pg_advisory_xact_lock(pair_lock_key(user_id, exercise_id))))
