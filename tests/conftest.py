"""Pytest configuration and fixtures: file-backed SQLite per test, seeded users/exercises/sessions."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import AsyncGenerator
import uuid

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from liftlog.core.enums import UserRole
from liftlog.core.identity import Actor
from liftlog.db.base import Base
from liftlog.db.session import build_session_maker, get_db, install_sqlite_pragmas
from liftlog.main import app as main_app
from liftlog.models import AuthSession, Exercise, User, WorkoutSession
from liftlog.services.seed import default_exercise_id, seed_default_exercises
from liftlog.services.set_ingestion import SetIngestionGateway

TODAY = date(2026, 10, 17)


@dataclass
class World:
    alice: Actor
    bob: Actor
    admin: Actor
    bench_id: uuid.UUID
    squat_id: uuid.UUID
    alice_custom_id: uuid.UUID
    alice_session_id: uuid.UUID
    bob_session_id: uuid.UUID


# -------------------------------------------------------------------------
# Database Fixtures
# -------------------------------------------------------------------------


@pytest.fixture
async def async_engine(tmp_path):
    """File-backed SQLite so concurrent tests get real, separate connections."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'liftlog.db'}",
        connect_args={"timeout": 30},
    )
    install_sqlite_pragmas(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(async_engine) -> async_sessionmaker[AsyncSession]:
    return build_session_maker(async_engine)


@pytest.fixture
async def world(session_maker) -> World:
    """Three users, the default library, one custom exercise, one session each for alice and bob."""
    alice = User(username="alice", role=UserRole.USER)
    bob = User(username="bob", role=UserRole.USER)
    admin = User(username="root", role=UserRole.ADMIN)
    async with session_maker() as db:
        await seed_default_exercises(db)
        async with db.begin():
            db.add_all([alice, bob, admin])
            await db.flush()
            custom = Exercise(name="Landmine Press", category="shoulders", is_default=False, user_id=alice.id)
            alice_session = WorkoutSession(user_id=alice.id, date=TODAY)
            bob_session = WorkoutSession(user_id=bob.id, date=TODAY)
            db.add_all([custom, alice_session, bob_session])
            db.add(
                AuthSession(
                    token="alice-token",
                    user_id=alice.id,
                    expires_at=datetime.now(timezone.utc) + timedelta(days=1),
                )
            )
    return World(
        alice=Actor(alice.id, UserRole.USER),
        bob=Actor(bob.id, UserRole.USER),
        admin=Actor(admin.id, UserRole.ADMIN),
        bench_id=default_exercise_id("bench-press"),
        squat_id=default_exercise_id("squat"),
        alice_custom_id=custom.id,
        alice_session_id=alice_session.id,
        bob_session_id=bob_session.id,
    )


@pytest.fixture
def log_set(session_maker):
    """Log a set in its own session, the way each request would."""

    async def _log(actor, session_id, exercise_id, reps, weight, rpe=None, set_number=None, **kwargs):
        async with session_maker() as db:
            return await SetIngestionGateway(db, **kwargs).log_set(
                actor, session_id, exercise_id, set_number, reps, weight, rpe
            )

    return _log


@pytest.fixture
def new_session(session_maker):
    async def _new(actor: Actor, on: date = TODAY) -> uuid.UUID:
        async with session_maker() as db:
            async with db.begin():
                session = WorkoutSession(user_id=actor.user_id, date=on)
                db.add(session)
        return session.id

    return _new


# -------------------------------------------------------------------------
# HTTP Fixtures
# -------------------------------------------------------------------------


@pytest.fixture
async def client(session_maker) -> AsyncGenerator[AsyncClient, None]:
    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    main_app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=main_app), base_url="http://test") as ac:
        yield ac
    main_app.dependency_overrides.clear()
