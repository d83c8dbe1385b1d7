from datetime import timedelta

import pytest

from liftlog.core.enums import RecordType
from liftlog.core.errors import ForbiddenError, NotFoundError
from liftlog.services.stats_reader import StatsReader

from tests.conftest import TODAY


async def _read(session_maker, method, *args, **kwargs):
    async with session_maker() as db:
        return await getattr(StatsReader(db), method)(*args, **kwargs)


async def test_best_is_a_direct_ledger_read(session_maker, world, log_set):
    assert await _read(session_maker, "get_best", world.alice, world.bench_id, RecordType.MAX_WEIGHT) is None
    await log_set(world.alice, world.alice_session_id, world.bench_id, reps=5, weight=100.0)
    best = await _read(session_maker, "get_best", world.alice, world.bench_id, RecordType.MAX_VOLUME)
    assert best.value == 500.0


async def test_exercise_records_come_in_ledger_order(session_maker, world, log_set):
    await log_set(world.alice, world.alice_session_id, world.bench_id, reps=5, weight=100.0)
    records = await _read(session_maker, "get_exercise_records", world.alice, world.bench_id)
    assert [r.record_type for r in records] == list(RecordType)
    with pytest.raises(NotFoundError):
        await _read(session_maker, "get_exercise_records", world.bob, world.alice_custom_id)


async def test_user_records_newest_first_with_names(session_maker, world, log_set):
    await log_set(world.alice, world.alice_session_id, world.bench_id, reps=5, weight=100.0)
    await log_set(world.alice, world.alice_session_id, world.squat_id, reps=5, weight=140.0)
    await log_set(world.bob, world.bob_session_id, world.squat_id, reps=5, weight=90.0)

    rows = await _read(session_maker, "list_user_records", world.alice)
    assert len(rows) == 8
    assert {name for _, name in rows} == {"Bench Press", "Squat"}
    assert rows[0][1] == "Squat"
    assert all(entry.user_id == world.alice.user_id for entry, _ in rows)


async def test_history_is_chronological_and_scoped_to_the_caller(session_maker, world, log_set, new_session):
    earlier = await log_set(world.alice, world.alice_session_id, world.bench_id, reps=5, weight=100.0)
    second_session = await new_session(world.alice, TODAY + timedelta(days=2))
    later = await log_set(world.alice, second_session, world.bench_id, reps=5, weight=95.0)
    await log_set(world.bob, world.bob_session_id, world.bench_id, reps=5, weight=200.0)

    history = await _read(session_maker, "exercise_history", world.alice, world.bench_id)
    assert [s.id for s in history] == [earlier.id, later.id]
    assert history[0].pr_types == list(RecordType)
    assert history[1].pr_types == []
    assert history[0].exercise.name == "Bench Press"


async def test_history_limit_keeps_the_newest_sets(session_maker, world, log_set):
    logged = [
        await log_set(world.alice, world.alice_session_id, world.bench_id, reps=5, weight=100.0 + i)
        for i in range(5)
    ]

    limited = await _read(session_maker, "exercise_history", world.alice, world.bench_id, limit=3)
    assert [s.id for s in limited] == [s.id for s in logged[-3:]]
    assert limited[-1].weight == 104.0
    assert limited[-1].pr_types == [RecordType.MAX_WEIGHT, RecordType.ESTIMATED_ONE_REP_MAX, RecordType.MAX_VOLUME]


async def test_session_sets_and_volume(session_maker, world, log_set):
    assert await _read(session_maker, "session_volume", world.alice, world.alice_session_id) == 0.0
    await log_set(world.alice, world.alice_session_id, world.bench_id, reps=5, weight=100.0)
    await log_set(world.alice, world.alice_session_id, world.bench_id, reps=0, weight=120.0)
    await log_set(world.alice, world.alice_session_id, world.squat_id, reps=3, weight=140.0)

    assert await _read(session_maker, "session_volume", world.alice, world.alice_session_id) == 920.0
    sets = await _read(session_maker, "list_session_sets", world.alice, world.alice_session_id)
    assert [(s.exercise.name, s.set_number) for s in sets] == [("Bench Press", 1), ("Bench Press", 2), ("Squat", 1)]

    with pytest.raises(ForbiddenError):
        await _read(session_maker, "session_volume", world.bob, world.alice_session_id)


async def test_training_summary_windows(session_maker, world, log_set, new_session):
    recent = await new_session(world.alice, TODAY - timedelta(days=3))
    older = await new_session(world.alice, TODAY - timedelta(days=20))
    await new_session(world.alice, TODAY - timedelta(days=60))
    await log_set(world.alice, world.alice_session_id, world.bench_id, reps=5, weight=100.0)
    await log_set(world.alice, recent, world.squat_id, reps=2, weight=100.0)
    await log_set(world.alice, older, world.squat_id, reps=10, weight=100.0)

    summary = await _read(session_maker, "training_summary", world.alice, today=TODAY)
    # world session (today) + recent; the 20-day-old one only counts for the month
    assert summary.workouts_last_7_days == 2
    assert summary.workouts_last_30_days == 3
    assert summary.volume_last_7_days == 700.0
