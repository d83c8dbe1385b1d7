import uuid
from types import SimpleNamespace

from liftlog.db.session import lock_exercise_pair, pair_lock_key


class _RecordingSession:
    def __init__(self, dialect_name):
        self.dialect_name = dialect_name
        self.statements = []

    def get_bind(self):
        return SimpleNamespace(dialect=SimpleNamespace(name=self.dialect_name))

    async def execute(self, stmt):
        self.statements.append(stmt)


def test_pair_lock_key_is_stable_and_fits_bigint():
    user_id = uuid.UUID("8d1f6c1e-0c9a-4c43-9b53-3f0e8f2a1b11")
    exercise_id = uuid.UUID("2b7e54d0-5f3c-4d62-8a1e-6c9d0f4b7a22")

    key = pair_lock_key(user_id, exercise_id)
    assert key == pair_lock_key(user_id, exercise_id)
    assert -(2**63) <= key < 2**63
    assert key != pair_lock_key(exercise_id, user_id)
    assert key != pair_lock_key(user_id, uuid.uuid4())


async def test_postgres_takes_a_transaction_advisory_lock():
    db = _RecordingSession("postgresql")
    user_id, exercise_id = uuid.uuid4(), uuid.uuid4()

    await lock_exercise_pair(db, user_id, exercise_id)

    [stmt] = db.statements
    assert "pg_advisory_xact_lock" in str(stmt)
    assert pair_lock_key(user_id, exercise_id) in stmt.compile().params.values()


async def test_sqlite_relies_on_the_database_write_lock():
    db = _RecordingSession("sqlite")
    await lock_exercise_pair(db, uuid.uuid4(), uuid.uuid4())
    assert db.statements == []
