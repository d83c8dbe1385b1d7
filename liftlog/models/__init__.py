"""ORM models - import all so Base.metadata is complete for migrations."""

from liftlog.models.exercise import Exercise
from liftlog.models.ledger import LedgerEntry
from liftlog.models.user import AuthSession, User
from liftlog.models.workout import PR_FLAG_COLUMNS, LoggedSet, WorkoutSession

__all__ = [
    "AuthSession",
    "Exercise",
    "LedgerEntry",
    "LoggedSet",
    "PR_FLAG_COLUMNS",
    "User",
    "WorkoutSession",
]
