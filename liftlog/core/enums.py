"""Shared enums for models and API."""

from enum import Enum


class UserRole(str, Enum):
    """Role supplied by the identity provider."""

    USER = "user"
    ADMIN = "admin"


class RecordType(str, Enum):
    """Derived performance metrics tracked in the record ledger.

    Declaration order is the order in which a set's candidates are
    reconciled against the ledger.
    """

    MAX_WEIGHT = "max_weight"  # Heaviest weight lifted for at least one rep
    MAX_REPS = "max_reps"  # Most reps in a single set
    ESTIMATED_ONE_REP_MAX = "estimated_one_rep_max"  # Epley estimate
    MAX_VOLUME = "max_volume"  # weight × reps


class ExerciseCategory(str, Enum):
    """Categories used by the default exercise library."""

    CHEST = "chest"
    BACK = "back"
    LEGS = "legs"
    SHOULDERS = "shoulders"
    ARMS = "arms"
    CORE = "core"
    OTHER = "other"
