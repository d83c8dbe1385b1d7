"""Record evaluator: candidate metric values for one logged set.

Pure functions over (reps, weight). A set with zero reps is a failed or
incomplete attempt and produces no candidates at all.
"""

from __future__ import annotations

from collections.abc import Callable

from liftlog.core.constants import EPLEY_REPS_DIVISOR
from liftlog.core.enums import RecordType


def epley_one_rep_max(weight: float, reps: int) -> float:
    """Epley estimate: weight * (1 + reps / 30)."""
    return weight * (1 + reps / EPLEY_REPS_DIVISOR)


# Evaluated in RecordType declaration order
RECORD_FORMULAS: dict[RecordType, Callable[[float, int], float]] = {
    RecordType.MAX_WEIGHT: lambda weight, reps: float(weight),
    RecordType.MAX_REPS: lambda weight, reps: float(reps),
    RecordType.ESTIMATED_ONE_REP_MAX: epley_one_rep_max,
    RecordType.MAX_VOLUME: lambda weight, reps: float(weight) * reps,
}


def evaluate_set(reps: int, weight: float, rpe: int | None = None) -> dict[RecordType, float]:
    """
    Candidate value per record type for a set, higher is always better.
    RPE is accepted for signature parity with the logged set but does not
    change any candidate. Returns an empty dict when reps == 0.
    """
    if reps < 1:
        return {}
    return {record_type: RECORD_FORMULAS[record_type](weight, reps) for record_type in RecordType}
