import pytest

from liftlog.core.enums import RecordType
from liftlog.services.record_evaluator import epley_one_rep_max, evaluate_set


def test_all_four_candidates_for_a_working_set():
    candidates = evaluate_set(reps=5, weight=100.0)
    assert list(candidates) == [
        RecordType.MAX_WEIGHT,
        RecordType.MAX_REPS,
        RecordType.ESTIMATED_ONE_REP_MAX,
        RecordType.MAX_VOLUME,
    ]
    assert candidates[RecordType.MAX_WEIGHT] == 100.0
    assert candidates[RecordType.MAX_REPS] == 5.0
    assert candidates[RecordType.ESTIMATED_ONE_REP_MAX] == pytest.approx(116.6667, abs=1e-4)
    assert candidates[RecordType.MAX_VOLUME] == 500.0


def test_zero_reps_is_never_a_record():
    assert evaluate_set(reps=0, weight=140.0) == {}


def test_bodyweight_set_still_produces_candidates():
    candidates = evaluate_set(reps=12, weight=0.0)
    assert candidates[RecordType.MAX_REPS] == 12.0
    assert candidates[RecordType.MAX_WEIGHT] == 0.0
    assert candidates[RecordType.MAX_VOLUME] == 0.0


def test_rpe_does_not_change_candidates():
    assert evaluate_set(3, 110.0, rpe=9) == evaluate_set(3, 110.0)


@pytest.mark.parametrize(
    "weight,reps,expected",
    [(100.0, 1, 103.3333), (110.0, 3, 121.0), (60.0, 10, 80.0)],
)
def test_epley(weight, reps, expected):
    assert epley_one_rep_max(weight, reps) == pytest.approx(expected, abs=1e-4)


def test_single_rep_estimate_is_above_the_lift():
    # Epley never returns the lifted weight itself for reps >= 1
    assert epley_one_rep_max(200.0, 1) > 200.0
