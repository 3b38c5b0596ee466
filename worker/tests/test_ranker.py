import pytest

from lead_proximity.core.models import Coordinate
from lead_proximity.scoring.ranker import rank

ORIGIN = Coordinate(59.33, 18.06)


def test_rank_limits_and_sorts_ascending(make_candidate):
    pool = [make_candidate(str(i), 59.33 + i * 0.01, 18.06) for i in range(8, 0, -1)]

    ranked = rank(ORIGIN, pool, limit=5)

    assert len(ranked) == 5
    distances = [entry.distance_km for entry in ranked]
    assert distances == sorted(distances)
    assert ranked[0].candidate.id == "1"


def test_rank_rounds_distance_to_one_decimal(make_candidate):
    ranked = rank(ORIGIN, [make_candidate("t1", 59.30, 18.05)])

    assert ranked[0].distance_km == 3.4


def test_rank_ties_keep_pool_order(make_candidate):
    pool = [
        make_candidate("east", 59.33, 18.07),
        make_candidate("west", 59.33, 18.05),
        make_candidate("far", 59.40, 18.06),
    ]

    ranked = rank(ORIGIN, pool)

    assert [entry.candidate.id for entry in ranked] == ["east", "west", "far"]


def test_rank_empty_pool():
    assert rank(ORIGIN, []) == []


def test_rank_requires_coordinates(make_candidate):
    with pytest.raises(ValueError):
        rank(ORIGIN, [make_candidate("t1")])
