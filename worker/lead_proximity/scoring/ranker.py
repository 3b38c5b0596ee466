"""Order a candidate pool by great-circle distance from an origin."""

from typing import List, Sequence

from lead_proximity.core.models import Candidate, Coordinate, RankedCandidate
from lead_proximity.scoring.geodesy import distance_km

DEFAULT_LIMIT = 5


def rank(origin: Coordinate, pool: Sequence[Candidate], limit: int = DEFAULT_LIMIT) -> List[RankedCandidate]:
    """Return the ``limit`` closest candidates, nearest first.

    Distances are rounded to one decimal before sorting; ``sorted`` is stable so
    equal distances keep their pool order.
    """
    ranked = []
    for candidate in pool:
        if candidate.coordinate is None:
            raise ValueError(f"candidate {candidate.id} has no coordinate")
        ranked.append(RankedCandidate(candidate, round(distance_km(origin, candidate.coordinate), 1)))

    ranked = sorted(ranked, key=lambda entry: entry.distance_km)
    return ranked[:limit]
