"""Attach provider travel time to a ranked candidate subset."""

import logging
from typing import Callable, List, Optional, Sequence

from lead_proximity.core.errors import ProviderError
from lead_proximity.core.models import Coordinate, EnrichedCandidate, RankedCandidate, TravelTime

logger = logging.getLogger(__name__)

TravelTimeProvider = Callable[[Coordinate, Sequence[Coordinate]], List[TravelTime]]


def _minutes(duration_seconds: Optional[int]) -> Optional[int]:
    if duration_seconds is None:
        return None
    return int(duration_seconds / 60 + 0.5)


def _kilometers(distance_meters: Optional[int]) -> Optional[float]:
    if distance_meters is None:
        return None
    return round(distance_meters / 1000, 2)


def enrich(
    origin: Coordinate,
    ranked: Sequence[RankedCandidate],
    travel_time: TravelTimeProvider,
) -> List[EnrichedCandidate]:
    """Issue one batch travel-time request and map results back by position.

    A failed element only blanks that candidate's travel fields; a batch-level
    ``ProviderError`` from ``travel_time`` propagates to the caller.
    """
    if not ranked:
        return []

    destinations = [entry.candidate.coordinate for entry in ranked]
    logger.info("Requesting travel times for %d candidates", len(destinations))
    results = travel_time(origin, destinations)
    if len(results) != len(destinations):
        raise ProviderError(
            f"Travel-time provider returned {len(results)} results for {len(destinations)} destinations",
            status="LENGTH_MISMATCH",
        )

    enriched: List[EnrichedCandidate] = []
    for entry, result in zip(ranked, results):
        if not result.ok:
            logger.debug("No travel time for candidate %s", entry.candidate.id)
            enriched.append(EnrichedCandidate(entry))
            continue
        enriched.append(
            EnrichedCandidate(
                entry,
                travel_time_minutes=_minutes(result.duration_seconds),
                travel_distance_km=_kilometers(result.distance_meters),
            )
        )
    return enriched
