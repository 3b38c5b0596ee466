"""Reduce ranked and enriched candidate pools into a single lead grade."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from lead_proximity.core.config import ScoringSettings
from lead_proximity.core.models import Candidate, Coordinate, EnrichedCandidate, LeadScore, PoolResult
from lead_proximity.scoring.enricher import TravelTimeProvider, enrich
from lead_proximity.scoring.geodesy import distance_km
from lead_proximity.scoring.ranker import rank

logger = logging.getLogger(__name__)


def classify(distance: Optional[float], settings: ScoringSettings) -> LeadScore:
    if distance is None:
        return LeadScore.C
    if distance <= settings.grade_a_max_km:
        return LeadScore.A
    if distance <= settings.grade_b_max_km:
        return LeadScore.B
    return LeadScore.C


def _top3_average(top: Sequence[EnrichedCandidate]) -> Optional[float]:
    head = top[:3]
    if not head:
        return None
    return round(sum(entry.distance_km for entry in head) / len(head), 1)


def _within_radius(origin: Coordinate, pool: Sequence[Candidate], radius_km: float) -> int:
    return sum(1 for candidate in pool if distance_km(origin, candidate.coordinate) <= radius_km)


def score_pool(
    label: str,
    origin: Coordinate,
    pool: Sequence[Candidate],
    travel_time: TravelTimeProvider,
    settings: ScoringSettings,
) -> PoolResult:
    top = enrich(origin, rank(origin, pool, settings.top_n), travel_time)
    return PoolResult(
        label=label,
        nearest=top[0] if top else None,
        top=top,
        within_radius_count=_within_radius(origin, pool, settings.radius_km),
        total_count=len(pool),
        top3_avg_distance_km=_top3_average(top),
    )


def score(
    origin: Coordinate,
    pools: Mapping[str, Sequence[Candidate]],
    travel_time: TravelTimeProvider,
    settings: Optional[ScoringSettings] = None,
) -> Tuple[LeadScore, Dict[str, PoolResult]]:
    settings = settings or ScoringSettings()

    if settings.parallel_enrichment and len(pools) > 1:
        with ThreadPoolExecutor(max_workers=len(pools)) as executor:
            futures = {
                label: executor.submit(score_pool, label, origin, pool, travel_time, settings)
                for label, pool in pools.items()
            }
            results = {label: future.result() for label, future in futures.items()}
    else:
        results = {label: score_pool(label, origin, pool, travel_time, settings) for label, pool in pools.items()}

    nearest: List[float] = [result.nearest.distance_km for result in results.values() if result.nearest]
    best = min(nearest) if nearest else None
    grade = classify(best, settings)
    logger.info("Lead graded %s (nearest candidate %s km)", grade.value, best)
    return grade, results
