"""Drive the full lead scoring pipeline for one address."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from lead_proximity.core.config import Settings
from lead_proximity.core.errors import InputError
from lead_proximity.core.models import Candidate, Coordinate, GeocodeResult, LeadScoreResult, TravelTime
from lead_proximity.core.store import CandidateStore
from lead_proximity.etl.transform import to_geocode_result, to_travel_times
from lead_proximity.scoring import dedupe, engine
from lead_proximity.vendors import google_maps

logger = logging.getLogger(__name__)


class LeadScorer:
    """Geocodes a lead, loads candidate pools and grades the lead by proximity."""

    def __init__(self, settings: Settings, store: Optional[CandidateStore] = None) -> None:
        self.settings = settings
        self.store = store or CandidateStore(settings)

    def geocode(self, address: str) -> GeocodeResult:
        logger.info("Geocoding: %s", address)
        payload = google_maps.geocode(
            address,
            self.settings.google_api_key,
            region=self.settings.geocode_region,
            timeout=self.settings.request_timeout,
        )
        return to_geocode_result(payload, address)

    def travel_times(self, origin: Coordinate, destinations: Sequence[Coordinate]) -> List[TravelTime]:
        payload = google_maps.distance_matrix(
            origin,
            destinations,
            self.settings.google_api_key,
            mode=self.settings.travel_mode,
            timeout=self.settings.request_timeout,
        )
        return to_travel_times(payload)

    def fetch_pools(self) -> Tuple[Dict[str, List[Candidate]], int]:
        """Load every configured pool and dedupe the others against the first."""
        pools: Dict[str, List[Candidate]] = {}
        for pool in self.settings.pools:
            pools[pool.label] = self.store.fetch_pool(pool)

        duplicates = 0
        labels = list(pools)
        if len(labels) > 1:
            primary = pools[labels[0]]
            for label in labels[1:]:
                merged = dedupe.merge(primary, pools[label])
                pools[label] = merged.secondary
                duplicates += merged.duplicates_removed
        return pools, duplicates

    def score_lead(self, address: Optional[str], lead_record_id: Optional[str] = None) -> LeadScoreResult:
        if address is not None and not isinstance(address, str):
            raise InputError("student_address must be a string", status="INVALID_TYPE")
        if not address or not address.strip():
            raise InputError("student_address is required")
        address = address.strip()

        lead = self.geocode(address)
        pools, duplicates = self.fetch_pools()

        warnings: List[str] = []
        primary = self.settings.pools[0].label if self.settings.pools else None
        if primary is not None and not pools.get(primary):
            logger.warning("No %s with coordinates found", primary)
            warnings.append(f"No {primary} with coordinates found")

        grade, results = engine.score(lead.coordinate, pools, self.travel_times, self.settings.scoring)
        nearest = [result.nearest.distance_km for result in results.values() if result.nearest]

        return LeadScoreResult(
            lead=lead,
            lead_score=grade,
            nearest_distance_km=min(nearest) if nearest else None,
            pools=results,
            duplicates_removed=duplicates,
            lead_record_id=lead_record_id,
            warnings=warnings,
        )
