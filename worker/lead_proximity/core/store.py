"""Candidate store backed by Airtable tables."""

import logging
from typing import List, Optional

from lead_proximity.core.config import PoolSettings, Settings, get_settings
from lead_proximity.core.errors import StoreError
from lead_proximity.core.models import Candidate, Coordinate
from lead_proximity.etl.transform import to_candidate
from lead_proximity.vendors import airtable

logger = logging.getLogger(__name__)


class CandidateStore:
    """Reads candidate pools and writes geocoded coordinates back."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()

    def _require_credentials(self) -> None:
        if not self.settings.airtable_api_key or not self.settings.airtable_base_id:
            raise StoreError("AIRTABLE_API_KEY and AIRTABLE_BASE_ID are required", status="NOT_CONFIGURED")

    def _fields(self, pool: PoolSettings) -> List[str]:
        return [pool.name_field, pool.email_field, pool.address_field, pool.lat_field, pool.lng_field]

    def fetch_pool(self, pool: PoolSettings) -> List[Candidate]:
        """Return the pool's active candidates that already carry coordinates."""
        self._require_credentials()
        records = airtable.list_records(
            self.settings.airtable_base_id,
            pool.table,
            self.settings.airtable_api_key,
            fields=self._fields(pool),
            filter_formula=pool.filter_formula,
            timeout=self.settings.request_timeout,
        )

        candidates = []
        for record in records:
            candidate = to_candidate(record, pool)
            if candidate.coordinate is None:
                logger.debug("Skipping %s without coordinates", candidate.id)
                continue
            candidates.append(candidate)

        logger.info("Found %d %s with coordinates (of %d records)", len(candidates), pool.label, len(records))
        return candidates

    def fetch_missing_coordinates(self, pool: PoolSettings) -> List[Candidate]:
        """Return records that have an address but no usable coordinates."""
        self._require_credentials()
        formula = (
            f"AND({{{pool.address_field}}} != '', "
            f"OR({{{pool.lat_field}}} = BLANK(), {{{pool.lng_field}}} = BLANK()))"
        )
        records = airtable.list_records(
            self.settings.airtable_base_id,
            pool.table,
            self.settings.airtable_api_key,
            fields=self._fields(pool),
            filter_formula=formula,
            timeout=self.settings.request_timeout,
        )
        candidates = [to_candidate(record, pool) for record in records]
        return [c for c in candidates if c.address and c.coordinate is None]

    def save_coordinate(self, pool: PoolSettings, record_id: str, coordinate: Coordinate) -> None:
        self._require_credentials()
        airtable.update_record(
            self.settings.airtable_base_id,
            pool.table,
            record_id,
            {pool.lat_field: coordinate.lat, pool.lng_field: coordinate.lng},
            self.settings.airtable_api_key,
            timeout=self.settings.request_timeout,
        )
        logger.debug("Saved coordinates for %s", record_id)
