"""CLI job that geocodes candidate records missing coordinates and saves them."""

import argparse
import logging
import time
from typing import Dict, Optional

from lead_proximity.core.config import TEACHERS_POOL, get_settings
from lead_proximity.core.errors import GeocodeError
from lead_proximity.core.store import CandidateStore
from lead_proximity.etl.transform import to_geocode_result
from lead_proximity.vendors import google_maps

logger = logging.getLogger(__name__)


def backfill_coordinates(*, pool_label: str, limit: Optional[int] = None, dry_run: bool = False) -> Dict[str, int]:
    settings = get_settings()
    if not settings.google_api_key:
        raise RuntimeError("GOOGLE_API_KEY is required")

    pool = settings.pool(pool_label)
    store = CandidateStore(settings)
    pending = store.fetch_missing_coordinates(pool)
    if limit is not None:
        pending = pending[:limit]
    logger.info("Geocoding %d %s records without coordinates", len(pending), pool.label)

    counts = {"updated": 0, "skipped": 0, "failed": 0}
    for candidate in pending:
        try:
            payload = google_maps.geocode(
                candidate.address,
                settings.google_api_key,
                region=settings.geocode_region,
                timeout=settings.request_timeout,
            )
            result = to_geocode_result(payload, candidate.address)
        except GeocodeError as exc:
            logger.warning("Failed to geocode %s (%s): %s", candidate.id, candidate.address, exc)
            counts["failed"] += 1
            continue

        logger.info("%s -> %s (%s)", candidate.id, result.formatted_address, result.coordinate.as_param())
        if dry_run:
            counts["skipped"] += 1
            continue

        store.save_coordinate(pool, candidate.id, result.coordinate)
        counts["updated"] += 1
        time.sleep(0.1)

    logger.info("Completed backfill: %s", counts)
    return counts


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Geocode candidate records that lack coordinates")
    parser.add_argument("--pool", dest="pool_label", default=TEACHERS_POOL, help="Candidate pool label to backfill")
    parser.add_argument("--limit", dest="limit", type=int, help="Maximum number of records to geocode")
    parser.add_argument("--dry-run", dest="dry_run", action="store_true", help="Geocode without saving results")
    return parser


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    parser = build_parser()
    args = parser.parse_args()

    backfill_coordinates(pool_label=args.pool_label, limit=args.limit, dry_run=args.dry_run)


if __name__ == "__main__":
    main()
