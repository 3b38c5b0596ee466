"""Utilities for transforming provider and store payloads into core models."""

import logging
from typing import Any, Dict, List, Optional

from lead_proximity.core.config import PoolSettings
from lead_proximity.core.errors import GeocodeError, ProviderError
from lead_proximity.core.models import Candidate, Coordinate, GeocodeResult, TravelTime
from lead_proximity.scoring.dedupe import normalize_email

logger = logging.getLogger(__name__)


def _to_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def parse_coordinate(lat: Any, lng: Any) -> Optional[Coordinate]:
    lat_val = _to_float(lat)
    lng_val = _to_float(lng)
    if lat_val is None or lng_val is None:
        return None
    try:
        return Coordinate(lat_val, lng_val)
    except ValueError:
        logger.warning("Ignoring out-of-range coordinate lat=%s lng=%s", lat, lng)
        return None


def to_geocode_result(payload: Dict[str, Any], address: Optional[str] = None) -> GeocodeResult:
    try:
        result = payload["results"][0]
        location = result["geometry"]["location"]
        coordinate = Coordinate(float(location["lat"]), float(location["lng"]))
    except (KeyError, IndexError, TypeError, ValueError) as exc:
        logger.error("Malformed geocode result for %r: %s", address, exc)
        raise GeocodeError(
            f"Geocoder returned an unusable result for {address!r}",
            status="INVALID_RESPONSE",
            address=address,
        ) from exc
    return GeocodeResult(coordinate=coordinate, formatted_address=result.get("formatted_address", ""))


def to_travel_times(payload: Dict[str, Any]) -> List[TravelTime]:
    """Flatten the single origin row of a Distance Matrix response."""
    rows = payload.get("rows") or []
    if not rows:
        raise ProviderError("Distance Matrix response has no rows", status=payload.get("status"))

    times: List[TravelTime] = []
    for element in rows[0].get("elements", []):
        if element.get("status") != "OK":
            times.append(TravelTime(ok=False))
            continue
        times.append(
            TravelTime(
                ok=True,
                duration_seconds=element.get("duration", {}).get("value"),
                distance_meters=element.get("distance", {}).get("value"),
            )
        )
    return times


def to_candidate(record: Dict[str, Any], pool: PoolSettings) -> Candidate:
    fields = record.get("fields", {})
    address = fields.get(pool.address_field)
    return Candidate(
        id=record["id"],
        name=fields.get(pool.name_field),
        pool=pool.label,
        email=normalize_email(fields.get(pool.email_field)),
        address=str(address).strip() if address else None,
        coordinate=parse_coordinate(fields.get(pool.lat_field), fields.get(pool.lng_field)),
    )
