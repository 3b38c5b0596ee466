"""Client utilities for the Google Geocoding and Distance Matrix APIs."""

import logging
from typing import Any, Dict, Optional, Sequence

import requests

from lead_proximity.core.errors import GeocodeError, ProviderError
from lead_proximity.core.models import Coordinate

logger = logging.getLogger(__name__)
_SESSION = requests.Session()
_BASE_URL = "https://maps.googleapis.com/maps/api"


def geocode(address: str, api_key: str, region: Optional[str] = None, timeout: float = 10) -> Dict[str, Any]:
    params = {"address": address, "key": api_key}
    if region:
        params["region"] = region
    try:
        response = _SESSION.get(f"{_BASE_URL}/geocode/json", params=params, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as exc:
        logger.error("geocode request failed for %r: %s", address, exc)
        raise GeocodeError(f"Geocoding request failed for {address!r}: {exc}", status="HTTP_ERROR", address=address) from exc

    payload = response.json()
    status = payload.get("status")
    if status != "OK" or not payload.get("results"):
        logger.error("geocode failed: status=%s, error_message=%s", status, payload.get("error_message"))
        raise GeocodeError(
            f"Geocoding failed for {address!r}: {payload.get('error_message') or status}",
            status=status,
            address=address,
        )
    return payload


def distance_matrix(
    origin: Coordinate,
    destinations: Sequence[Coordinate],
    api_key: str,
    mode: str = "bicycling",
    timeout: float = 10,
) -> Dict[str, Any]:
    params = {
        "origins": origin.as_param(),
        "destinations": "|".join(dest.as_param() for dest in destinations),
        "mode": mode,
        "key": api_key,
    }
    try:
        response = _SESSION.get(f"{_BASE_URL}/distancematrix/json", params=params, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as exc:
        logger.error("distance_matrix request failed: %s", exc)
        raise ProviderError(f"Distance Matrix request failed: {exc}", status="HTTP_ERROR") from exc

    payload = response.json()
    status = payload.get("status")
    if status != "OK":
        logger.error("distance_matrix failed: status=%s, error_message=%s", status, payload.get("error_message"))
        raise ProviderError(f"Distance Matrix failed: {payload.get('error_message') or status}", status=status)
    return payload
