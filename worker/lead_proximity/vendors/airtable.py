"""Client utilities for the Airtable REST API."""

import logging
from typing import Any, Dict, Iterable, List, Optional

import requests

from lead_proximity.core.errors import StoreError

logger = logging.getLogger(__name__)
_SESSION = requests.Session()
_BASE_URL = "https://api.airtable.com/v0"


def _headers(api_key: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {api_key}"}


def _status_of(exc: requests.RequestException) -> str:
    response = getattr(exc, "response", None)
    if response is not None:
        return str(response.status_code)
    return "HTTP_ERROR"


def list_records(
    base_id: str,
    table: str,
    api_key: str,
    fields: Optional[Iterable[str]] = None,
    filter_formula: Optional[str] = None,
    timeout: float = 10,
) -> List[Dict[str, Any]]:
    """Return every record of ``table``, following Airtable's ``offset`` paging."""
    params: Dict[str, Any] = {}
    if fields:
        params["fields[]"] = list(fields)
    if filter_formula:
        params["filterByFormula"] = filter_formula

    records: List[Dict[str, Any]] = []
    while True:
        try:
            response = _SESSION.get(
                f"{_BASE_URL}/{base_id}/{table}",
                params=params,
                headers=_headers(api_key),
                timeout=timeout,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            logger.error("list_records failed for table=%s: %s", table, exc)
            raise StoreError(f"Failed to list records from {table!r}: {exc}", status=_status_of(exc)) from exc

        payload = response.json()
        records.extend(payload.get("records", []))
        offset = payload.get("offset")
        if not offset:
            break
        params["offset"] = offset

    logger.debug("Fetched %d records from %s", len(records), table)
    return records


def update_record(
    base_id: str,
    table: str,
    record_id: str,
    fields: Dict[str, Any],
    api_key: str,
    timeout: float = 10,
) -> Dict[str, Any]:
    try:
        response = _SESSION.patch(
            f"{_BASE_URL}/{base_id}/{table}/{record_id}",
            json={"fields": fields},
            headers=_headers(api_key),
            timeout=timeout,
        )
        response.raise_for_status()
    except requests.RequestException as exc:
        logger.error("update_record failed for %s/%s: %s", table, record_id, exc)
        raise StoreError(f"Failed to update record {record_id!r} in {table!r}: {exc}", status=_status_of(exc)) from exc
    return response.json()
