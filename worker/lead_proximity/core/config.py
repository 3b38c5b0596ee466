"""Application configuration helpers."""

import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Optional, Tuple

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

TEACHERS_POOL = "teachers"
APPLICANTS_POOL = "applicants"


class ConfigError(RuntimeError):
    """Raised when configuration values are present but invalid."""


@dataclass(frozen=True)
class PoolSettings:
    """Where one candidate pool lives in the record store and how to read it."""

    label: str
    table: str
    name_field: str = "Name"
    email_field: str = "Email"
    address_field: str = "Adress"
    lat_field: str = "Latitude"
    lng_field: str = "Longitude"
    filter_formula: Optional[str] = None


@dataclass(frozen=True)
class ScoringSettings:
    top_n: int = 5
    radius_km: float = 5.0
    grade_a_max_km: float = 3.0
    grade_b_max_km: float = 7.0
    parallel_enrichment: bool = False

    def __post_init__(self) -> None:
        if self.top_n < 1:
            raise ConfigError("LEAD_TOP_N must be at least 1")
        if self.radius_km <= 0:
            raise ConfigError("LEAD_RADIUS_KM must be positive")
        if self.grade_a_max_km > self.grade_b_max_km:
            raise ConfigError("LEAD_GRADE_A_KM must not exceed LEAD_GRADE_B_KM")


@dataclass(frozen=True)
class Settings:
    google_api_key: str
    airtable_api_key: str
    airtable_base_id: str
    auth_secret: str = ""
    geocode_region: str = "se"
    travel_mode: str = "bicycling"
    request_timeout: float = 10.0
    port: int = 8080
    pools: Tuple[PoolSettings, ...] = ()
    scoring: ScoringSettings = field(default_factory=ScoringSettings)

    def pool(self, label: str) -> PoolSettings:
        for pool in self.pools:
            if pool.label == label:
                return pool
        raise ConfigError(f"Unknown candidate pool: {label}")


def _env_number(name: str, default: str, cast):
    raw = os.getenv(name, default)
    try:
        return cast(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{name} must be numeric, got {raw!r}") from exc


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


def _build_pools() -> Tuple[PoolSettings, ...]:
    field_names = dict(
        name_field=os.getenv("NAME_FIELD", "Name"),
        email_field=os.getenv("EMAIL_FIELD", "Email"),
        address_field=os.getenv("ADDRESS_FIELD", "Adress"),
        lat_field=os.getenv("LAT_FIELD", "Latitude"),
        lng_field=os.getenv("LNG_FIELD", "Longitude"),
    )

    active_field = os.getenv("TEACHER_ACTIVE_FIELD", "Aktiv").strip()
    pools = [
        PoolSettings(
            label=TEACHERS_POOL,
            table=os.getenv("TEACHERS_TABLE", "Lärare"),
            filter_formula=f"{{{active_field}}} = TRUE()" if active_field else None,
            **field_names,
        )
    ]

    applicants_table = os.getenv("APPLICANTS_TABLE", "Ansökningar").strip()
    if applicants_table:
        pools.append(
            PoolSettings(
                label=APPLICANTS_POOL,
                table=applicants_table,
                filter_formula=os.getenv("APPLICANT_STATUS_FILTER") or None,
                **field_names,
            )
        )
    else:
        logger.info("APPLICANTS_TABLE is empty; scoring against the teachers pool only.")
    return tuple(pools)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from environment variables with sensible defaults."""
    load_dotenv()

    google_api_key = os.getenv("GOOGLE_API_KEY", "")
    airtable_api_key = os.getenv("AIRTABLE_API_KEY", "")
    airtable_base_id = os.getenv("AIRTABLE_BASE_ID", "")
    auth_secret = os.getenv("AUTH_SECRET", "")

    if not google_api_key:
        logger.warning("GOOGLE_API_KEY is not configured; geocoding and travel-time requests will fail.")
    if not airtable_api_key or not airtable_base_id:
        logger.warning("AIRTABLE_API_KEY or AIRTABLE_BASE_ID is not set; candidate pools cannot be fetched.")
    if not auth_secret:
        logger.warning("AUTH_SECRET is not configured; every scoring request will be rejected.")

    scoring = ScoringSettings(
        top_n=_env_number("LEAD_TOP_N", "5", int),
        radius_km=_env_number("LEAD_RADIUS_KM", "5.0", float),
        grade_a_max_km=_env_number("LEAD_GRADE_A_KM", "3.0", float),
        grade_b_max_km=_env_number("LEAD_GRADE_B_KM", "7.0", float),
        parallel_enrichment=_env_flag("PARALLEL_ENRICHMENT"),
    )

    return Settings(
        google_api_key=google_api_key,
        airtable_api_key=airtable_api_key,
        airtable_base_id=airtable_base_id,
        auth_secret=auth_secret,
        geocode_region=os.getenv("GEOCODE_REGION", "se"),
        travel_mode=os.getenv("TRAVEL_MODE", "bicycling"),
        request_timeout=_env_number("REQUEST_TIMEOUT_SECONDS", "10", float),
        port=_env_number("PORT", "8080", int),
        pools=_build_pools(),
        scoring=scoring,
    )
