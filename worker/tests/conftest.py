import sys
from pathlib import Path

import pytest

# Ensure `lead_proximity` package is importable when running pytest from the worker directory.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from lead_proximity.core.config import PoolSettings, ScoringSettings, Settings  # noqa: E402
from lead_proximity.core.models import Candidate, Coordinate  # noqa: E402


@pytest.fixture
def settings():
    return Settings(
        google_api_key="google-key",
        airtable_api_key="airtable-key",
        airtable_base_id="app123",
        auth_secret="s3cret",
        pools=(
            PoolSettings(label="teachers", table="Lärare", filter_formula="{Aktiv} = TRUE()"),
            PoolSettings(label="applicants", table="Ansökningar"),
        ),
        scoring=ScoringSettings(),
    )


@pytest.fixture
def make_candidate():
    def _make(id, lat=None, lng=None, pool="teachers", email=None, name=None):
        coordinate = Coordinate(lat, lng) if lat is not None and lng is not None else None
        return Candidate(id=id, name=name or f"Person {id}", pool=pool, email=email, coordinate=coordinate)

    return _make
