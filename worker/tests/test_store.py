import pytest

from lead_proximity.core import store as store_module
from lead_proximity.core.config import PoolSettings, Settings
from lead_proximity.core.errors import StoreError
from lead_proximity.core.models import Coordinate
from lead_proximity.core.store import CandidateStore


def test_fetch_pool_skips_records_without_coordinates(monkeypatch, settings):
    calls = []

    def fake_list_records(base_id, table, api_key, fields=None, filter_formula=None, timeout=None):
        calls.append((base_id, table, api_key, fields, filter_formula, timeout))
        return [
            {"id": "rec1", "fields": {"Name": "Anna", "Latitude": 59.3, "Longitude": 18.05}},
            {"id": "rec2", "fields": {"Name": "Bo"}},
            {"id": "rec3", "fields": {"Name": "Cia", "Latitude": "59.31", "Longitude": "18.07"}},
        ]

    monkeypatch.setattr(store_module.airtable, "list_records", fake_list_records)

    teachers = settings.pool("teachers")
    candidates = CandidateStore(settings).fetch_pool(teachers)

    assert [c.id for c in candidates] == ["rec1", "rec3"]
    assert all(c.pool == "teachers" for c in candidates)
    base_id, table, api_key, fields, formula, timeout = calls[0]
    assert (base_id, table, api_key) == ("app123", "Lärare", "airtable-key")
    assert formula == "{Aktiv} = TRUE()"
    assert "Latitude" in fields and "Longitude" in fields


def test_fetch_pool_requires_credentials():
    bare = Settings(google_api_key="g", airtable_api_key="", airtable_base_id="")
    with pytest.raises(StoreError):
        CandidateStore(bare).fetch_pool(
            PoolSettings(label="teachers", table="Lärare")
        )


def test_fetch_missing_coordinates(monkeypatch, settings):
    captured = {}

    def fake_list_records(base_id, table, api_key, fields=None, filter_formula=None, timeout=None):
        captured["formula"] = filter_formula
        return [
            {"id": "rec1", "fields": {"Adress": "Vasagatan 1"}},
            {"id": "rec2", "fields": {"Adress": "Sveavägen 2", "Latitude": 59.3, "Longitude": 18.0}},
        ]

    monkeypatch.setattr(store_module.airtable, "list_records", fake_list_records)

    pending = CandidateStore(settings).fetch_missing_coordinates(settings.pool("teachers"))

    assert [c.id for c in pending] == ["rec1"]
    assert "{Adress} != ''" in captured["formula"]


def test_save_coordinate(monkeypatch, settings):
    calls = []
    monkeypatch.setattr(
        store_module.airtable,
        "update_record",
        lambda base_id, table, record_id, fields, api_key, timeout=None: calls.append((table, record_id, fields)),
    )

    CandidateStore(settings).save_coordinate(settings.pool("teachers"), "rec1", Coordinate(59.3, 18.05))

    assert calls == [("Lärare", "rec1", {"Latitude": 59.3, "Longitude": 18.05})]
