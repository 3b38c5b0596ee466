import pytest
import requests

from lead_proximity.core.errors import StoreError
from lead_proximity.vendors import airtable


class DummyResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload or {}

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError("http error", response=self)

    def json(self):
        return self._payload


class DummySession:
    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    def get(self, url, params=None, headers=None, timeout=None):
        self.calls.append(("GET", url, dict(params or {}), headers, timeout))
        return self.responses.pop(0)

    def patch(self, url, json=None, headers=None, timeout=None):
        self.calls.append(("PATCH", url, json, headers, timeout))
        return self.responses.pop(0)


def test_list_records_follows_offset(monkeypatch):
    session = DummySession(
        [
            DummyResponse(payload={"records": [{"id": "rec1"}], "offset": "itr1"}),
            DummyResponse(payload={"records": [{"id": "rec2"}]}),
        ]
    )
    monkeypatch.setattr(airtable, "_SESSION", session)

    records = airtable.list_records("app1", "Lärare", "tok", fields=["Name"], filter_formula="{Aktiv} = TRUE()")

    assert [r["id"] for r in records] == ["rec1", "rec2"]
    first, second = session.calls
    assert first[1] == "https://api.airtable.com/v0/app1/Lärare"
    assert first[2] == {"fields[]": ["Name"], "filterByFormula": "{Aktiv} = TRUE()"}
    assert first[3] == {"Authorization": "Bearer tok"}
    assert second[2]["offset"] == "itr1"


def test_list_records_http_error(monkeypatch):
    monkeypatch.setattr(airtable, "_SESSION", DummySession([DummyResponse(status_code=403)]))

    with pytest.raises(StoreError) as excinfo:
        airtable.list_records("app1", "Lärare", "tok")
    assert excinfo.value.status == "403"


def test_update_record_sends_fields(monkeypatch):
    session = DummySession([DummyResponse(payload={"id": "rec1", "fields": {"Latitude": 59.3}})])
    monkeypatch.setattr(airtable, "_SESSION", session)

    result = airtable.update_record("app1", "Lärare", "rec1", {"Latitude": 59.3}, "tok")

    assert result["id"] == "rec1"
    method, url, body, headers, _ = session.calls[0]
    assert method == "PATCH"
    assert url.endswith("/app1/Lärare/rec1")
    assert body == {"fields": {"Latitude": 59.3}}


def test_update_record_error(monkeypatch):
    monkeypatch.setattr(airtable, "_SESSION", DummySession([DummyResponse(status_code=422)]))

    with pytest.raises(StoreError):
        airtable.update_record("app1", "Lärare", "rec1", {}, "tok")
