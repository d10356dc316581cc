import json

import pytest
import requests

from homepage.services import geo_service


class FakeResponse:
    def __init__(self, payload, status=200):
        self.payload = payload
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self.payload


@pytest.fixture
def ip_data_file(tmp_path, monkeypatch):
    path = tmp_path / "ip_data.json"
    monkeypatch.setattr(geo_service, "IP_DATA_FILE", path)
    return path


@pytest.fixture
def api_calls(monkeypatch):
    calls = []

    def fake_get(url, params=None, timeout=None):
        calls.append((url, params))
        ip = url.rsplit("/", 1)[1]
        return FakeResponse({"status": "success", "query": ip, "city": "Lisbon"})

    monkeypatch.setattr(geo_service.requests, "get", fake_get)
    return calls


def test_lookup_fetches_and_caches(ip_data_file, api_calls):
    data = geo_service.lookup("198.51.100.4")
    assert data["city"] == "Lisbon"
    assert api_calls[0][0] == "http://ip-api.com/json/198.51.100.4"
    assert "regionName" in api_calls[0][1]["fields"]
    assert json.loads(ip_data_file.read_text()) == [data]


def test_lookup_uses_cache(ip_data_file, api_calls):
    ip_data_file.write_text(json.dumps([{"query": "198.51.100.4", "city": "Cached"}]))
    assert geo_service.lookup("198.51.100.4")["city"] == "Cached"
    assert api_calls == []


def test_lookup_appends_new_visitors(ip_data_file, api_calls):
    geo_service.lookup("198.51.100.4")
    geo_service.lookup("198.51.100.5")
    geo_service.lookup("198.51.100.4")
    assert len(api_calls) == 2
    assert [e["query"] for e in json.loads(ip_data_file.read_text())] == ["198.51.100.4", "198.51.100.5"]


def test_lookup_ignores_corrupt_cache(ip_data_file, api_calls):
    ip_data_file.write_text("[{oops")
    assert geo_service.lookup("198.51.100.4")["query"] == "198.51.100.4"
    assert len(api_calls) == 1


def test_lookup_propagates_http_errors(ip_data_file, monkeypatch):
    monkeypatch.setattr(geo_service.requests, "get", lambda *a, **kw: FakeResponse({}, status=503))
    with pytest.raises(requests.HTTPError):
        geo_service.lookup("198.51.100.4")
