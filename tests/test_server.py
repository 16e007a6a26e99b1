import pytest

from hospital_locator.core.config import Settings
from hospital_locator.web import server


@pytest.fixture
def fetch_calls(monkeypatch):
    calls = []

    def fake_fetch(pincode=None, settings=None):
        calls.append(pincode)
        return {
            "title": "Hospital Directory",
            "total": 1,
            "records": [
                {
                    "hospital_name": "Nalanda Medical College",
                    "_address_original_first_line": "Agam Kuan",
                    "_pincode": "800007",
                    "_location_coordinates": "25.59, 85.20",
                }
            ],
        }

    monkeypatch.setattr(server.data_gov, "fetch_hospitals", fake_fetch)
    return calls


@pytest.fixture
def settings(monkeypatch):
    value = Settings(data_gov_api_key="key")
    monkeypatch.setattr(server, "get_settings", lambda: value)
    return value


@pytest.fixture
def client():
    return server.app.test_client()


def test_root_describes_service(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.get_json()["service"] == "hospital-locator"


def test_root_lists_every_hospitals_route(client):
    endpoints = client.get("/").get_json()["endpoints"]
    assert "/hospitals" in endpoints
    assert "/api/hospitals" in endpoints


def test_health_endpoint(client):
    response = client.get("/health")
    body = response.get_json()
    assert response.status_code == 200
    assert body["status"] == "ok"
    assert "T" in body["timestamp"]


def test_hospitals_passes_upstream_json_through(client, settings, fetch_calls):
    response = client.get("/hospitals?pincode=800007")

    assert response.status_code == 200
    body = response.get_json()
    assert body["records"][0]["hospital_name"] == "Nalanda Medical College"
    assert list(body) == ["title", "total", "records"]
    assert fetch_calls == ["800007"]


def test_hospitals_omits_empty_pincode(client, settings, fetch_calls):
    client.get("/hospitals?pincode=")
    client.get("/api/hospitals")
    assert fetch_calls == [None, None]


def test_hospitals_missing_api_key_makes_no_call(client, monkeypatch):
    monkeypatch.setattr(server, "get_settings", lambda: Settings(data_gov_api_key=""))
    session_calls = []
    monkeypatch.setattr(server.data_gov._SESSION, "get", lambda *a, **kw: session_calls.append(a))

    response = client.get("/hospitals?pincode=800002")

    assert response.status_code == 500
    assert "API key not set" in response.get_json()["error"]
    assert session_calls == []


def test_hospitals_hides_upstream_error_detail(client, settings, monkeypatch):
    def failing_fetch(pincode=None, settings=None):
        raise server.data_gov.DataGovError("registry request failed: 403 Invalid key")

    monkeypatch.setattr(server.data_gov, "fetch_hospitals", failing_fetch)

    response = client.get("/hospitals?pincode=800002")

    assert response.status_code == 500
    assert response.get_json() == {"error": "Internal server error"}


def test_hospitals_unexpected_error_is_generic(client, settings, monkeypatch):
    def broken_fetch(pincode=None, settings=None):
        raise KeyError("boom")

    monkeypatch.setattr(server.data_gov, "fetch_hospitals", broken_fetch)

    response = client.get("/hospitals")

    assert response.status_code == 500
    assert response.get_json() == {"error": "Internal server error"}


def test_unknown_route_lists_endpoints(client):
    response = client.get("/foo")
    body = response.get_json()
    assert response.status_code == 404
    assert body["message"] == "Cannot GET /foo"
    assert "GET /hospitals?pincode=<pincode>" in body["availableEndpoints"]


def test_unsupported_method_is_404(client):
    response = client.post("/hospitals")
    assert response.status_code == 404
    assert "availableEndpoints" in response.get_json()


def test_finder_idle(client, settings, fetch_calls):
    response = client.get("/finder")
    assert response.status_code == 200
    assert b"Ready to Search" in response.data
    assert fetch_calls == []


def test_finder_renders_results_with_distance(client, settings, fetch_calls):
    response = client.get("/finder?pincode=800007&lat=25.59&lng=85.20")

    html = response.get_data(as_text=True)
    assert "Nalanda Medical College" in html
    assert "0 m away" in html
    assert "https://www.google.com/maps/dir/25.59,85.2/25.59,85.2" in html


def test_finder_empty(client, settings, monkeypatch):
    monkeypatch.setattr(server.data_gov, "fetch_hospitals", lambda pincode=None, settings=None: {"records": []})

    html = client.get("/finder?pincode=123456").get_data(as_text=True)

    assert "No Hospitals Found" in html
    assert "123456" in html


def test_finder_reports_missing_api_key(client, monkeypatch):
    monkeypatch.setattr(server, "get_settings", lambda: Settings(data_gov_api_key=""))

    response = client.get("/finder?pincode=800002")

    assert response.status_code == 200
    assert "API key not set" in response.get_data(as_text=True)


def test_finder_reports_upstream_failure(client, settings, monkeypatch):
    def failing_fetch(pincode=None, settings=None):
        raise server.data_gov.DataGovError("timeout")

    monkeypatch.setattr(server.data_gov, "fetch_hospitals", failing_fetch)

    html = client.get("/finder?pincode=800002").get_data(as_text=True)

    assert "Search failed" in html
    assert "timeout" not in html


def test_hospitals_passes_registry_error_body_through(client, settings, monkeypatch):
    class ErrorResponse:
        status_code = 403

        def json(self):
            return {"status": "error", "message": "Invalid key"}

    monkeypatch.setattr(server.data_gov._SESSION, "get", lambda *a, **kw: ErrorResponse())

    response = client.get("/hospitals?pincode=1")

    assert response.status_code == 200
    assert response.get_json() == {"status": "error", "message": "Invalid key"}


def test_finder_has_loading_state(client, settings, fetch_calls):
    html = client.get("/finder").get_data(as_text=True)

    assert 'id="loading-state" hidden' in html
    assert "Searching for hospitals..." in html
    assert "button.disabled = true" in html
