import httpx
import pytest
from fastapi.testclient import TestClient

from livemap.api.dependencies import get_live_map
from livemap.config import settings
from livemap.ingestors import AircraftAPIClient
from livemap.main import app
from livemap.models.aircraft import AircraftRecord
from livemap.services import LiveMapService

NOW = 1_700_000_000.0


def _upstream_handler(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/track":
        return httpx.Response(
            200,
            json=[
                {"longitude": 20.0, "latitude": 10.0, "timestamp": NOW - 60},
                {"longitude": 20.1, "latitude": 10.1, "timestamp": NOW},
            ],
        )
    return httpx.Response(500, text="boom")


@pytest.fixture
def live_map_context():
    client = AircraftAPIClient(
        base_url="https://upstream.test",
        transport=httpx.MockTransport(_upstream_handler),
    )
    service = LiveMapService(
        client=client,
        refresh_interval=5,
        max_age_minutes=5,
        show_tracks=False,
        clock=lambda: NOW,
    )
    app.dependency_overrides[get_live_map] = lambda: service
    test_client = TestClient(app)
    try:
        yield {"client": test_client, "service": service}
    finally:
        test_client.close()
        app.dependency_overrides.clear()


def _load_snapshot(service, snapshot):
    service.poller.snapshot = snapshot
    service.handle_snapshot(snapshot)


def test_live_aircraft_filters_stale_and_unpositioned(live_map_context):
    service = live_map_context["service"]
    _load_snapshot(
        service,
        [
            AircraftRecord(icao24="aaa111", latitude=0, longitude=0, lastseen=NOW - 10),
            AircraftRecord(icao24="bbb222", latitude=1, longitude=1, lastseen=NOW - 301),
            AircraftRecord(icao24="ccc333", latitude=None, longitude=5.0),
            AircraftRecord(icao24="ddd444", latitude=2, longitude=2, callsign="UAL1__"),
        ],
    )

    response = live_map_context["client"].get("/api/v1/aircraft")

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 2
    assert [a["icao24"] for a in body["aircraft"]] == ["aaa111", "ddd444"]
    assert body["aircraft"][1]["label"] == "UAL1"
    assert body["aircraft"][1]["color"] == "rgb(231, 76, 60)"
    assert body["center"]["latitude"] == pytest.approx(1.0)
    assert body["max_age_minutes"] == 5


def test_tracks_hidden_until_enabled(live_map_context):
    service = live_map_context["service"]
    client = live_map_context["client"]
    service.tracks.apply([AircraftRecord(icao24="aaa111", latitude=1, longitude=1)], 5, now=NOW - 10)
    service.tracks.apply([AircraftRecord(icao24="aaa111", latitude=2, longitude=2)], 5, now=NOW)

    hidden = client.get("/api/v1/tracks").json()
    assert hidden["show_tracks"] is False
    assert hidden["tracks"] == {}

    forced = client.get("/api/v1/tracks", params={"include_hidden": True}).json()
    assert len(forced["tracks"]["aaa111"]) == 2
    assert len(forced["geojson"]["features"]) == 1

    client.put("/api/v1/settings", json={"show_tracks": True})
    shown = client.get("/api/v1/tracks").json()
    assert shown["tracks"]["aaa111"][-1] == [2.0, 2.0, int(NOW * 1000)]
    assert isinstance(shown["tracks"]["aaa111"][-1][2], int)


def test_detailed_track_proxies_upstream(live_map_context):
    response = live_map_context["client"].get("/api/v1/tracks/abc123")

    assert response.status_code == 200
    body = response.json()
    assert body["positions"] == 2
    assert body["line"]["features"][0]["geometry"]["coordinates"] == [
        [20.0, 10.0],
        [20.1, 10.1],
    ]
    assert len(body["points"]["features"]) == 2


def test_upstream_failure_maps_to_bad_gateway(live_map_context):
    response = live_map_context["client"].get("/api/v1/aircraft/abc123")

    assert response.status_code == 502
    assert "HTTP error! status: 500" in response.json()["detail"]


def test_invalid_icao_is_rejected(live_map_context):
    response = live_map_context["client"].get("/api/v1/tracks/not-an-icao")

    assert response.status_code == 422


def test_settings_update_and_validation(live_map_context):
    client = live_map_context["client"]
    service = live_map_context["service"]

    response = client.put(
        "/api/v1/settings", json={"refresh_interval": 10, "max_age_minutes": 15}
    )
    assert response.status_code == 200
    assert response.json() == {
        "refresh_interval": 10,
        "max_age_minutes": 15,
        "show_tracks": False,
    }
    assert service.poller.interval == 10
    assert service.max_age_minutes == 15

    for payload in ({"refresh_interval": 0}, {"refresh_interval": 61}, {"max_age_minutes": 0}):
        assert client.put("/api/v1/settings", json=payload).status_code == 422
    assert client.get("/api/v1/settings").json()["refresh_interval"] == 10


def test_status_reports_fetch_error_after_refresh(live_map_context):
    client = live_map_context["client"]

    response = client.post("/api/v1/refresh")

    assert response.status_code == 200
    body = response.json()
    assert body["loading"] is False
    assert body["error"] == "HTTP error! status: 500"
    assert body["last_update"] is None


def test_frontend_config_exposes_ranges(live_map_context, monkeypatch):
    monkeypatch.setattr(settings, "mapbox_token", "pk.test")

    body = live_map_context["client"].get("/api/v1/config").json()

    assert body["mapbox_token"] == "pk.test"
    assert body["refresh_interval_range"] == [1, 60]
    assert body["max_age_range"] == [1, 60]


def test_service_unavailable_before_startup():
    client = TestClient(app)
    try:
        assert client.get("/api/v1/aircraft").status_code == 503
        health = client.get("/healthz").json()
        assert health["status"] == "ok"
        assert health["poller"] == "not-started"
    finally:
        client.close()
