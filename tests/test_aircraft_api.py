import httpx
import pytest

from livemap.ingestors.aircraft_api import AircraftAPIClient, FetchError


@pytest.mark.anyio
async def test_get_all_aircraft_parses_records():
    payload = [
        {
            "icao24": "abc123",
            "callsign": "TEST123_",
            "latitude": 10.0,
            "longitude": 20.0,
            "lastseen": 1714765200,
            "altitude": 12000,
            "groundspeed": 319.7,
            "vertical_rate": 640,
            "track": 90.0,
            "squawk": "7000",
            "registration": "N123AB",
            "typecode": "B738",
            "unknown_field": "ignored",
        },
        {"icao24": "def456", "latitude": 0, "longitude": 0},
        {"icao24": "fed987", "latitude": "n/a", "longitude": 12.0},
        {"callsign": "NOICAO"},
        "garbage",
    ]

    def handler(request: httpx.Request):
        assert request.url.path == "/all"
        return httpx.Response(200, json=payload)

    transport = httpx.MockTransport(handler)
    client = AircraftAPIClient(base_url="https://example.test", transport=transport)

    records = await client.get_all_aircraft()

    assert [r.icao24 for r in records] == ["abc123", "def456", "fed987"]
    first = records[0]
    assert first.display_name == "TEST123"
    assert first.lastseen == 1714765200
    assert first.track == 90
    assert first.has_position
    assert records[1].has_position
    assert records[1].latitude == 0.0
    assert records[2].latitude is None
    assert not records[2].has_position


@pytest.mark.anyio
async def test_http_error_is_reported_with_status():
    transport = httpx.MockTransport(lambda request: httpx.Response(503, text="unavailable"))
    client = AircraftAPIClient(base_url="https://example.test", transport=transport)

    with pytest.raises(FetchError, match="HTTP error! status: 503"):
        await client.get_all_aircraft()


@pytest.mark.anyio
async def test_rate_limit_is_reported_with_status():
    transport = httpx.MockTransport(lambda request: httpx.Response(429, text="slow down"))
    client = AircraftAPIClient(base_url="https://example.test", transport=transport)

    with pytest.raises(FetchError, match="status: 429"):
        await client.get_all_aircraft()


@pytest.mark.anyio
async def test_transport_error_message_is_surfaced():
    def handler(request: httpx.Request):
        raise httpx.ConnectError("connection refused", request=request)

    client = AircraftAPIClient(
        base_url="https://example.test", transport=httpx.MockTransport(handler)
    )

    with pytest.raises(FetchError, match="connection refused"):
        await client.get_all_aircraft()


@pytest.mark.anyio
async def test_non_list_payload_is_rejected():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"detail": "x"}))
    client = AircraftAPIClient(base_url="https://example.test", transport=transport)

    with pytest.raises(FetchError):
        await client.get_all_aircraft()


@pytest.mark.anyio
async def test_get_track_passes_icao_and_parses_positions():
    def handler(request: httpx.Request):
        assert request.url.path == "/track"
        assert request.url.params["icao24"] == "abc123"
        return httpx.Response(
            200,
            json=[
                {"longitude": 20.0, "latitude": 10.0, "timestamp": 100},
                {"longitude": None, "latitude": 10.1, "timestamp": 110},
            ],
        )

    client = AircraftAPIClient(
        base_url="https://example.test", transport=httpx.MockTransport(handler)
    )

    positions = await client.get_track("abc123")

    assert len(positions) == 2
    assert positions[0].longitude == 20.0
    assert positions[1].longitude is None


@pytest.mark.anyio
async def test_get_aircraft_returns_single_record():
    def handler(request: httpx.Request):
        assert request.url.path == "/aircraft/abc123"
        return httpx.Response(200, json={"icao24": "abc123", "squawk": 1200})

    client = AircraftAPIClient(
        base_url="https://example.test", transport=httpx.MockTransport(handler)
    )

    record = await client.get_aircraft("abc123")

    assert record.icao24 == "abc123"
    assert record.squawk == "1200"
    assert not record.has_position
