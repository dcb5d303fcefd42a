from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

import httpx
import pytest

from src.adapters.persistence import LocalResponseCache
from src.adapters.tfl.config import TflRuntimeConfig
from src.adapters.tfl.http_tfl_client import TflClient
from src.app.ports.output import IResponseCache
from src.domain.exceptions import CacheMiss


@dataclass
class _MemoryCache(IResponseCache):
    bodies: dict[str, str] = field(default_factory=dict)

    def get(self, endpoint: str) -> str:
        try:
            return self.bodies[endpoint]
        except KeyError as exc:
            raise CacheMiss(endpoint) from exc

    def put(self, endpoint: str, body: str) -> None:
        self.bodies[endpoint] = body


@dataclass
class _Upstream:
    """Canned TfL responses keyed by path; records every request."""

    routes: dict[str, tuple[int, str]] = field(default_factory=dict)
    requests: list[httpx.Request] = field(default_factory=list)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status, body = self.routes.get(request.url.path, (404, "{}"))
        return httpx.Response(status, text=body)


def _client(
    upstream: _Upstream,
    cache: IResponseCache | None = None,
    *,
    app_id: str = "",
    app_key: str = "",
) -> TflClient:
    config = TflRuntimeConfig(
        base_url="https://api.test", app_id=app_id, app_key=app_key, timeout_s=5.0
    )
    http = httpx.Client(
        base_url=config.base_url, transport=httpx.MockTransport(upstream)
    )
    return TflClient(cache=cache or _MemoryCache(), config=config, http=http)


LINES_BODY = json.dumps(
    [
        {
            "id": "victoria",
            "name": "Victoria",
            "modeName": "tube",
            "disruptions": [],
            "routeSections": [
                {
                    "name": "Brixton - Walthamstow Central",
                    "direction": "inbound",
                    "originator": "940GZZLUBXN",
                    "destination": "940GZZLUWWL",
                    "serviceType": "Regular",
                }
            ],
        }
    ]
)


def test_get_lines_fetches_remotely_then_serves_from_cache() -> None:
    upstream = _Upstream(routes={"/line/route": (200, LINES_BODY)})
    cache = _MemoryCache()

    with _client(upstream, cache) as client:
        first = client.get_lines()
        second = client.get_lines()

    assert len(upstream.requests) == 1
    assert cache.bodies["/line/route"] == LINES_BODY
    assert first == second

    (line,) = first
    assert (line.id, line.name, line.mode_name) == ("victoria", "Victoria", "tube")
    section = line.route_sections[0]
    assert (section.direction, section.originator, section.destination) == (
        "inbound",
        "940GZZLUBXN",
        "940GZZLUWWL",
    )
    assert section.timetable is None


def test_credentials_are_sent_as_query_parameters() -> None:
    upstream = _Upstream(routes={"/line/route": (200, "[]")})

    with _client(upstream, app_id="id-1", app_key="key-2") as client:
        client.get_lines()

    params = upstream.requests[0].url.params
    assert params["app_id"] == "id-1"
    assert params["app_key"] == "key-2"


def test_auth_params_are_empty_without_credentials() -> None:
    config = TflRuntimeConfig(
        base_url="https://api.test", app_id="", app_key="", timeout_s=1.0
    )
    assert config.auth_params() == {}


def test_runtime_config_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TFL_API_BASE_URL", " https://example.test/ ")
    monkeypatch.setenv("TFL_APP_KEY", "secret")
    monkeypatch.delenv("TFL_APP_ID", raising=False)
    monkeypatch.setenv("TFL_TIMEOUT_S", "12.5")

    config = TflRuntimeConfig.from_env()

    assert config.base_url == "https://example.test"
    assert config.auth_params() == {"app_key": "secret"}
    assert config.timeout_s == 12.5


def test_upstream_error_is_logged_resolves_to_none_and_is_not_cached(
    caplog: pytest.LogCaptureFixture,
) -> None:
    endpoint = "/line/victoria/timetable/A/to/B"
    upstream = _Upstream(routes={endpoint: (500, "oops")})
    cache = _MemoryCache()

    with caplog.at_level(logging.WARNING), _client(upstream, cache) as client:
        assert client.get_timetable("victoria", "A", "B") is None

    assert endpoint not in cache.bodies
    assert "GET /line/victoria/timetable/A/to/B failed" in caplog.text


def test_undecodable_body_yields_empty_list(caplog: pytest.LogCaptureFixture) -> None:
    upstream = _Upstream(routes={"/line/victoria/stoppoints": (200, "not json")})

    with caplog.at_level(logging.WARNING), _client(upstream) as client:
        assert client.get_stops("victoria") == []

    assert "Error decoding stops" in caplog.text


def test_get_cached_lines_never_goes_remote() -> None:
    upstream = _Upstream(routes={"/line/route": (200, LINES_BODY)})

    with _client(upstream) as client:
        assert client.get_cached_lines() == []

    assert upstream.requests == []


def test_get_cached_lines_reads_the_cache() -> None:
    cache = _MemoryCache(bodies={"/line/route": LINES_BODY})

    with _client(_Upstream(), cache) as client:
        lines = client.get_cached_lines()

    assert [line.id for line in lines] == ["victoria"]


def test_get_stops_decodes_nested_children() -> None:
    body = json.dumps(
        [
            {
                "naptanId": "HUBVIC",
                "commonName": "Victoria",
                "lat": 51.4965,
                "lon": -0.1447,
                "children": [
                    {
                        "naptanId": "940GZZLUVIC",
                        "commonName": "Victoria Underground Station",
                        "lat": 0,
                        "lon": 0,
                    }
                ],
            }
        ]
    )
    upstream = _Upstream(routes={"/line/victoria/stoppoints": (200, body)})

    with _client(upstream) as client:
        (stop,) = client.get_stops("victoria")

    assert stop.id == "HUBVIC"
    assert [child.id for child in stop.children] == ["940GZZLUVIC"]
    flat = list(stop.flatten())
    assert [(s.id, s.lat, s.lon) for s in flat] == [
        ("HUBVIC", 51.4965, -0.1447),
        ("940GZZLUVIC", 51.4965, -0.1447),
    ]


def test_get_sequence_returns_line_strings() -> None:
    body = json.dumps(
        {
            "lineId": "victoria",
            "direction": "inbound",
            "lineStrings": ["[[[-0.1, 51.5], [-0.1, 51.501]]]"],
        }
    )
    upstream = _Upstream(routes={"/line/victoria/route/sequence/inbound": (200, body)})

    with _client(upstream) as client:
        sequence = client.get_sequence("victoria", "inbound")

    assert sequence is not None
    assert sequence.line_strings == ("[[[-0.1, 51.5], [-0.1, 51.501]]]",)


def test_get_timetable_parses_zero_padded_times_and_intervals() -> None:
    body = json.dumps(
        {
            "lineId": "victoria",
            "stations": [
                {"id": "A", "name": "Alpha", "lat": 51.5, "lon": -0.1},
            ],
            "stops": [
                {"id": "B", "name": "Bravo", "lat": 51.501, "lon": -0.1},
            ],
            "timetable": {
                "departureStopId": "A",
                "routes": [
                    {
                        "stationIntervals": [
                            {
                                "id": "0",
                                "intervals": [
                                    {"stopId": "B", "timeToArrival": 2.5},
                                ],
                            }
                        ],
                        "schedules": [
                            {
                                "name": "Monday to Friday",
                                "knownJourneys": [
                                    {"hour": "07", "minute": "05", "intervalId": 0},
                                ],
                            }
                        ],
                    }
                ],
            },
        }
    )
    upstream = _Upstream(routes={"/line/victoria/timetable/A/to/B": (200, body)})

    with _client(upstream) as client:
        response = client.get_timetable("victoria", "A", "B")

    assert response is not None
    assert response.status_error_message is None
    assert response.schedule_names() == {"Monday to Friday"}
    timetable = response.first_timetable()
    assert timetable is not None
    journey = timetable.schedules[0].known_journeys[0]
    assert (journey.hour, journey.minute, journey.interval_id) == (7, 5, 0)
    assert timetable.intervals_by_id()[0].intervals[0].time_to_arrival == 2.5


def test_timetable_error_message_is_kept() -> None:
    body = json.dumps(
        {"lineId": "victoria", "statusErrorMessage": "No timetable available"}
    )
    upstream = _Upstream(routes={"/line/victoria/timetable/A/to/B": (200, body)})

    with _client(upstream) as client:
        response = client.get_timetable("victoria", "A", "B")

    assert response is not None
    assert response.status_error_message == "No timetable available"
    assert response.first_timetable() is None


def test_corrupt_cache_file_yields_empty_lines(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    cache = LocalResponseCache(cache_dir=tmp_path)
    cache.path_for("/line/route").write_bytes(b"\xff\xfe[not utf8")
    upstream = _Upstream(routes={"/line/route": (200, LINES_BODY)})

    with caplog.at_level(logging.ERROR), _client(upstream, cache) as client:
        assert client.get_cached_lines() == []
        assert client.get_lines() == []

    assert upstream.requests == []
    assert "not UTF-8" in caplog.text


@dataclass
class _ReadOnlyCache(_MemoryCache):
    def put(self, endpoint: str, body: str) -> None:
        raise PermissionError(f"read-only cache: {endpoint}")


def test_failed_cache_write_still_returns_remote_body(
    caplog: pytest.LogCaptureFixture,
) -> None:
    upstream = _Upstream(routes={"/line/route": (200, LINES_BODY)})

    with caplog.at_level(logging.WARNING), _client(
        upstream, _ReadOnlyCache()
    ) as client:
        lines = client.get_lines()

    assert [line.id for line in lines] == ["victoria"]
    assert "Could not cache /line/route" in caplog.text


def test_close_closes_the_injected_http_client() -> None:
    http = httpx.Client(transport=httpx.MockTransport(_Upstream()))
    client = TflClient(
        cache=_MemoryCache(),
        config=TflRuntimeConfig(
            base_url="https://api.test", app_id="", app_key="", timeout_s=1.0
        ),
        http=http,
    )

    with client:
        pass

    assert http.is_closed
