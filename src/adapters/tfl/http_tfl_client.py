from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, TypeVar

import httpx

from src.adapters.tfl.config import TflRuntimeConfig
from src.adapters.tfl.schemas import (
    LINES_ADAPTER,
    STOPS_ADAPTER,
    SequenceSchema,
    TimeTableResponseSchema,
)
from src.app.ports.output import ILineDataProvider, IResponseCache
from src.domain.exceptions import CacheMiss, DecodeError, UpstreamFetchError
from src.domain.models import Line, Sequence, Stop, TimeTableResponse

logger = logging.getLogger(__name__)

T = TypeVar("T")

LINES_ENDPOINT = "/line/route"


def _decode(what: str, body: str, parse: Callable[[str], T]) -> T:
    try:
        return parse(body)
    except ValueError as exc:
        # pydantic's ValidationError is a ValueError.
        raise DecodeError(f"Error decoding {what}: {exc}") from exc


@dataclass(slots=True)
class TflClient(ILineDataProvider):
    """TfL unified API client backed by an on-disk response cache.

    Every request is served from the cache when possible; otherwise it is
    fetched remotely and the body is stored in the cache. A failed request
    or undecodable body is logged and resolves to None / an empty list, so
    one bad endpoint never stops sibling requests.

    The underlying httpx.Client is shared and safe to use across threads.
    """

    cache: IResponseCache
    config: TflRuntimeConfig = field(default_factory=TflRuntimeConfig.from_env)
    http: httpx.Client | None = None
    _http: httpx.Client = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._http = self.http or httpx.Client(
            base_url=self.config.base_url,
            timeout=self.config.timeout_s,
            headers={"Accept": "application/json"},
        )

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> TflClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _get(self, endpoint: str) -> str:
        try:
            return self.cache.get(endpoint)
        except CacheMiss:
            return self._remote_get(endpoint)

    def _remote_get(self, endpoint: str) -> str:
        logger.debug("Fetching %s", endpoint)
        try:
            resp = self._http.get(endpoint, params=self.config.auth_params())
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            raise UpstreamFetchError(f"GET {endpoint} failed: {exc}") from exc

        body = resp.text
        try:
            self.cache.put(endpoint, body)
        except OSError as exc:
            logger.warning("Could not cache %s: %s", endpoint, exc)
        return body

    def get_lines(self) -> list[Line]:
        try:
            body = self._get(LINES_ENDPOINT)
            schemas = _decode("lines", body, LINES_ADAPTER.validate_json)
        except (UpstreamFetchError, DecodeError) as exc:
            logger.error("%s", exc)
            return []
        return [s.to_domain() for s in schemas]

    def get_cached_lines(self) -> list[Line]:
        try:
            body = self.cache.get(LINES_ENDPOINT)
            schemas = _decode("lines", body, LINES_ADAPTER.validate_json)
        except CacheMiss:
            return []
        except DecodeError as exc:
            logger.error("%s", exc)
            return []
        return [s.to_domain() for s in schemas]

    def get_sequence(self, line_id: str, direction: str) -> Sequence | None:
        endpoint = f"/line/{line_id}/route/sequence/{direction}"
        try:
            body = self._get(endpoint)
            return _decode(
                "sequence", body, SequenceSchema.model_validate_json
            ).to_domain()
        except (UpstreamFetchError, DecodeError) as exc:
            logger.warning("%s (line %s, %s)", exc, line_id, direction)
            return None

    def get_stops(self, line_id: str) -> list[Stop]:
        endpoint = f"/line/{line_id}/stoppoints"
        try:
            body = self._get(endpoint)
            schemas = _decode("stops", body, STOPS_ADAPTER.validate_json)
        except (UpstreamFetchError, DecodeError) as exc:
            logger.warning("%s (line %s)", exc, line_id)
            return []
        return [s.to_domain() for s in schemas]

    def get_timetable(
        self, line_id: str, originator: str, destination: str
    ) -> TimeTableResponse | None:
        endpoint = f"/line/{line_id}/timetable/{originator}/to/{destination}"
        try:
            body = self._get(endpoint)
            return _decode(
                "timetable",
                body,
                lambda raw: TimeTableResponseSchema.model_validate_json(
                    raw
                ).to_domain(),
            )
        except (UpstreamFetchError, DecodeError) as exc:
            logger.warning("%s (line %s)", exc, line_id)
            return None
