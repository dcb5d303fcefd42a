from __future__ import annotations

import logging
import random
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Callable, TypeVar

from src.app.ports.output import ILineDataProvider
from src.domain.models import Line

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_WORKERS = 5


class DataSource(str, Enum):
    API = "api"
    CACHE = "cache"


def sample_window(
    lines: list[Line], size: int, rng: random.Random | None = None
) -> list[Line]:
    """A random contiguous window of `size` lines (all lines if fewer)."""

    if size >= len(lines):
        return lines
    lower = (rng or random.Random()).randrange(0, len(lines) - size + 1)
    logger.info("Sample window: %d..%d", lower, lower + size)
    return lines[lower : lower + size]


@dataclass(slots=True)
class LineFetchService:
    """Loads lines and enriches each one concurrently.

    One task per line fills in that line's sequences, stops and section
    timetables; tasks never touch another line, and the provider is shared
    read-only. `load_lines` returns only after every task has finished.
    """

    provider: ILineDataProvider
    max_workers: int = DEFAULT_WORKERS

    def load_lines(
        self, source: DataSource, *, sample_size: int | None = None
    ) -> list[Line]:
        if source is DataSource.CACHE:
            lines = self.provider.get_cached_lines()
        else:
            lines = self.provider.get_lines()

        if sample_size is not None:
            lines = sample_window(lines, sample_size)

        if not lines:
            return lines

        with ThreadPoolExecutor(max_workers=max(1, self.max_workers)) as executor:
            # list() re-raises anything unexpected from a worker.
            list(executor.map(self.enrich_line, lines))

        return lines

    def enrich_line(self, line: Line) -> None:
        line.inbound_sequence = self._fetch(
            f"{line.id} inbound sequence",
            lambda: self.provider.get_sequence(line.id, "inbound"),
            None,
        )
        line.outbound_sequence = self._fetch(
            f"{line.id} outbound sequence",
            lambda: self.provider.get_sequence(line.id, "outbound"),
            None,
        )
        line.stops = self._fetch(
            f"{line.id} stops", lambda: self.provider.get_stops(line.id), []
        )

        for section in line.route_sections:
            logger.info("Getting timetable for %s: %s", line.name, section.name)
            section.timetable = self._fetch(
                f"{line.id} timetable {section.originator} to {section.destination}",
                lambda: self.provider.get_timetable(
                    line.id, section.originator, section.destination
                ),
                None,
            )

    def _fetch(self, what: str, call: Callable[[], T], default: T) -> T:
        try:
            return call()
        except Exception:
            logger.exception("Fetching %s failed", what)
            return default
