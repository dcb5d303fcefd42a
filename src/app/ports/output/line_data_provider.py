from __future__ import annotations

from abc import ABC, abstractmethod

from src.domain.models import Line, Sequence, Stop, TimeTableResponse


class ILineDataProvider(ABC):
    """Port for obtaining TfL line records.

    Implementations must be safe to call from several threads at once and
    must not raise for a single failed request: they return None (or an
    empty list) and log instead.
    """

    @abstractmethod
    def get_lines(self) -> list[Line]:
        """All lines with their route sections, fetching remotely if needed."""

    @abstractmethod
    def get_cached_lines(self) -> list[Line]:
        """Lines from the local cache only; empty when nothing was fetched yet."""

    @abstractmethod
    def get_sequence(self, line_id: str, direction: str) -> Sequence | None:
        raise NotImplementedError

    @abstractmethod
    def get_stops(self, line_id: str) -> list[Stop]:
        raise NotImplementedError

    @abstractmethod
    def get_timetable(
        self, line_id: str, originator: str, destination: str
    ) -> TimeTableResponse | None:
        raise NotImplementedError
