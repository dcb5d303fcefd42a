from __future__ import annotations

from dataclasses import dataclass, field

from .line_colors import line_color
from .stop import Station, Stop


@dataclass(frozen=True, slots=True)
class Interval:
    stop_id: str
    time_to_arrival: float  # minutes from the trip origin


@dataclass(frozen=True, slots=True)
class StationInterval:
    id: int
    intervals: tuple[Interval, ...] = ()


@dataclass(frozen=True, slots=True)
class KnownJourney:
    """A departure from the route section origin at hour:minute."""

    interval_id: int
    hour: int
    minute: int


@dataclass(frozen=True, slots=True)
class Schedule:
    name: str
    known_journeys: tuple[KnownJourney, ...] = ()


@dataclass(frozen=True, slots=True)
class TimeTable:
    station_intervals: tuple[StationInterval, ...] = ()
    schedules: tuple[Schedule, ...] = ()

    def intervals_by_id(self) -> dict[int, StationInterval]:
        return {interval.id: interval for interval in self.station_intervals}


@dataclass(frozen=True, slots=True)
class TimeTableResponse:
    line_id: str
    stations: tuple[Station, ...] = ()
    stops: tuple[Station, ...] = ()
    timetables: tuple[TimeTable, ...] = ()
    status_error_message: str | None = None

    def first_timetable(self) -> TimeTable | None:
        """The timetable variant used for the feed, if the response is usable."""

        if self.status_error_message or not self.timetables:
            return None
        return self.timetables[0]

    def schedule_names(self) -> set[str]:
        timetable = self.first_timetable()
        if timetable is None:
            return set()
        return {schedule.name for schedule in timetable.schedules}


@dataclass(frozen=True, slots=True)
class Sequence:
    """Raw route geometry for one line direction (JSON-encoded linestrings)."""

    line_strings: tuple[str, ...] = ()


@dataclass(slots=True)
class RouteSection:
    name: str
    direction: str
    originator: str
    destination: str
    timetable: TimeTableResponse | None = None


@dataclass(slots=True)
class Line:
    """A TfL line.

    The fetch orchestrator fills in stops, sequences and section timetables;
    afterwards the record is treated as read-only.
    """

    id: str
    name: str
    mode_name: str
    route_sections: list[RouteSection] = field(default_factory=list)
    stops: list[Stop] | None = None
    inbound_sequence: Sequence | None = None
    outbound_sequence: Sequence | None = None

    @property
    def color(self) -> str:
        return line_color(self.mode_name, self.name)

    def sequence_for(self, direction: str) -> Sequence | None:
        if direction == "inbound":
            return self.inbound_sequence
        if direction == "outbound":
            return self.outbound_sequence
        return None
