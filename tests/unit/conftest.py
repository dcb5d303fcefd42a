from __future__ import annotations

import pytest

from src.domain.models import (
    Interval,
    KnownJourney,
    Line,
    RouteSection,
    Schedule,
    Sequence,
    Station,
    StationInterval,
    Stop,
    TimeTable,
    TimeTableResponse,
)


def make_timetable(
    *,
    journeys: tuple[KnownJourney, ...] = (KnownJourney(1, hour=7, minute=30),),
    schedule_name: str = "Monday to Friday",
    intervals: tuple[StationInterval, ...] = (
        StationInterval(id=1, intervals=(Interval(stop_id="B", time_to_arrival=3.0),)),
    ),
    error: str | None = None,
) -> TimeTableResponse:
    return TimeTableResponse(
        line_id="test-line",
        stations=(Station(id="A", name="Stop A (station)", lat=51.5, lon=-0.1),),
        stops=(Station(id="B", name="Stop B", lat=51.501, lon=-0.1),),
        timetables=(
            TimeTable(
                station_intervals=intervals,
                schedules=(Schedule(name=schedule_name, known_journeys=journeys),),
            ),
        ),
        status_error_message=error,
    )


def make_line(
    *,
    direction: str = "outbound",
    timetable: TimeTableResponse | None = None,
    line_strings: tuple[str, ...] = ("[[-0.1, 51.5], [-0.1, 51.501]]",),
    sections: int = 1,
) -> Line:
    """One bus line from stop A to stop B (~111 m apart) with a two point geometry."""

    if timetable is None:
        timetable = make_timetable()

    sequence = Sequence(line_strings=line_strings)
    return Line(
        id="test-line",
        name="Test",
        mode_name="bus",
        route_sections=[
            RouteSection(
                name="Stop A - Stop B",
                direction=direction,
                originator="A",
                destination="B",
                timetable=timetable,
            )
            for _ in range(sections)
        ],
        stops=[
            Stop(id="A", name="Stop A", lat=51.5, lon=-0.1),
            Stop(id="B", name="Stop B", lat=51.501, lon=-0.1),
        ],
        inbound_sequence=sequence,
        outbound_sequence=sequence,
    )


@pytest.fixture
def line_factory():
    return make_line


@pytest.fixture
def timetable_factory():
    return make_timetable
