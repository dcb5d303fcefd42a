from __future__ import annotations

import hashlib
import logging
import math
from types import MappingProxyType
from typing import Iterable

from src.domain.exceptions import MissingStationInterval
from src.domain.models import (
    KnownJourney,
    Line,
    RouteSection,
    Schedule,
    StationInterval,
    TimeTable,
)
from src.domain.models.gtfs import GtfsCalendar, GtfsStop, GtfsStopTime

logger = logging.getLogger(__name__)

AGENCY_ID = "tfl"

ROUTE_TYPES = MappingProxyType(
    {
        "dlr": "0",
        "tram": "0",
        "tube": "1",
        "overground": "1",
        "national-rail": "2",
        "tflrail": "2",
        "bus": "3",
        "river-tour": "4",
        "river-bus": "4",
        "cable-car": "5",
    }
)

DIRECTION_CODES = MappingProxyType({"inbound": "1", "outbound": "0"})

CALENDAR_START_DATE = "20151031"
CALENDAR_END_DATE = "20161031"

# service_id -> (mon, tue, wed, thu, fri, sat, sun). Service ids are the TfL
# schedule names, so this table is reference data rather than derived.
SERVICE_PATTERNS = MappingProxyType(
    {
        "School Monday": (1, 0, 0, 0, 0, 0, 0),
        "Sunday Night/Monday Morning": (1, 0, 0, 0, 0, 0, 1),
        "School Monday, Tuesday, Thursday & Friday": (1, 1, 0, 1, 1, 0, 0),
        "Tuesday": (0, 1, 0, 0, 0, 0, 0),
        "Monday - Thursday": (1, 1, 1, 1, 0, 0, 0),
        "Saturday": (0, 0, 0, 0, 0, 1, 0),
        "Saturday and Sunday": (0, 0, 0, 0, 0, 1, 1),
        "Sunday": (0, 0, 0, 0, 0, 0, 1),
        "School Tuesday": (0, 1, 0, 0, 0, 0, 0),
        "Saturday Night/Sunday Morning": (0, 0, 0, 0, 0, 1, 1),
        "Mo-Fr Night/Tu-Sat Morning": (1, 1, 1, 1, 1, 1, 0),
        "Monday to Thursday": (1, 1, 1, 1, 0, 0, 0),
        "Mo-Th Nights/Tu-Fr Morning": (1, 1, 1, 1, 1, 0, 0),
        "Saturday (also Good Friday)": (0, 0, 0, 0, 0, 1, 0),
        "Mon-Th Schooldays": (1, 1, 1, 1, 0, 0, 0),
        "Saturdays and Public Holidays": (0, 0, 0, 0, 0, 1, 0),
        "Friday Night/Saturday Morning": (0, 0, 0, 0, 1, 1, 0),
        "Friday": (0, 0, 0, 0, 1, 0, 0),
        "Thursdays": (0, 0, 0, 1, 0, 0, 0),
        "Sunday night/Monday morning - Thursday night/Friday morning": (
            1,
            1,
            1,
            1,
            1,
            0,
            1,
        ),
        "School Thursday": (0, 0, 0, 1, 0, 0, 0),
        "School Friday": (0, 0, 0, 0, 1, 0, 0),
        "Daily": (1, 1, 1, 1, 1, 1, 1),
        "Tuesday, Wednesday & Thursday": (0, 1, 1, 1, 0, 0, 0),
        "Mon-Fri Schooldays": (1, 1, 1, 1, 1, 0, 0),
        "Wednesday": (0, 0, 1, 0, 0, 0, 0),
        "Monday, Tuesday and Thursday": (1, 1, 0, 1, 0, 0, 0),
        "Wednesdays": (0, 0, 1, 0, 0, 0, 0),
        "Monday to Friday": (1, 1, 1, 1, 1, 0, 0),
        "Monday": (1, 0, 0, 0, 0, 0, 0),
        "Sunday and other Public Holidays": (0, 0, 0, 0, 0, 0, 1),
        "School Wednesday": (0, 0, 1, 0, 0, 0, 0),
        "Monday - Friday": (1, 1, 1, 1, 1, 0, 0),
    }
)


def calendar_rows() -> tuple[GtfsCalendar, ...]:
    return tuple(
        GtfsCalendar(
            service_id,
            *days,
            start_date=CALENDAR_START_DATE,
            end_date=CALENDAR_END_DATE,
        )
        for service_id, days in SERVICE_PATTERNS.items()
    )


def route_type(line: Line) -> str:
    value = ROUTE_TYPES.get(line.mode_name)
    if value is None:
        logger.warning(
            "Missing route type for mode %r (line %s)", line.mode_name, line.id
        )
        return ""
    return value


def direction_code(section: RouteSection) -> str:
    return DIRECTION_CODES.get(section.direction, "")


def route_section_id(line: Line, section: RouteSection) -> str:
    """Identifier shared by every section of a line with the same endpoints."""

    return f"{line.id} {section.originator} to {section.destination}"


def unique_route_sections(line: Line) -> list[tuple[str, RouteSection]]:
    """Route sections keyed by route_section_id, first occurrence wins."""

    seen: dict[str, RouteSection] = {}
    for section in line.route_sections:
        seen.setdefault(route_section_id(line, section), section)
    return list(seen.items())


def gtfs_time(hour: int, minute: int, offset_minutes: float = 0.0) -> str:
    """HH:MM:SS for a departure plus an offset, without wrapping past 24:00."""

    minute_offset = minute + math.floor(offset_minutes)
    hour = hour + minute_offset // 60
    return f"{hour:02d}:{minute_offset % 60:02d}:00"


def trip_id(
    line: Line, section: RouteSection, schedule: Schedule, journey: KnownJourney
) -> str:
    """Stable trip id: md5 of line, endpoints, schedule name and departure."""

    raw = (
        line.id
        + section.originator
        + section.destination
        + schedule.name
        + gtfs_time(journey.hour, journey.minute)
    )
    return hashlib.md5(raw.encode("utf-8")).hexdigest()


def iter_journeys(
    timetable: TimeTable,
) -> Iterable[tuple[Schedule, KnownJourney]]:
    for schedule in timetable.schedules:
        for journey in schedule.known_journeys:
            yield schedule, journey


def journey_stop_times(
    trip: str,
    section: RouteSection,
    journey: KnownJourney,
    intervals_by_id: dict[int, StationInterval],
) -> list[GtfsStopTime]:
    interval = intervals_by_id.get(journey.interval_id)
    if interval is None:
        raise MissingStationInterval(
            f"No station interval {journey.interval_id} for trip {trip}"
        )

    departure = gtfs_time(journey.hour, journey.minute)
    rows = [GtfsStopTime(trip, section.originator, 1, departure, departure)]
    for seq, stop in enumerate(interval.intervals, start=2):
        at = gtfs_time(journey.hour, journey.minute, stop.time_to_arrival)
        rows.append(GtfsStopTime(trip, stop.stop_id, seq, at, at))
    return rows


def collect_stops(lines: Iterable[Line]) -> dict[str, GtfsStop]:
    """Every distinct stop referenced by the lines, keyed by stop id.

    Line stops (with their children) come first, then timetable stations and
    stops of each route section. The first occurrence of an id wins.
    """

    stops: dict[str, GtfsStop] = {}

    def _add(stop_id: str, name: str, lat: float, lon: float) -> None:
        if stop_id not in stops:
            stops[stop_id] = GtfsStop(stop_id, name, lat, lon)

    for line in lines:
        for stop in line.stops or ():
            for flat in stop.flatten():
                _add(flat.id, flat.name, flat.lat, flat.lon)

        for section in line.route_sections:
            if section.timetable is None:
                continue
            for station in (*section.timetable.stations, *section.timetable.stops):
                _add(station.id, station.name, station.lat, station.lon)

    return stops
