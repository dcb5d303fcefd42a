from __future__ import annotations

from dataclasses import dataclass

from .geo import GeoPoint


@dataclass(frozen=True, slots=True)
class GtfsAgency:
    agency_id: str
    agency_name: str
    agency_url: str
    agency_timezone: str


@dataclass(frozen=True, slots=True)
class GtfsRoute:
    route_id: str
    agency_id: str
    route_color: str  # hex without '#', may be empty
    route_short_name: str
    route_long_name: str
    route_type: str  # empty when the mode is unknown


@dataclass(frozen=True, slots=True)
class GtfsStop:
    stop_id: str
    stop_name: str
    stop_lat: float
    stop_lon: float

    @property
    def location(self) -> GeoPoint:
        return GeoPoint(lat=self.stop_lat, lon=self.stop_lon)


@dataclass(frozen=True, slots=True)
class GtfsCalendar:
    service_id: str
    monday: int
    tuesday: int
    wednesday: int
    thursday: int
    friday: int
    saturday: int
    sunday: int
    start_date: str  # YYYYMMDD
    end_date: str


@dataclass(frozen=True, slots=True)
class GtfsTrip:
    route_id: str
    service_id: str
    trip_id: str
    direction: str  # "0" outbound, "1" inbound, "" unknown
    shape_id: str


@dataclass(frozen=True, slots=True)
class GtfsStopTime:
    """Times are HH:MM:SS (GTFS time semantics; hour may exceed 23)."""

    trip_id: str
    stop_id: str
    stop_sequence: int
    arrival_time: str
    departure_time: str


@dataclass(frozen=True, slots=True)
class GtfsShapePoint:
    shape_id: str
    shape_pt_lat: float
    shape_pt_lon: float
    shape_pt_sequence: int


@dataclass(frozen=True, slots=True)
class GtfsFeed:
    """In-memory representation of the static GTFS tables we emit."""

    agencies: tuple[GtfsAgency, ...] = ()
    routes: tuple[GtfsRoute, ...] = ()
    stops: tuple[GtfsStop, ...] = ()
    calendars: tuple[GtfsCalendar, ...] = ()
    trips: tuple[GtfsTrip, ...] = ()
    stop_times: tuple[GtfsStopTime, ...] = ()
    shapes: tuple[GtfsShapePoint, ...] = ()
