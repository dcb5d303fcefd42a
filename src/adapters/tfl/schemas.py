from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

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


class TflSchema(BaseModel):
    """TfL payloads use camelCase keys and carry many fields we ignore."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )


class StopSchema(TflSchema):
    naptan_id: str
    common_name: str
    lat: float
    lon: float
    children: list[StopSchema] = Field(default_factory=list)

    def to_domain(self) -> Stop:
        return Stop(
            id=self.naptan_id,
            name=self.common_name,
            lat=self.lat,
            lon=self.lon,
            children=tuple(child.to_domain() for child in self.children),
        )


class StationSchema(TflSchema):
    id: str
    name: str
    lat: float
    lon: float

    def to_domain(self) -> Station:
        return Station(id=self.id, name=self.name, lat=self.lat, lon=self.lon)


class IntervalSchema(TflSchema):
    stop_id: str
    time_to_arrival: float


class StationIntervalSchema(TflSchema):
    id: int
    intervals: list[IntervalSchema] = Field(default_factory=list)

    def to_domain(self) -> StationInterval:
        return StationInterval(
            id=self.id,
            intervals=tuple(
                Interval(stop_id=i.stop_id, time_to_arrival=i.time_to_arrival)
                for i in self.intervals
            ),
        )


class KnownJourneySchema(TflSchema):
    interval_id: int
    # TfL sends zero-padded strings ("07", "05").
    hour: str
    minute: str

    def to_domain(self) -> KnownJourney:
        return KnownJourney(
            interval_id=self.interval_id,
            hour=int(self.hour),
            minute=int(self.minute),
        )


class ScheduleSchema(TflSchema):
    name: str
    known_journeys: list[KnownJourneySchema] = Field(default_factory=list)

    def to_domain(self) -> Schedule:
        return Schedule(
            name=self.name,
            known_journeys=tuple(j.to_domain() for j in self.known_journeys),
        )


class TimeTableSchema(TflSchema):
    station_intervals: list[StationIntervalSchema] = Field(default_factory=list)
    schedules: list[ScheduleSchema] = Field(default_factory=list)

    def to_domain(self) -> TimeTable:
        return TimeTable(
            station_intervals=tuple(s.to_domain() for s in self.station_intervals),
            schedules=tuple(s.to_domain() for s in self.schedules),
        )


class RoutesTimeTablesSchema(TflSchema):
    routes: list[TimeTableSchema] = Field(default_factory=list)


class TimeTableResponseSchema(TflSchema):
    line_id: str = ""
    stations: list[StationSchema] = Field(default_factory=list)
    stops: list[StationSchema] = Field(default_factory=list)
    timetable: RoutesTimeTablesSchema = Field(default_factory=RoutesTimeTablesSchema)
    status_error_message: str | None = None

    def to_domain(self) -> TimeTableResponse:
        return TimeTableResponse(
            line_id=self.line_id,
            stations=tuple(s.to_domain() for s in self.stations),
            stops=tuple(s.to_domain() for s in self.stops),
            timetables=tuple(t.to_domain() for t in self.timetable.routes),
            status_error_message=self.status_error_message or None,
        )


class SequenceSchema(TflSchema):
    line_strings: list[str] = Field(default_factory=list)

    def to_domain(self) -> Sequence:
        return Sequence(line_strings=tuple(self.line_strings))


class RouteSectionSchema(TflSchema):
    name: str
    direction: str
    originator: str
    destination: str

    def to_domain(self) -> RouteSection:
        return RouteSection(
            name=self.name,
            direction=self.direction,
            originator=self.originator,
            destination=self.destination,
        )


class LineSchema(TflSchema):
    id: str
    name: str
    mode_name: str
    route_sections: list[RouteSectionSchema] = Field(default_factory=list)

    def to_domain(self) -> Line:
        return Line(
            id=self.id,
            name=self.name,
            mode_name=self.mode_name,
            route_sections=[s.to_domain() for s in self.route_sections],
        )


LINES_ADAPTER = TypeAdapter(list[LineSchema])
STOPS_ADAPTER = TypeAdapter(list[StopSchema])
