from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from src.app.ports.output import IGtfsFeedWriter
from src.domain.algorithms.gtfs_assembly import (
    AGENCY_ID,
    calendar_rows,
    collect_stops,
    direction_code,
    iter_journeys,
    journey_stop_times,
    route_section_id,
    route_type,
    trip_id,
    unique_route_sections,
)
from src.domain.algorithms.linestrings import linestrings_to_paths
from src.domain.algorithms.route_graph import RouteGraph
from src.domain.exceptions import (
    MissingDirectionGraph,
    MissingStationInterval,
    ShapeError,
)
from src.domain.models import Line, RouteSection
from src.domain.models.gtfs import (
    GtfsAgency,
    GtfsFeed,
    GtfsRoute,
    GtfsShapePoint,
    GtfsStop,
    GtfsStopTime,
    GtfsTrip,
)

logger = logging.getLogger(__name__)

TFL_AGENCY = GtfsAgency(
    agency_id=AGENCY_ID,
    agency_name="Transport For London",
    agency_url="https://tfl.gov.uk",
    agency_timezone="Europe/London",
)


def build_route_graphs(line: Line) -> dict[str, RouteGraph]:
    """One route graph per direction, built from the line's geometry."""

    graphs: dict[str, RouteGraph] = {}
    for direction in ("inbound", "outbound"):
        sequence = line.sequence_for(direction)
        paths = linestrings_to_paths(sequence.line_strings) if sequence else []
        graphs[direction] = RouteGraph.from_paths(paths)
    return graphs


def direction_graph(
    graphs: dict[str, RouteGraph], section: RouteSection
) -> RouteGraph:
    graph = graphs.get(section.direction)
    if graph is None:
        raise MissingDirectionGraph(
            f"No route graph for direction {section.direction!r}"
        )
    return graph


@dataclass(slots=True)
class GtfsExportService:
    """Assembles fully enriched lines into a GTFS feed and persists it.

    Runs single-threaded, after every line has been enriched. Missing data
    (no timetable, unknown interval, unreachable shape) is logged and skipped;
    only I/O failures of the feed writer propagate.
    """

    feed_writer: IGtfsFeedWriter

    def export(self, lines: Sequence[Line]) -> GtfsFeed:
        feed = self.assemble(lines)
        self.feed_writer.write_feed(feed)
        logger.info(
            "GTFS feed written: %d routes, %d stops, %d trips, %d stop times, "
            "%d shape points",
            len(feed.routes),
            len(feed.stops),
            len(feed.trips),
            len(feed.stop_times),
            len(feed.shapes),
        )
        return feed

    def assemble(self, lines: Sequence[Line]) -> GtfsFeed:
        stops_by_id = collect_stops(lines)

        trips: list[GtfsTrip] = []
        stop_times: list[GtfsStopTime] = []
        shapes: list[GtfsShapePoint] = []

        for line in lines:
            sections = unique_route_sections(line)

            graphs = build_route_graphs(line)
            attempted: set[str] = set()
            shape_ids: set[str] = set()
            # Only sections with a direction graph claim their shape id.
            for section in line.route_sections:
                section_id = route_section_id(line, section)
                if section_id in attempted:
                    continue
                try:
                    graph = direction_graph(graphs, section)
                except MissingDirectionGraph as exc:
                    logger.warning("Could not find shape for %s: %s", section_id, exc)
                    continue

                attempted.add(section_id)
                points = self._shape_points(section_id, section, graph, stops_by_id)
                if points:
                    shapes.extend(points)
                    shape_ids.add(section_id)

            for section_id, section in sections:
                shape_id = section_id if section_id in shape_ids else ""
                section_trips, section_stop_times = self._section_trips(
                    line, section, shape_id
                )
                trips.extend(section_trips)
                stop_times.extend(section_stop_times)

        return GtfsFeed(
            agencies=(TFL_AGENCY,),
            routes=tuple(self._route(line) for line in lines),
            stops=tuple(stops_by_id.values()),
            calendars=calendar_rows(),
            trips=tuple(trips),
            stop_times=tuple(stop_times),
            shapes=tuple(shapes),
        )

    def _route(self, line: Line) -> GtfsRoute:
        return GtfsRoute(
            route_id=line.id,
            agency_id=AGENCY_ID,
            route_color=line.color,
            route_short_name=line.name,
            route_long_name="",
            route_type=route_type(line),
        )

    def _section_trips(
        self, line: Line, section: RouteSection, shape_id: str
    ) -> tuple[list[GtfsTrip], list[GtfsStopTime]]:
        trips: list[GtfsTrip] = []
        stop_times: list[GtfsStopTime] = []

        response = section.timetable
        if response is None:
            logger.warning("No timetable for %s %s", line.id, section.name)
            return trips, stop_times

        timetable = response.first_timetable()
        if timetable is None:
            logger.warning(
                "Unusable timetable for %s %s: %s",
                line.id,
                section.name,
                response.status_error_message or "no timetable variants",
            )
            return trips, stop_times

        intervals_by_id = timetable.intervals_by_id()
        direction = direction_code(section)
        written_trips: set[str] = set()
        timed_trips: set[str] = set()

        for schedule, journey in iter_journeys(timetable):
            trip = trip_id(line, section, schedule, journey)
            if trip not in written_trips:
                written_trips.add(trip)
                trips.append(
                    GtfsTrip(line.id, schedule.name, trip, direction, shape_id)
                )

            if trip in timed_trips:
                continue
            try:
                rows = journey_stop_times(trip, section, journey, intervals_by_id)
            except MissingStationInterval as exc:
                logger.warning("Skipping stop times on %s: %s", line.id, exc)
                continue
            # A trip counts as timed once one of its journeys resolves.
            timed_trips.add(trip)
            stop_times.extend(rows)

        return trips, stop_times

    def _shape_points(
        self,
        shape_id: str,
        section: RouteSection,
        graph: RouteGraph,
        stops_by_id: dict[str, GtfsStop],
    ) -> list[GtfsShapePoint]:
        origin = stops_by_id.get(section.originator)
        destination = stops_by_id.get(section.destination)
        if origin is None or destination is None:
            logger.warning(
                "Could not find shape for %s: unknown stop coordinates", shape_id
            )
            return []

        try:
            path = graph.find_shape(origin.location, destination.location)
        except (ShapeError, ValueError) as exc:
            logger.warning("Could not find shape for %s: %s", shape_id, exc)
            return []

        return [
            GtfsShapePoint(shape_id, point.lat, point.lon, seq)
            for seq, point in enumerate(path)
        ]
