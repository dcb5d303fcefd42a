from __future__ import annotations

import csv
import logging
import os
from dataclasses import astuple, dataclass, fields
from pathlib import Path
from typing import Any, Iterable

from src.app.ports.output import IGtfsFeedWriter
from src.domain.models.gtfs import (
    GtfsAgency,
    GtfsCalendar,
    GtfsFeed,
    GtfsRoute,
    GtfsShapePoint,
    GtfsStop,
    GtfsStopTime,
    GtfsTrip,
)

logger = logging.getLogger(__name__)

# File name -> row type; CSV headers are the row type's field names.
GTFS_TABLES: tuple[tuple[str, type], ...] = (
    ("agency.txt", GtfsAgency),
    ("routes.txt", GtfsRoute),
    ("stops.txt", GtfsStop),
    ("calendar.txt", GtfsCalendar),
    ("trips.txt", GtfsTrip),
    ("stop_times.txt", GtfsStopTime),
    ("shapes.txt", GtfsShapePoint),
)


@dataclass(slots=True)
class LocalGtfsFeedWriter(IGtfsFeedWriter):
    """Writes a GTFS feed as a directory of UTF-8 .txt (CSV) files.

    Env vars:
      - GTFS_OUTPUT_DIR: target directory (default: gtfs), created if missing
    """

    base_path: str | Path | None = None

    def _base(self) -> Path:
        value = self.base_path or os.getenv("GTFS_OUTPUT_DIR") or "gtfs"
        return Path(value)

    def write_feed(self, feed: GtfsFeed) -> None:
        base = self._base()
        base.mkdir(parents=True, exist_ok=True)

        rows_by_type: dict[type, Iterable[Any]] = {
            GtfsAgency: feed.agencies,
            GtfsRoute: feed.routes,
            GtfsStop: feed.stops,
            GtfsCalendar: feed.calendars,
            GtfsTrip: feed.trips,
            GtfsStopTime: feed.stop_times,
            GtfsShapePoint: feed.shapes,
        }

        for file_name, row_type in GTFS_TABLES:
            path = base / file_name
            count = _write_table(path, row_type, rows_by_type[row_type])
            logger.info("Wrote %d rows to %s", count, path)


def _write_table(path: Path, row_type: type, rows: Iterable[Any]) -> int:
    count = 0
    with path.open("w", encoding="utf-8", newline="") as fp:
        writer = csv.writer(fp)
        writer.writerow([f.name for f in fields(row_type)])
        for row in rows:
            writer.writerow(astuple(row))
            count += 1
    return count
