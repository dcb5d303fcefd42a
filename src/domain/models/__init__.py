from .geo import GeoPoint, Path
from .line import (
    Interval,
    KnownJourney,
    Line,
    RouteSection,
    Schedule,
    Sequence,
    StationInterval,
    TimeTable,
    TimeTableResponse,
)
from .stop import Station, Stop

__all__ = [
    "GeoPoint",
    "Interval",
    "KnownJourney",
    "Line",
    "Path",
    "RouteSection",
    "Schedule",
    "Sequence",
    "Station",
    "StationInterval",
    "Stop",
    "TimeTable",
    "TimeTableResponse",
]
