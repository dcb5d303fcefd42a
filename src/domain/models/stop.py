from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True, slots=True)
class Station:
    """A station or stop referenced by a timetable response."""

    id: str
    name: str
    lat: float
    lon: float


@dataclass(frozen=True, slots=True)
class Stop:
    """A stop point served by a line (TfL naptan id).

    Children are sub-platforms; for GTFS purposes they share the parent's
    coordinates.
    """

    id: str
    name: str
    lat: float
    lon: float
    children: tuple[Stop, ...] = ()

    def flatten(self) -> Iterator[Stop]:
        """Yield this stop, then every descendant placed at this stop's coordinates."""

        yield self
        for child in self.children:
            for descendant in child.flatten():
                yield Stop(
                    id=descendant.id,
                    name=descendant.name,
                    lat=self.lat,
                    lon=self.lon,
                )
