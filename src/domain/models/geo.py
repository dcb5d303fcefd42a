from __future__ import annotations

import math
from dataclasses import dataclass

# Coordinates are kept as integers scaled by this factor so that vertex
# identity (equality/hashing) is exact.
PRECISION = 10000


@dataclass(frozen=True, slots=True, init=False)
class GeoPoint:
    """Fixed-precision WGS84 coordinate.

    Degrees are truncated (floored) to 4 decimal places on construction:
    `GeoPoint(51.50739, -0.12761)` and `GeoPoint(51.50731, -0.12769)` are the
    same vertex.
    """

    lat_e4: int
    lon_e4: int

    def __init__(self, lat: float, lon: float) -> None:
        if not (-90.0 <= lat <= 90.0):
            raise ValueError(f"Invalid latitude: {lat}")
        if not (-180.0 <= lon <= 180.0):
            raise ValueError(f"Invalid longitude: {lon}")
        object.__setattr__(self, "lat_e4", math.floor(lat * PRECISION))
        object.__setattr__(self, "lon_e4", math.floor(lon * PRECISION))

    @property
    def lat(self) -> float:
        return self.lat_e4 / PRECISION

    @property
    def lon(self) -> float:
        return self.lon_e4 / PRECISION

    def __str__(self) -> str:
        return f"({self.lat}, {self.lon})"


Path = tuple[GeoPoint, ...]
