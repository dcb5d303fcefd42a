from .feed import (
    CacheMiss,
    DecodeError,
    FeedError,
    MissingDirectionGraph,
    MissingStationInterval,
    UpstreamFetchError,
)
from .routing import EmptyPathError, NoNearbyVertex, ShapeError, ShapeNotFound

__all__ = [
    "CacheMiss",
    "DecodeError",
    "EmptyPathError",
    "FeedError",
    "MissingDirectionGraph",
    "MissingStationInterval",
    "NoNearbyVertex",
    "ShapeError",
    "ShapeNotFound",
    "UpstreamFetchError",
]
