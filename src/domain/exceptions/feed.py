class FeedError(Exception):
    """Base exception for upstream data and feed assembly problems."""


class DecodeError(FeedError):
    """Raised when an upstream payload does not match the expected shape."""


class CacheMiss(FeedError):
    """Raised when a response is not present in the local cache."""


class UpstreamFetchError(FeedError):
    """Raised when a remote request fails (transport error or bad status)."""


class MissingStationInterval(FeedError):
    """Raised when a known journey references an unknown station interval."""


class MissingDirectionGraph(FeedError):
    """Raised when a route section direction has no route graph."""
