from .local_gtfs_writer import LocalGtfsFeedWriter
from .local_response_cache import LocalResponseCache

__all__ = [
    "LocalGtfsFeedWriter",
    "LocalResponseCache",
]
