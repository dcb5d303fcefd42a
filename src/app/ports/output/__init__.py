from .gtfs_feed_writer import IGtfsFeedWriter
from .line_data_provider import ILineDataProvider
from .response_cache import IResponseCache

__all__ = [
    "IGtfsFeedWriter",
    "ILineDataProvider",
    "IResponseCache",
]
