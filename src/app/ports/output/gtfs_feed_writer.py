from __future__ import annotations

from abc import ABC, abstractmethod

from src.domain.models.gtfs import GtfsFeed


class IGtfsFeedWriter(ABC):
    """Port for persisting an assembled GTFS feed."""

    @abstractmethod
    def write_feed(self, feed: GtfsFeed) -> None:
        raise NotImplementedError
