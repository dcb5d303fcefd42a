from __future__ import annotations

from abc import ABC, abstractmethod


class IResponseCache(ABC):
    """Port for caching raw upstream response bodies by endpoint."""

    @abstractmethod
    def get(self, endpoint: str) -> str:
        """Return the cached body; raise CacheMiss, or DecodeError if unreadable."""

    @abstractmethod
    def put(self, endpoint: str, body: str) -> None:
        raise NotImplementedError
