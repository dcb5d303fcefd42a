from __future__ import annotations

import os
import threading
from dataclasses import dataclass
from pathlib import Path

from src.app.ports.output import IResponseCache
from src.domain.exceptions import CacheMiss, DecodeError


@dataclass(slots=True)
class LocalResponseCache(IResponseCache):
    """Caches raw API response bodies on disk, one file per endpoint.

    The file name is the endpoint with '/' replaced by '_', e.g.
    `/line/central/stoppoints` -> `_line_central_stoppoints`.

    Env vars:
      - TFL_CACHE_DIR: cache directory (default: cache)
    """

    cache_dir: str | Path | None = None

    def _dir(self) -> Path:
        value = self.cache_dir or os.getenv("TFL_CACHE_DIR") or "cache"
        return Path(value)

    def path_for(self, endpoint: str) -> Path:
        return self._dir() / endpoint.replace("/", "_")

    def get(self, endpoint: str) -> str:
        path = self.path_for(endpoint)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise CacheMiss(endpoint) from exc
        except UnicodeDecodeError as exc:
            raise DecodeError(
                f"Cached body for {endpoint} is not UTF-8: {exc}"
            ) from exc

    def put(self, endpoint: str, body: str) -> None:
        path = self.path_for(endpoint)
        path.parent.mkdir(parents=True, exist_ok=True)

        # Readers never observe a partially written body.
        tmp = path.with_name(f"{path.name}.{os.getpid()}.{threading.get_ident()}.tmp")
        tmp.write_text(body, encoding="utf-8")
        os.replace(tmp, path)
