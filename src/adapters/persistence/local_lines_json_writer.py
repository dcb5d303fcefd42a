from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Sequence

from src.domain.models import Line

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class LocalLinesJsonWriter:
    """Dumps enriched lines as a single JSON document (lines.json).

    Env vars:
      - GTFS_OUTPUT_DIR: target directory (default: gtfs), created if missing
    """

    base_path: str | Path | None = None
    file_name: str = "lines.json"

    def _base(self) -> Path:
        value = self.base_path or os.getenv("GTFS_OUTPUT_DIR") or "gtfs"
        return Path(value)

    def write_lines(self, lines: Sequence[Line]) -> Path:
        base = self._base()
        base.mkdir(parents=True, exist_ok=True)
        path = base / self.file_name

        with path.open("w", encoding="utf-8") as fp:
            payload = [asdict(line) for line in lines]
            json.dump(payload, fp, ensure_ascii=False, indent=2)

        logger.info("Wrote %d lines to %s", len(lines), path)
        return path
