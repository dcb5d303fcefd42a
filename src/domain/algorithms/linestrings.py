from __future__ import annotations

import logging
from typing import Iterable

from pydantic import TypeAdapter, ValidationError

from src.domain.models import GeoPoint, Path

logger = logging.getLogger(__name__)

# Provider pairs are (lon, lat).
_SINGLE_LINE = TypeAdapter(list[tuple[float, float]])
_MULTI_LINE = TypeAdapter(list[list[tuple[float, float]]])


def _to_path(raw: list[tuple[float, float]]) -> Path:
    return tuple(GeoPoint(lat=lat, lon=lon) for lon, lat in raw)


def linestrings_to_paths(line_strings: Iterable[str]) -> list[Path]:
    """Flatten TfL `lineStrings` into paths.

    Each entry is JSON text holding either one list of [lon, lat] pairs or a
    list of such lists. Undecodable or empty fragments are logged and skipped.
    """

    paths: list[Path] = []
    for line_string in line_strings:
        try:
            raw_paths = [_SINGLE_LINE.validate_json(line_string)]
        except ValidationError as single_err:
            try:
                raw_paths = _MULTI_LINE.validate_json(line_string)
            except ValidationError as multi_err:
                logger.warning(
                    "Error decoding line string %.60r (single line: %d errors, "
                    "multi line: %d errors)",
                    line_string,
                    single_err.error_count(),
                    multi_err.error_count(),
                )
                continue

        for raw in raw_paths:
            if not raw:
                logger.debug("Skipping empty line string fragment")
                continue
            try:
                paths.append(_to_path(raw))
            except ValueError as exc:
                logger.warning("Skipping line string fragment: %s", exc)
    return paths
