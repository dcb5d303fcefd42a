from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from src.domain.algorithms.gtfs_assembly import route_section_id
from src.domain.models import Line

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RouteSectionSummary:
    route_section_id: str
    has_timetable: bool
    duplicate: bool


@dataclass(frozen=True, slots=True)
class LineSummary:
    line_id: str
    duplicate: bool
    route_sections: tuple[RouteSectionSummary, ...] = ()


@dataclass(frozen=True, slots=True)
class LineBatchReport:
    lines: tuple[LineSummary, ...] = ()
    duplicate_lines: int = 0
    duplicate_route_sections: int = 0
    schedule_names: frozenset[str] = field(default_factory=frozenset)


def summarize_lines(lines: Sequence[Line]) -> LineBatchReport:
    """Duplicate and timetable coverage summary of an enriched batch."""

    line_ids: set[str] = set()
    section_ids: set[str] = set()
    schedule_names: set[str] = set()
    section_count = 0
    summaries: list[LineSummary] = []

    for line in lines:
        sections: list[RouteSectionSummary] = []
        for section in line.route_sections:
            names = section.timetable.schedule_names() if section.timetable else set()
            schedule_names |= names

            sid = route_section_id(line, section)
            sections.append(
                RouteSectionSummary(
                    route_section_id=sid,
                    has_timetable=bool(names),
                    duplicate=sid in section_ids,
                )
            )
            section_ids.add(sid)
            section_count += 1

        summaries.append(
            LineSummary(
                line_id=line.id,
                duplicate=line.id in line_ids,
                route_sections=tuple(sections),
            )
        )
        line_ids.add(line.id)

    return LineBatchReport(
        lines=tuple(summaries),
        duplicate_lines=len(lines) - len(line_ids),
        duplicate_route_sections=section_count - len(section_ids),
        schedule_names=frozenset(schedule_names),
    )


def log_report(report: LineBatchReport) -> None:
    for line in report.lines:
        logger.info(
            "Line %s; Duplicate: %s", line.line_id, "yes" if line.duplicate else "no"
        )
        for section in line.route_sections:
            logger.info(
                "     %s, Has Timetable: %s, Duplicate: %s",
                section.route_section_id,
                section.has_timetable,
                section.duplicate,
            )

    logger.info(
        "Duplicate Lines: %d, Duplicate Route Sections: %d",
        report.duplicate_lines,
        report.duplicate_route_sections,
    )
    logger.info("Schedule Names:")
    for name in sorted(report.schedule_names):
        logger.info("\t%s", name)
