"""TimetableParser – setzt Kopfzeile, Zellblöcke und Felder zu Kursen zusammen.

Ablauf je Datenzeile:
  1. Stunde der Zeile bestimmen (Stundenspalte, sonst Abstand zur Kopfzeile)
  2. Für jede Wochentags-Spalte: Zelle → Blöcke → Einträge
  3. Pro Eintrag einen Course bauen und (nicht-strikt) validieren
Übersprungene Blöcke/Kurse landen als Diagnose im ImportReport.
"""

import itertools
import logging
import random
import string
import time
from typing import Callable, Optional, Sequence

from config.defaults import period_name
from config.schema import ImportConfig
from analysis.validator import find_conflicts, validate_course
from extraction.fields import clean_course_name, extract_entries, name_rejection
from extraction.header import locate_header, map_day_columns
from extraction.segmenter import segment_cell
from extraction.vocabulary import cell_text, parse_period_label
from models.course import Course
from models.header import HeaderInfo
from models.report import Diagnostic, ImportReport

logger = logging.getLogger(__name__)

# Liefert bei jedem Aufruf eine neue, eindeutige Kurs-ID
IdGenerator = Callable[[], str]

_BASE36 = string.digits + string.ascii_lowercase


def make_id_generator(rng: Optional[random.Random] = None) -> IdGenerator:
    """IDs der Form "course_<epoch-ms>_<9 Zeichen base36>"."""
    rng = rng or random.Random()

    def _next() -> str:
        suffix = "".join(rng.choice(_BASE36) for _ in range(9))
        return f"course_{int(time.time() * 1000)}_{suffix}"

    return _next


def counter_id_generator(prefix: str = "course") -> IdGenerator:
    """Deterministische IDs: course_1, course_2, ..."""
    counter = itertools.count(1)
    return lambda: f"{prefix}_{next(counter)}"


def resolve_row_period(
    row: Sequence[str],
    row_index: int,
    header: HeaderInfo,
    config: ImportConfig,
) -> Optional[str]:
    """Stunde einer Datenzeile.

    Aus der Stundenspalte ("第3节", "3", "三"), sonst aus dem Abstand
    zur Kopfzeile, solange dieser ≤ config.max_period ist.
    """
    col = header.period_column_index
    if col is not None and col < len(row):
        label = parse_period_label(cell_text(row[col]))
        if label:
            return label
    offset = row_index - header.header_row_index
    if 1 <= offset <= config.max_period:
        return period_name(offset)
    return None


class TimetableParser:
    """Zustandslose Import-Pipeline: Rohtabelle → ImportReport."""

    def __init__(
        self,
        config: Optional[ImportConfig] = None,
        id_generator: Optional[IdGenerator] = None,
    ) -> None:
        self.config = config or ImportConfig()
        self.id_generator = id_generator or make_id_generator()

    def parse(self, matrix: Sequence[Sequence[str]]) -> ImportReport:
        """Führt die komplette Pipeline aus.

        Raises:
            NoHeaderFound: bei leerer Tabelle.
        """
        header = locate_header(matrix, self.config)
        column_map = map_day_columns(matrix[header.header_row_index] or [])
        logger.info(
            f"Kopfzeile {header.header_row_index}, Stundenspalte "
            f"{header.period_column_index}, Tage: {list(column_map)}"
        )

        courses: list[Course] = []
        diagnostics: list[Diagnostic] = []

        for row_index in range(header.header_row_index + 1, len(matrix)):
            row = matrix[row_index] or []
            row_period = resolve_row_period(row, row_index, header, self.config)

            for day, col in column_map.items():
                cell = cell_text(row[col]) if col < len(row) else ""
                if not cell.strip():
                    continue
                where = f"Zeile {row_index}, {day}"
                new, skipped = self._parse_cell(cell, day, row_period, where)
                courses.extend(new)
                diagnostics.extend(skipped)

        conflicts = find_conflicts(courses)
        for a, b in conflicts:
            diagnostics.append(Diagnostic(
                severity="warning",
                kind="time_conflict",
                location=f"{a.day} {a.period}",
                description=(
                    f"'{a.course}' (Wochen {a.weeks}) überschneidet sich mit "
                    f"'{b.course}' (Wochen {b.weeks})"
                ),
            ))

        logger.info(
            f"Import abgeschlossen: {len(courses)} Kurse, "
            f"{len(diagnostics) - len(conflicts)} übersprungen, {len(conflicts)} Konflikte"
        )
        return ImportReport(
            header=header,
            column_map=column_map,
            courses=courses,
            diagnostics=diagnostics,
            conflicts=conflicts,
        )

    def _parse_cell(
        self,
        cell: str,
        day: str,
        row_period: Optional[str],
        where: str,
    ) -> tuple[list[Course], list[Diagnostic]]:
        courses: list[Course] = []
        diagnostics: list[Diagnostic] = []

        blocks = segment_cell(cell)
        logger.debug(f"{where}: {len(blocks)} Block/Blöcke")

        for block in blocks:
            name = clean_course_name(block)
            reason = name_rejection(name)
            if reason:
                logger.debug(f"{where}: Block übersprungen ({reason}): {block!r}")
                diagnostics.append(Diagnostic(
                    severity="warning",
                    kind="invalid_course_skipped",
                    location=where,
                    description=f"{reason}: '{name}'",
                ))
                continue

            for entry in extract_entries(block, name, self.config):
                period = entry.period or row_period
                if not period:
                    logger.warning(f"{where}: Keine Stunde für '{name}' – verworfen")
                    diagnostics.append(Diagnostic(
                        severity="warning",
                        kind="missing_period",
                        location=where,
                        description=f"Keine Unterrichtsstunde für '{name}' bestimmbar",
                    ))
                    continue

                course = Course(
                    id=self.id_generator(),
                    day=day,
                    period=period,
                    course=entry.course,
                    teacher=entry.teacher,
                    location=entry.location,
                    weeks=entry.weeks or self.config.default_weeks,
                )
                result = validate_course(course, strict=self.config.strict, config=self.config)
                if result.is_valid:
                    courses.append(result.course)
                else:
                    logger.warning(f"{where}: '{name}' ungültig: {', '.join(result.errors)}")
                    diagnostics.append(Diagnostic(
                        severity="warning",
                        kind="invalid_course_skipped",
                        location=where,
                        description=f"'{name}': {', '.join(result.errors)}",
                    ))

        return courses, diagnostics


def parse_matrix(
    matrix: Sequence[Sequence[str]],
    config: Optional[ImportConfig] = None,
    id_generator: Optional[IdGenerator] = None,
) -> list[Course]:
    """Reine Kernfunktion: Rohtabelle → validierte Kurse."""
    return TimetableParser(config, id_generator).parse(matrix).courses
