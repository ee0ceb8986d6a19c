"""Validierung einzelner Kurse und Erkennung von Zeitkonflikten.

validate_course verändert seinen Eingang nie: im nicht-strikten Modus
enthält das Ergebnis eine ergänzte Kopie (Platzhalter für Lehrkraft/Raum,
Standard-Wochen).
"""

from typing import Iterable, Optional

from config.schema import ImportConfig
from extraction.vocabulary import is_canonical_day, is_canonical_period
from extraction.weeks import (
    parse_week_ranges,
    ranges_overlap,
    validate_weeks_format,
    weeks_overlap,
)
from models.course import Course
from models.report import ConflictResult, ValidationResult

__all__ = [
    "validate_course",
    "validate_weeks_format",
    "validate_time_conflict",
    "find_conflicts",
]


def validate_course(
    course: Course,
    strict: bool = False,
    config: Optional[ImportConfig] = None,
) -> ValidationResult:
    """Prüft Pflichtfelder und Formate eines Kurses.

    Immer geprüft: Kursname, Wochentag, Unterrichtsstunde.
    Strikt zusätzlich: Lehrkraft, Raum, Wochenformat.
    Nicht-strikt werden fehlende Lehrkraft/Raum durch Platzhalter und
    ungültige Wochen durch config.default_weeks ersetzt.
    """
    config = config or ImportConfig()
    errors: list[str] = []
    updates: dict[str, str] = {}

    if not course.course or not course.course.strip():
        errors.append("Kursname darf nicht leer sein")
    if not course.day or not is_canonical_day(course.day):
        errors.append(f"Ungültiger Wochentag: '{course.day}'")
    if not course.period or not is_canonical_period(course.period):
        errors.append(f"Ungültige Unterrichtsstunde: '{course.period}'")

    teacher_missing = not course.teacher or not course.teacher.strip()
    location_missing = not course.location or not course.location.strip()
    weeks_invalid = not validate_weeks_format(course.weeks)

    if strict:
        if teacher_missing:
            errors.append("Lehrkraft darf nicht leer sein")
        if location_missing:
            errors.append("Raum darf nicht leer sein")
        if weeks_invalid:
            errors.append(
                f"Ungültiges Wochenformat '{course.weeks}' (erwartet z.B. 1-16 oder 1-8,10-16)"
            )
    else:
        if teacher_missing:
            updates["teacher"] = config.unknown_teacher
        if location_missing:
            updates["location"] = config.unknown_location
        if weeks_invalid:
            updates["weeks"] = config.default_weeks

    adjusted = course.model_copy(update=updates) if updates else course
    return ValidationResult(is_valid=not errors, errors=errors, course=adjusted)


def validate_time_conflict(
    new_course: Course,
    existing: Iterable[Course],
    exclude_id: Optional[str] = None,
) -> ConflictResult:
    """Alle Kurse aus `existing` am selben Tag und in derselben Stunde,
    deren Wochen sich mit `new_course` überschneiden.

    exclude_id nimmt einen Kurs aus (z.B. den gerade bearbeiteten).
    """
    conflicts = [
        c for c in existing
        if not (exclude_id and c.id == exclude_id)
        and c.day == new_course.day
        and c.period == new_course.period
        and weeks_overlap(c.weeks, new_course.weeks)
    ]
    return ConflictResult(has_conflict=bool(conflicts), conflicts=conflicts)


def find_conflicts(courses: list[Course]) -> list[tuple[Course, Course]]:
    """Alle kollidierenden Paare (A, B) einer Kursliste, jedes Paar einmal."""
    conflicts: list[tuple[Course, Course]] = []
    parsed = [(c, parse_week_ranges(c.weeks)) for c in courses]
    # O(n^2) reicht für einen Stundenplan
    for i, (a, a_weeks) in enumerate(parsed):
        for b, b_weeks in parsed[i + 1:]:
            if a.slot_key == b.slot_key and ranges_overlap(a_weeks, b_weeks):
                conflicts.append((a, b))
    return conflicts
