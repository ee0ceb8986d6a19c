"""Sichten auf importierte Kurse: Wochenfilter, Slot-Gruppierung, Semesterkalender."""

from __future__ import annotations

import re
from collections import defaultdict
from datetime import date, timedelta
from typing import Iterable, Optional

from config.defaults import DAYS_OF_WEEK
from extraction.weeks import parse_week_ranges, parse_weeks
from models.course import Course

_PERIOD_NUMBER_RE = re.compile(r"第(\d+)节")

# Obergrenze für current_week
MAX_SEMESTER_WEEKS = 30


def is_course_in_weeks(course: Course, weeks: Iterable[int]) -> bool:
    """True wenn der Kurs in mindestens einer der Wochen stattfindet.

    Leere Auswahl bedeutet "alle Wochen".
    """
    selected = set(weeks)
    if not selected:
        return True
    ranges = parse_week_ranges(course.weeks)
    return any(start <= w <= end for w in selected for start, end in ranges)


def filter_courses_by_week(courses: list[Course], week: int) -> list[Course]:
    return [c for c in courses if is_course_in_weeks(c, [week])]


def available_weeks(courses: list[Course]) -> list[int]:
    """Sortierte Vereinigung aller Wochen."""
    weeks: set[int] = set()
    for c in courses:
        weeks.update(parse_weeks(c.weeks))
    return sorted(weeks)


def group_by_time_slot(courses: list[Course]) -> dict[str, list[Course]]:
    """{"星期一-第1节": [Course, ...], ...} in Eingangsreihenfolge."""
    slots: dict[str, list[Course]] = defaultdict(list)
    for c in courses:
        slots[c.slot_key].append(c)
    return dict(slots)


def period_number(period: str) -> Optional[int]:
    """"第3节" → 3."""
    m = _PERIOD_NUMBER_RE.search(period or "")
    return int(m.group(1)) if m else None


def period_time_text(period: str, period_times: Optional[list[dict]]) -> str:
    """Uhrzeit einer Stunde ("08:00-08:45"), sonst die Stunde selbst.

    period_times: [{"start_time": "08:00", "end_time": "08:45"}, ...], Index 0 = 第1节.
    """
    number = period_number(period)
    if not period_times or number is None or not (1 <= number <= len(period_times)):
        return period
    slot = period_times[number - 1] or {}
    start, end = slot.get("start_time"), slot.get("end_time")
    if not start or not end:
        return period
    return f"{start}-{end}"


def current_week(first_week_start: Optional[date], today: Optional[date] = None) -> int:
    """Semesterwoche für `today` (1..MAX_SEMESTER_WEEKS). Ohne Startdatum: 1."""
    if first_week_start is None:
        return 1
    today = today or date.today()
    week = (today - first_week_start).days // 7 + 1
    return max(1, min(MAX_SEMESTER_WEEKS, week))


def actual_date(first_week_start: Optional[date], week: int, day: str) -> Optional[date]:
    """Kalenderdatum von `day` in Semesterwoche `week`."""
    if first_week_start is None or week < 1 or day not in DAYS_OF_WEEK:
        return None
    return first_week_start + timedelta(weeks=week - 1, days=DAYS_OF_WEEK.index(day))


def format_course_display(course: Course) -> dict[str, str]:
    return {
        "title": course.course,
        "subtitle": f"{course.teacher} | {course.location}",
        "time_info": f"{course.day} {course.period}",
        "weeks_info": f"第{course.weeks}周",
    }
