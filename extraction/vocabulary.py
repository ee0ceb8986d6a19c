"""Unscharfe Zuordnung von Zellinhalten zu kanonischen Tagen und Stunden."""

import re
from typing import Optional, Sequence

from config.defaults import (
    CJK_NUMERALS,
    DAY_ALIASES,
    DAYS_OF_WEEK,
    PERIOD_HEADER_KEYWORDS,
    PERIODS,
    period_name,
)

_PERIOD_LABEL_RE = re.compile(r"第?(\d+)节?")


def cell_text(cell) -> str:
    return "" if cell is None else str(cell)


def day_matches(cell, day: str, allow_exact: bool = True) -> bool:
    """Passt der Zellinhalt zum Wochentag `day`?

    allow_exact schaltet die exakten Aliase (u.a. Ziffern "1".."7") zu;
    die Spaltenzuordnung verzichtet darauf.
    """
    text = cell_text(cell).strip().lower()
    if not text:
        return False
    aliases = DAY_ALIASES[day]
    if any(alias in text for alias in aliases["contains"]):
        return True
    return allow_exact and text in aliases["exact"]


def count_days(row: Sequence) -> int:
    """Anzahl kanonischer Tage, für die irgendeine Zelle der Zeile passt."""
    return sum(
        1 for day in DAYS_OF_WEEK
        if any(day_matches(cell, day) for cell in row)
    )


def contains_any(cell, keywords: Sequence[str]) -> bool:
    text = cell_text(cell)
    return bool(text) and any(k in text for k in keywords)


def has_period_header(row: Sequence) -> bool:
    return any(contains_any(cell, PERIOD_HEADER_KEYWORDS) for cell in row)


def find_column(row: Sequence, keywords: Sequence[str]) -> Optional[int]:
    """Index der ersten Zelle, die eines der Schlüsselwörter enthält."""
    for idx, cell in enumerate(row):
        if contains_any(cell, keywords):
            return idx
    return None


def parse_period_label(text: str) -> Optional[str]:
    """Stundenspalte → "第N节". Akzeptiert "第3节", "3", "3节" und "三"."""
    text = cell_text(text).strip()
    if not text:
        return None
    m = _PERIOD_LABEL_RE.search(text)
    if m:
        return period_name(int(m.group(1)))
    if text in CJK_NUMERALS:
        return period_name(CJK_NUMERALS[text])
    return None


def is_canonical_day(day: str) -> bool:
    return day in DAYS_OF_WEEK


def is_canonical_period(period: str) -> bool:
    return period in PERIODS
