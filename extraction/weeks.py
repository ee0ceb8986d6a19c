"""Wochenbereiche: "1-8,10-16" ↔ [(1, 8), (10, 16)] ↔ [1, 2, ..., 8, 10, ..., 16].

Intern wird mit zusammengeführten (Start, Ende)-Bereichen gerechnet; einzelne
Wochen werden nur auf Wunsch (parse_weeks) ausgeschrieben.
"""

import re
from typing import Iterable, Optional

from config.defaults import WEEKS_PATTERN

_WEEKS_RE = re.compile(WEEKS_PATTERN)
_RANGE_RE = re.compile(r"^\s*(\d+)\s*-\s*(\d+)\s*$")
_SINGLE_RE = re.compile(r"^\s*(\d+)\s*$")

WeekRange = tuple[int, int]


def _merge(ranges: Iterable[WeekRange]) -> list[WeekRange]:
    """Sortiert und verschmilzt überlappende oder aneinanderstoßende Bereiche."""
    merged: list[WeekRange] = []
    for start, end in sorted(ranges):
        if merged and start <= merged[-1][1] + 1:
            merged[-1] = (merged[-1][0], max(merged[-1][1], end))
        else:
            merged.append((start, end))
    return merged


def parse_week_ranges(weeks: Optional[str], max_week: Optional[int] = None) -> list[WeekRange]:
    """Parst '1-3,5,2-4' → [(1, 5)] (sortiert, zusammengeführt).

    Umgekehrte Bereiche ("8-3"), nicht-numerische Teile und Teile, die über
    max_week hinausgehen, tragen nichts bei.
    """
    if not weeks:
        return []
    ranges: list[WeekRange] = []
    for part in weeks.split(","):
        m = _RANGE_RE.match(part)
        if m:
            start, end = int(m.group(1)), int(m.group(2))
        else:
            m = _SINGLE_RE.match(part)
            if not m:
                continue
            start = end = int(m.group(1))
        if start > end or (max_week is not None and end > max_week):
            continue
        ranges.append((start, end))
    return _merge(ranges)


def parse_weeks(weeks: Optional[str]) -> list[int]:
    """Parst '1-3,5,7-8' → [1,2,3,5,7,8] (sortiert, ohne Duplikate)."""
    return [w for start, end in parse_week_ranges(weeks) for w in range(start, end + 1)]


def format_week_ranges(ranges: list[WeekRange], lossless: bool = False) -> str:
    """[(1, 3), (9, 10)] → "1-10" (verlustbehaftet) bzw. "1-3,9-10"."""
    if not ranges:
        return ""
    if len(ranges) == 1 or not lossless:
        return f"{ranges[0][0]}-{ranges[-1][1]}"
    return ",".join(f"{a}-{b}" if a != b else str(a) for a, b in ranges)


def normalize_weeks(weeks: Iterable[int], lossless: bool = False) -> str:
    """Fasst Wochen zu einem Bereichs-String zusammen.

    Zusammenhängend: [3,4,5] → "3-5", [7] → "7-7".
    Mit Lücken: [1,2,3,9,10] → "1-10" (verlustbehaftet, Standard)
    bzw. "1-3,9-10" mit lossless=True.
    """
    return format_week_ranges(_merge((w, w) for w in set(weeks)), lossless)


def ranges_overlap(a: list[WeekRange], b: list[WeekRange]) -> bool:
    """Schnitt zweier sortierter, zusammengeführter Bereichslisten."""
    i = j = 0
    while i < len(a) and j < len(b):
        if a[i][0] <= b[j][1] and b[j][0] <= a[i][1]:
            return True
        if a[i][1] < b[j][1]:
            i += 1
        else:
            j += 1
    return False


def weeks_overlap(a: Optional[str], b: Optional[str]) -> bool:
    """True wenn beide Bereiche mindestens eine gemeinsame Woche haben."""
    return ranges_overlap(parse_week_ranges(a), parse_week_ranges(b))


def validate_weeks_format(weeks) -> bool:
    """Prüft das kanonische Format ("1-16", "1,3,5", "1-8,10-16")."""
    if not weeks or not isinstance(weeks, str):
        return False
    return _WEEKS_RE.match(weeks.strip()) is not None


def collapse_weeks(
    raw: str,
    lossless: bool = False,
    max_week: Optional[int] = None,
) -> Optional[str]:
    """Normalisiert eine Wochenangabe aus dem Zellentext.

    "1-3,5-16" → "1-16" (bzw. "1-3,5-16" mit lossless), "9" → "9-9".
    None wenn nichts Verwertbares (innerhalb max_week) enthalten ist.
    """
    raw = raw.strip()
    if "," in raw or "-" in raw:
        return format_week_ranges(parse_week_ranges(raw, max_week), lossless) or None
    if raw.isdigit():
        n = int(raw)
        if max_week is not None and n > max_week:
            return None
        return f"{n}-{n}"
    return None
