"""Feld-Extraktion aus einem Kursblock: Name, Lehrkraft, Raum, Wochen, Stunden.

Jedes Feld wird über eine geordnete Regelkette gesucht; die erste Regel
mit verwertbarem Treffer gewinnt. Die Ketten sind reine Daten und können
ohne Änderung am Kontrollfluss erweitert werden.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from config.defaults import (
    CATEGORY_MARKERS,
    NAME_FORBIDDEN_KEYWORDS,
    PERIODS,
    ROOM_CODE,
    period_name,
)
from config.schema import ImportConfig
from extraction.weeks import collapse_weeks
from models.course import ExtractedEntry

logger = logging.getLogger(__name__)

_CJK = r"[一-龥]"
_CODE = r"[A-Za-z0-9_]+"          # Personalnummer ("t001", "swsm3827")
_MARKERS = "|".join(CATEGORY_MARKERS)


@dataclass(frozen=True)
class Rule:
    """Ein benanntes Suchmuster; `group` liefert den Feldwert."""

    name: str
    pattern: re.Pattern
    group: int = 1

    def apply(self, text: str) -> Optional[str]:
        m = self.pattern.search(text)
        return m.group(self.group) if m else None


def first_match(
    rules: Sequence[Rule],
    text: str,
    accept: Callable[[str], bool] = lambda v: True,
) -> Optional[tuple[str, str]]:
    """(Regelname, Wert) der ersten Regel, deren Treffer `accept` besteht."""
    for rule in rules:
        value = rule.apply(text)
        if value and accept(value):
            return rule.name, value
    return None


# ─── Kursname ─────────────────────────────────────────────────────────────────

_NAME_WITH_CATEGORY_RE = re.compile(rf"^([^\[]+)\[(?:{_MARKERS})\]")

# Werden nacheinander aus der ersten Zeile entfernt
_NAME_NOISE: list[re.Pattern] = [
    re.compile(r"\[[^\]]*\]"),
    re.compile(r"\([^)]*\)"),
    re.compile(r"（[^）]*）"),
    re.compile(r"[：:].*"),
    re.compile(rf"\s+\w+-{_CODE}\[[^\]]*\].*$"),
    re.compile(rf"\s+{_CJK}+实验室.*$"),
    re.compile(rf"\s+{_CJK}+教室.*$"),
    re.compile(r"\s+组班.*$"),
]


def clean_course_name(block: str) -> str:
    """Kursname aus einem Block.

    "数据结构[必修] ..." → "数据结构". Ohne Kategorie-Marker wird die erste
    Zeile von Klammern, Doppelpunkt-Zusätzen, Lehrkraft- und Raumangaben befreit.
    """
    m = _NAME_WITH_CATEGORY_RE.match(block)
    if m:
        return m.group(1).strip()
    name = block.strip().splitlines()[0] if block.strip() else ""
    for pattern in _NAME_NOISE:
        name = pattern.sub("", name)
    return name.strip()


def name_rejection(name: str) -> Optional[str]:
    """Grund, warum `name` kein Kursname ist – oder None."""
    if not name:
        return "Kursname leer"
    if name.isdigit():
        return "Kursname besteht nur aus Ziffern"
    if len(name) < 2:
        return "Kursname zu kurz"
    if re.fullmatch(r"[\s\-_]+", name):
        return "Kursname nur aus Leer-/Sonderzeichen"
    if any(k in name for k in NAME_FORBIDDEN_KEYWORDS):
        return "Kursname enthält Zeit-Schlüsselwort"
    return None


# ─── Lehrkraft ────────────────────────────────────────────────────────────────

TEACHER_RULES: list[Rule] = [
    Rule("name_code_role", re.compile(rf"({_CJK}{{2,4}})-{_CODE}\[(?:主讲|辅讲)\]")),
    Rule("name_code", re.compile(rf"({_CJK}{{2,4}})-{_CODE}")),
    Rule("name_role", re.compile(rf"({_CJK}{{2,4}})\[(?:主讲|辅讲|教师)\]")),
    Rule("label", re.compile(rf"教师[：:]\s*({_CJK}{{2,4}})")),
    Rule("honorific", re.compile(rf"({_CJK}{{2,4}})(?:老师|教师)")),
]


def extract_teacher(block: str, course_name: str) -> str:
    """Lehrkraft-Name; ein Treffer gleich dem Kursnamen zählt nicht."""
    bare_name = re.sub(r"\s+", "", course_name)
    hit = first_match(TEACHER_RULES, block, accept=lambda v: v != bare_name)
    if hit:
        logger.debug(f"Lehrkraft '{hit[1]}' (Regel {hit[0]})")
        return hit[1]
    return ""


# ─── Raum ─────────────────────────────────────────────────────────────────────

LOCATION_RULES: list[Rule] = [
    Rule("room_with_label", re.compile(rf"(\w+实验室|\w+教室)\s+({ROOM_CODE})"), group=2),
    Rule("room_with_note", re.compile(rf"({ROOM_CODE})\([^)]+\)")),
    Rule("site_label", re.compile(rf"地点[：:]\s*({ROOM_CODE})")),
    Rule("room_label", re.compile(rf"教室[：:]\s*({ROOM_CODE})")),
    # Nicht Teil eines Kürzels wie "t001" oder "swsm3827"
    Rule("bare_room", re.compile(rf"(?<![A-Za-z0-9])({ROOM_CODE})(?!\d)")),
]

LOCATION_FALLBACK_RULES: list[Rule] = [
    Rule("named_room", re.compile(r"(\w+实验室|\w+教室|\w+机房)")),
]


def extract_location(block: str) -> str:
    hit = first_match(LOCATION_RULES, block) or first_match(LOCATION_FALLBACK_RULES, block)
    if hit:
        logger.debug(f"Raum '{hit[1]}' (Regel {hit[0]})")
        return hit[1]
    return ""


# ─── Wochen ───────────────────────────────────────────────────────────────────

WEEK_RULES: list[Rule] = [
    Rule("bracket_list", re.compile(r"\[([\d,-]+)周\]")),
    Rule("bracket_range", re.compile(r"\[(\d+-\d+)周\]")),
    Rule("bracket_single", re.compile(r"\[(\d+)周\]")),
    Rule("range", re.compile(r"(\d+-\d+)周")),
    Rule("ordinal", re.compile(r"第(\d+)周")),
    Rule("labelled", re.compile(r"周次[：:]\s*([\d,-]+)")),
    Rule("bare_list", re.compile(r"([\d,-]+)周")),
]


def extract_weeks(block: str, config: Optional[ImportConfig] = None) -> str:
    """Normalisierter Wochenbereich; ohne Angabe config.default_weeks."""
    config = config or ImportConfig()

    def _collapse(raw: str) -> Optional[str]:
        return collapse_weeks(raw, config.lossless_weeks, config.max_week)

    hit = first_match(WEEK_RULES, block, accept=lambda v: _collapse(v) is not None)
    if hit is None:
        unusable = first_match(WEEK_RULES, block)
        if unusable:
            logger.warning(
                f"Wochenangabe '{unusable[1]}' unbrauchbar (max. Woche {config.max_week}), "
                f"verwende '{config.default_weeks}'"
            )
        return config.default_weeks
    weeks = _collapse(hit[1])
    logger.debug(f"Wochen '{hit[1]}' → '{weeks}' (Regel {hit[0]})")
    return weeks


# ─── Stunden ──────────────────────────────────────────────────────────────────

_PERIOD_RANGE_RE = re.compile(r"\[(\d+)-(\d+)\]")
_PERIOD_SINGLE_RE = re.compile(r"\[(\d+)\]")


def extract_periods(block: str) -> list[str]:
    """"[3-4]" → ["第3节", "第4节"], "[2]" → ["第2节"], sonst [].

    Bereiche werden nach der ersten Stunde jenseits von PERIODS abgeschnitten;
    diese bleibt als ungültige Stunde für die Validierung stehen.
    """
    m = _PERIOD_RANGE_RE.search(block)
    if m:
        start, end = int(m.group(1)), int(m.group(2))
        end = min(end, max(start, len(PERIODS) + 1))
        return [period_name(i) for i in range(start, end + 1)]
    m = _PERIOD_SINGLE_RE.search(block)
    if m:
        return [period_name(int(m.group(1)))]
    return []


# ─── Block → Einträge ─────────────────────────────────────────────────────────

def extract_entries(
    block: str,
    course_name: str,
    config: Optional[ImportConfig] = None,
) -> list[ExtractedEntry]:
    """Ein Eintrag pro Stunde des Blocks, bzw. einer ohne Stunde."""
    teacher = extract_teacher(block, course_name)
    location = extract_location(block)
    weeks = extract_weeks(block, config)
    periods = extract_periods(block) or [""]
    return [
        ExtractedEntry(
            course=course_name,
            teacher=teacher,
            location=location,
            weeks=weeks,
            period=period,
        )
        for period in periods
    ]


def extract_block(block: str, config: Optional[ImportConfig] = None) -> list[ExtractedEntry]:
    """Wie extract_entries, bestimmt aber den Namen selbst. Ungültiger Name → []."""
    name = clean_course_name(block)
    if name_rejection(name):
        return []
    return extract_entries(block, name, config)
