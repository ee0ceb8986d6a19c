"""Kopfzeilen-Suche und Zuordnung Wochentag → Spalte."""

import logging
from typing import Optional, Sequence

from config.defaults import (
    DAYS_OF_WEEK,
    PERIOD_COLUMN_KEYWORDS_DEFINITIVE,
    PERIOD_COLUMN_KEYWORDS_PROBABLE,
)
from config.schema import ImportConfig
from extraction.errors import NoHeaderFound
from extraction.vocabulary import count_days, day_matches, find_column, has_period_header
from models.header import ColumnMap, HeaderInfo

logger = logging.getLogger(__name__)


def locate_header(
    matrix: Sequence[Sequence[str]],
    config: Optional[ImportConfig] = None,
) -> HeaderInfo:
    """Findet die Kopfzeile unter den ersten `header_scan_rows` Zeilen.

    Regeln (erste passende Zeile gewinnt):
      1. Stunden-Beschriftung und ≥2 Wochentage → eindeutige Kopfzeile
      2. Stunden-Beschriftung oder ≥3 Wochentage → wahrscheinliche Kopfzeile
    Passt keine Zeile, gilt Zeile 0 (ohne Stundenspalte).

    Raises:
        NoHeaderFound: wenn die Tabelle leer ist.
    """
    config = config or ImportConfig()
    if not matrix:
        raise NoHeaderFound("Tabelle ist leer – keine Kopfzeile gefunden.")

    for i, row in enumerate(matrix[:config.header_scan_rows]):
        row = row or []
        day_count = count_days(row)
        period_header = has_period_header(row)
        logger.debug(f"Zeile {i}: Wochentage={day_count}, Stundenspalte={period_header}")

        if period_header and day_count >= 2:
            col = find_column(row, PERIOD_COLUMN_KEYWORDS_DEFINITIVE)
            logger.info(f"Kopfzeile (eindeutig): Zeile {i}, Stundenspalte {col}")
            return HeaderInfo(header_row_index=i, period_column_index=col, rule="definitive")
        if period_header or day_count >= 3:
            col = find_column(row, PERIOD_COLUMN_KEYWORDS_PROBABLE)
            logger.info(f"Kopfzeile (wahrscheinlich): Zeile {i}, Stundenspalte {col}")
            return HeaderInfo(header_row_index=i, period_column_index=col, rule="probable")

    logger.info("Keine eindeutige Kopfzeile gefunden – verwende Zeile 0")
    return HeaderInfo(header_row_index=0, period_column_index=None, rule="fallback")


def map_day_columns(header_row: Sequence[str]) -> ColumnMap:
    """Ordnet jedem erkannten Wochentag die erste passende Spalte zu.

    Tage ohne passende Spalte fehlen im Ergebnis.
    """
    column_map: ColumnMap = {}
    for day in DAYS_OF_WEEK:
        for idx, cell in enumerate(header_row or []):
            if day_matches(cell, day, allow_exact=False):
                column_map[day] = idx
                logger.debug(f"Wochentag {day} → Spalte {idx}")
                break
    return column_map
