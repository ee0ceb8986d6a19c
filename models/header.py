"""Strukturinformationen einer Stundenplan-Tabelle."""

from typing import Literal, Optional

from pydantic import BaseModel

# Kanonischer Wochentag → Spaltenindex
ColumnMap = dict[str, int]


class HeaderInfo(BaseModel):
    """Gefundene Kopfzeile und (optional) Spalte mit den Stunden-Bezeichnungen."""

    header_row_index: int
    period_column_index: Optional[int] = None   # None → Stunde aus Zeilenabstand
    # definitive: Stundenspalte + ≥2 Tage, probable: eins von beiden, fallback: Zeile 0
    rule: Literal["definitive", "probable", "fallback"] = "fallback"
