"""Datenmodell für einen importierten Kurstermin (Pydantic v2)."""

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict


class Course(BaseModel):
    """Ein Kurs an genau einem Wochentag in genau einer Unterrichtsstunde.

    Unveränderlich nach dem Zusammenbau; die Validierung liefert bei
    Bedarf eine angepasste Kopie (model_copy).
    """

    model_config = ConfigDict(frozen=True)

    id: str
    day: str              # "星期一" .. "星期日"
    period: str           # "第1节" .. "第12节"
    course: str           # Kursname
    teacher: str = ""
    location: str = ""
    weeks: str = ""       # "1-16", "1-8,10-16"

    @property
    def slot_key(self) -> str:
        """Eindeutiger Schlüssel für Tag + Stunde (z.B. "星期一-第1节")."""
        return f"{self.day}-{self.period}"


@dataclass(frozen=True)
class ExtractedEntry:
    """Felder eines Kursblocks für genau eine (oder keine) Stunde.

    period ist leer, wenn der Block keine eigene Stundenangabe hat;
    dann gilt die Stunde der Tabellenzeile.
    """

    course: str
    teacher: str
    location: str
    weeks: str
    period: str = ""
