import re

from pydantic import BaseModel, Field, field_validator

from config.defaults import WEEKS_PATTERN


# ─── IMPORT-PIPELINE ───

class ImportConfig(BaseModel):
    """Konfiguration des Stundenplan-Imports.

    Steuert die Kopfzeilen-Suche, die Ableitung der Unterrichtsstunde
    aus der Zeilennummer und die Validierung der erzeugten Kurse.
    """
    # Wie viele Zeilen am Tabellenanfang auf eine Kopfzeile geprüft werden
    header_scan_rows: int = Field(15, ge=1, le=100,
        description="Anzahl Zeilen für die Kopfzeilen-Suche")
    # Höchste Stunde, die aus dem Zeilenabstand zur Kopfzeile abgeleitet wird
    max_period: int = Field(12, ge=1, le=12,
        description="Höchste ableitbare Unterrichtsstunde")
    # Wochenangaben darüber gelten als Tippfehler und tragen nichts bei
    max_week: int = Field(30, ge=1, le=60,
        description="Höchste gültige Semesterwoche")
    # Wochenbereich, wenn die Zelle keinen angibt
    default_weeks: str = Field("1-16",
        description="Standard-Wochenbereich (z.B. 1-16)")
    # Platzhalter im nicht-strikten Modus
    unknown_teacher: str = Field("未知教师",
        description="Platzhalter für fehlende Lehrkraft")
    unknown_location: str = Field("未知地点",
        description="Platzhalter für fehlenden Raum")
    # Strikter Modus verwirft Kurse ohne Lehrkraft/Raum/gültige Wochen
    strict: bool = Field(False,
        description="Strikte Validierung (keine Platzhalter)")
    # Nicht zusammenhängende Wochen als "1-3,9-10" statt "1-10" speichern
    lossless_weeks: bool = Field(False,
        description="Lückenhafte Wochen verlustfrei speichern")

    @field_validator("default_weeks")
    @classmethod
    def _check_default_weeks(cls, v: str) -> str:
        v = v.strip()
        if not re.match(WEEKS_PATTERN, v):
            raise ValueError(
                f"default_weeks '{v}' ist kein gültiges Wochenformat (z.B. 1-16 oder 1-8,10-16)"
            )
        return v

    @field_validator("unknown_teacher", "unknown_location")
    @classmethod
    def _check_placeholder(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Platzhalter darf nicht leer sein.")
        return v.strip()
