"""Ergebnisobjekte des Imports: Diagnosen, Validierung, Konflikte, Gesamtreport."""

import json
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel

from models.course import Course
from models.header import ColumnMap, HeaderInfo


class Diagnostic(BaseModel):
    """Ein übersprungener Block/Kurs oder ein erkannter Zeitkonflikt."""

    severity: Literal["error", "warning"]
    kind: str            # "invalid_course_skipped", "missing_period", "time_conflict"
    description: str
    location: str = ""   # z.B. "Zeile 3, 星期二"


class ValidationResult(BaseModel):
    """Ergebnis von validate_course.

    course ist die (im nicht-strikten Modus ergänzte) Kopie des Eingangs.
    """

    is_valid: bool
    errors: list[str]
    course: Optional[Course] = None


class ConflictResult(BaseModel):
    """Alle bestehenden Kurse, die mit einem neuen Kurs kollidieren."""

    has_conflict: bool
    conflicts: list[Course]


class ImportReport(BaseModel):
    """Vollständiges Ergebnis eines Stundenplan-Imports."""

    header: HeaderInfo
    column_map: ColumnMap
    courses: list[Course]
    diagnostics: list[Diagnostic] = []
    conflicts: list[tuple[Course, Course]] = []

    @property
    def skipped(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.kind != "time_conflict"]

    def summary(self) -> str:
        """Kurze Übersicht über den Import."""
        period_col = (
            f"Spalte {self.header.period_column_index}"
            if self.header.period_column_index is not None
            else "keine (aus Zeilenabstand)"
        )
        lines = [
            f"Kopfzeile: Zeile {self.header.header_row_index} ({self.header.rule})",
            f"Stundenspalte: {period_col}",
            f"Wochentage: {len(self.column_map)} ({', '.join(self.column_map)})",
            f"Kurse: {len(self.courses)}",
            f"Übersprungen: {len(self.skipped)}",
            f"Zeitkonflikte: {len(self.conflicts)}" if self.conflicts else "",
        ]
        return "\n".join(l for l in lines if l)

    def print_rich(self) -> None:
        """Gibt Kurse und Diagnosen formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel
        from rich.table import Table
        from rich import box

        console = Console()
        console.print(Panel(self.summary(), title="Stundenplan-Import", border_style="cyan"))

        if self.courses:
            table = Table(box=box.ROUNDED)
            table.add_column("Tag")
            table.add_column("Stunde")
            table.add_column("Kurs", style="bold")
            table.add_column("Lehrkraft")
            table.add_column("Raum")
            table.add_column("Wochen")
            for c in self.courses:
                table.add_row(c.day, c.period, c.course, c.teacher, c.location, c.weeks)
            console.print(table)
        else:
            console.print("[dim]Keine Kurse gefunden.[/dim]")

        if self.diagnostics:
            lines = []
            for d in self.diagnostics:
                color = "red" if d.severity == "error" else "yellow"
                where = f"{d.location}: " if d.location else ""
                lines.append(f"  [{color}]• {where}{d.description}[/{color}]")
            console.print(Panel("\n".join(lines), title="Hinweise", border_style="yellow"))

    def save_json(self, path: Path) -> None:
        """Speichert die importierten Kurse als JSON-Liste."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        data = [c.model_dump() for c in self.courses]
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
