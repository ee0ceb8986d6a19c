"""Excel-Import und Beispiel-Vorlage für Stundenpläne.

Lesen:     .xlsx-Bytes → Tabellenblätter als Zeilen × Zell-Strings (openpyxl).
Import:    erstes Tabellenblatt → TimetableParser → ImportReport.
Vorlage:   Beispiel-Stundenplan in der unterstützten Zellnotation.
"""

import io
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from config.defaults import DAYS_OF_WEEK, PERIODS
from config.schema import ImportConfig
from extraction.assembler import IdGenerator, TimetableParser
from extraction.errors import NoSheetFound, TimetableImportError
from models.report import ImportReport

logger = logging.getLogger(__name__)

Matrix = list[list[str]]


@dataclass
class SpreadsheetWorkbook:
    """Dekodierte Arbeitsmappe: Blattnamen in Dateireihenfolge + Zellinhalte."""

    sheet_names: list[str]
    sheets: dict[str, Matrix] = field(default_factory=dict)

    def sheet_at(self, name: str) -> Matrix:
        if name not in self.sheets:
            raise KeyError(f"Tabellenblatt '{name}' nicht vorhanden")
        return self.sheets[name]


def _stringify(value) -> str:
    """Zellwert → String. None → "", 3.0 → "3"."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime):
        return value.isoformat(sep=" ")
    return str(value)


def _sheet_matrix(sheet) -> Matrix:
    """Tabellenblatt → gleich breite Zeilen aus Strings."""
    rows = [
        [_stringify(v) for v in row]
        for row in sheet.iter_rows(values_only=True)
    ]
    width = max((len(r) for r in rows), default=0)
    return [r + [""] * (width - len(r)) for r in rows]


def read_workbook(data: bytes) -> SpreadsheetWorkbook:
    """Dekodiert .xlsx-Bytes.

    Raises:
        TimetableImportError: wenn openpyxl die Datei nicht lesen kann.
    """
    try:
        import openpyxl
    except ImportError:
        raise ImportError("openpyxl nicht installiert. Bitte: pip install openpyxl")

    try:
        wb = openpyxl.load_workbook(io.BytesIO(data), read_only=True, data_only=True)
    except Exception as e:
        raise TimetableImportError(f"Fehler beim Öffnen der Excel-Datei: {e}") from e

    try:
        names = list(wb.sheetnames)
        sheets = {name: _sheet_matrix(wb[name]) for name in names}
    finally:
        wb.close()
    logger.debug(f"Arbeitsmappe gelesen: {names}")
    return SpreadsheetWorkbook(sheet_names=names, sheets=sheets)


def import_workbook(
    workbook: SpreadsheetWorkbook,
    config: Optional[ImportConfig] = None,
    id_generator: Optional[IdGenerator] = None,
) -> ImportReport:
    """Parst immer das erste Tabellenblatt.

    Raises:
        NoSheetFound: Arbeitsmappe ohne Tabellenblätter.
        NoHeaderFound: erstes Blatt ist leer.
    """
    if not workbook.sheet_names:
        raise NoSheetFound("Excel-Datei enthält kein Tabellenblatt.")
    name = workbook.sheet_names[0]
    matrix = workbook.sheet_at(name)
    logger.info(f"Importiere Blatt '{name}' ({len(matrix)} Zeilen)")
    return TimetableParser(config, id_generator).parse(matrix)


def import_from_excel(
    source: Union[Path, str, bytes],
    config: Optional[ImportConfig] = None,
    id_generator: Optional[IdGenerator] = None,
) -> ImportReport:
    """Importiert einen Stundenplan aus einer .xlsx-Datei oder deren Bytes."""
    if isinstance(source, (bytes, bytearray)):
        data = bytes(source)
    else:
        path = Path(source)
        if path.suffix.lower() == ".xls":
            raise TimetableImportError(
                f"Altes .xls-Format wird nicht unterstützt: {path}. Bitte als .xlsx speichern."
            )
        try:
            data = path.read_bytes()
        except OSError as e:
            raise TimetableImportError(f"Datei nicht lesbar: {path} ({e})") from e
    return import_workbook(read_workbook(data), config, id_generator)


# ─── BEISPIEL-VORLAGE ─────────────────────────────────────────────────────────

# (Stunde, Tag) → Zellinhalt
EXAMPLE_CELLS: dict[tuple[int, str], str] = {
    (1, "星期一"): "高等数学[必修]\n李四-t002[主讲]\n教学楼 B201\n[1-16周]\n[1-2]",
    (3, "星期二"): "数据结构[必修]\n张三-t001[主讲]\n多媒体教室 A301\n[1-8,10-16周]\n[3-4]",
    (5, "星期三"): (
        "软件工程[选修]\n王五-t003[主讲]\nA502\n[1-8周]\n[5-6]\n"
        "体育[考查]\n赵六-t004[辅讲]\n[9-16周]\n[5-6]"
    ),
    (7, "星期四"): "大学英语\n钱七老师\nC105",
}


def generate_example(path: Path) -> Path:
    """Erzeugt eine Beispiel-Arbeitsmappe im unterstützten Format.

    Aufbau: Titelzeile, Kopfzeile (节次 + 星期一..星期日), 12 Stundenzeilen.
    """
    try:
        import openpyxl
        from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
        from openpyxl.utils import get_column_letter
    except ImportError:
        raise ImportError("openpyxl nicht installiert. Bitte: pip install openpyxl")

    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "课程表"

    hdr_font = Font(bold=True, color="FFFFFF", size=11)
    hdr_fill = PatternFill("solid", fgColor="2E6DA4")
    alt_fill = PatternFill("solid", fgColor="D6E4F0")
    center = Alignment(horizontal="center", vertical="center", wrap_text=True)
    thin = Side(style="thin", color="BBBBBB")
    border = Border(left=thin, right=thin, top=thin, bottom=thin)

    # Zeile 1: Titel (merged)
    title = ws.cell(row=1, column=1, value="课程表示例")
    title.font = Font(bold=True, size=14)
    title.alignment = center
    ws.merge_cells(start_row=1, start_column=1, end_row=1, end_column=len(DAYS_OF_WEEK) + 1)

    # Zeile 2: Kopfzeile
    for col, label in enumerate(["节次"] + DAYS_OF_WEEK, 1):
        cell = ws.cell(row=2, column=col, value=label)
        cell.font = hdr_font
        cell.fill = hdr_fill
        cell.alignment = center
        cell.border = border

    ws.column_dimensions[get_column_letter(1)].width = 8
    for col in range(2, len(DAYS_OF_WEEK) + 2):
        ws.column_dimensions[get_column_letter(col)].width = 24

    # Zeilen 3..14: Stunden
    for number, period in enumerate(PERIODS, 1):
        r = number + 2
        alt = (r % 2 == 0)
        ws.cell(row=r, column=1, value=period)
        for col, day in enumerate(DAYS_OF_WEEK, 2):
            ws.cell(row=r, column=col, value=EXAMPLE_CELLS.get((number, day)))
        for col in range(1, len(DAYS_OF_WEEK) + 2):
            cell = ws.cell(row=r, column=col)
            cell.alignment = center
            cell.border = border
            if alt:
                cell.fill = alt_fill
        ws.row_dimensions[r].height = 60

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(str(path))
    logger.info(f"Beispiel-Vorlage gespeichert: {path}")
    return path
