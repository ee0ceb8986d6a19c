"""Tests für Excel-Lesen, Import und die Beispiel-Vorlage."""

from pathlib import Path

import openpyxl
import pytest

from data.excel_import import (
    SpreadsheetWorkbook,
    generate_example,
    import_from_excel,
    import_workbook,
    read_workbook,
)
from extraction.assembler import counter_id_generator
from extraction.errors import NoHeaderFound, NoSheetFound, TimetableImportError


HEADER = ["节次", "星期一", "星期二", "星期三", "星期四", "星期五"]


# ─── HILFSFUNKTIONEN ──────────────────────────────────────────────────────────

def _write_xlsx(path: Path, rows: list[list], extra_sheet: bool = False) -> Path:
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "课表"
    for row in rows:
        ws.append(row)
    if extra_sheet:
        other = wb.create_sheet("其他")
        other.append(["备注"])
    wb.save(str(path))
    return path


# ─── LESEN ────────────────────────────────────────────────────────────────────

class TestReadWorkbook:
    def test_cells_are_strings(self, tmp_path: Path):
        path = _write_xlsx(tmp_path / "t.xlsx", [HEADER, [1, "数学[必修]", None, 2.0]])
        wb = read_workbook(path.read_bytes())
        matrix = wb.sheet_at("课表")
        assert matrix[0] == HEADER
        assert matrix[1] == ["1", "数学[必修]", "", "2", "", ""]

    def test_rows_are_padded(self, tmp_path: Path):
        path = _write_xlsx(tmp_path / "t.xlsx", [["a"], ["b", "c", "d"]])
        matrix = read_workbook(path.read_bytes()).sheet_at("课表")
        assert [len(r) for r in matrix] == [3, 3]

    def test_sheet_order(self, tmp_path: Path):
        path = _write_xlsx(tmp_path / "t.xlsx", [HEADER], extra_sheet=True)
        assert read_workbook(path.read_bytes()).sheet_names == ["课表", "其他"]

    def test_unknown_sheet_raises(self):
        with pytest.raises(KeyError):
            SpreadsheetWorkbook(sheet_names=[]).sheet_at("x")

    def test_invalid_bytes_raise(self):
        with pytest.raises(TimetableImportError):
            read_workbook(b"keine Excel-Datei")


# ─── IMPORT ───────────────────────────────────────────────────────────────────

class TestImport:
    def test_import_from_path(self, tmp_path: Path):
        path = _write_xlsx(tmp_path / "t.xlsx", [
            HEADER,
            [1, "高等数学[必修]\n李四-t002[主讲]\nB201\n[1-16周]"],
            [2, "", "英语\n王五老师\nC105"],
        ])
        report = import_from_excel(path, id_generator=counter_id_generator())
        assert [(c.id, c.course, c.day, c.period) for c in report.courses] == [
            ("course_1", "高等数学", "星期一", "第1节"),
            ("course_2", "英语", "星期二", "第2节"),
        ]

    def test_import_from_bytes(self, tmp_path: Path):
        path = _write_xlsx(tmp_path / "t.xlsx", [HEADER, ["第1节", "体育[考查]"]])
        report = import_from_excel(path.read_bytes())
        assert len(report.courses) == 1

    def test_only_first_sheet_is_parsed(self, tmp_path: Path):
        path = _write_xlsx(tmp_path / "t.xlsx", [HEADER, ["第1节", "体育[考查]"]], extra_sheet=True)
        assert len(import_from_excel(path).courses) == 1

    def test_xls_is_rejected(self, tmp_path: Path):
        path = tmp_path / "alt.xls"
        path.write_bytes(b"\xd0\xcf\x11\xe0")
        with pytest.raises(TimetableImportError, match="xls"):
            import_from_excel(path)

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(TimetableImportError):
            import_from_excel(tmp_path / "fehlt.xlsx")

    def test_workbook_without_sheets(self):
        with pytest.raises(NoSheetFound):
            import_workbook(SpreadsheetWorkbook(sheet_names=[]))

    def test_empty_first_sheet(self):
        wb = SpreadsheetWorkbook(sheet_names=["Leer"], sheets={"Leer": []})
        with pytest.raises(NoHeaderFound):
            import_workbook(wb)


# ─── BEISPIEL-VORLAGE ─────────────────────────────────────────────────────────

class TestExampleTemplate:
    @pytest.fixture
    def report(self, tmp_path: Path):
        path = generate_example(tmp_path / "out" / "example.xlsx")
        assert path.exists()
        return import_from_excel(path, id_generator=counter_id_generator())

    def test_header_below_title(self, report):
        assert report.header.header_row_index == 1
        assert report.header.period_column_index == 0
        assert len(report.column_map) == 7

    def test_course_count(self, report):
        """Alle Kurse der Vorlage werden erkannt, ohne Konflikte."""
        assert len(report.courses) == 9
        assert report.conflicts == []
        assert report.diagnostics == []

    def test_course_fields(self, report):
        by_name = {}
        for c in report.courses:
            by_name.setdefault(c.course, []).append(c)

        assert [c.period for c in by_name["数据结构"]] == ["第3节", "第4节"]
        ds = by_name["数据结构"][0]
        assert (ds.day, ds.teacher, ds.location, ds.weeks) == ("星期二", "张三", "A301", "1-16")

        sport = by_name["体育"][0]
        assert (sport.teacher, sport.location, sport.weeks) == ("赵六", "未知地点", "9-16")

        english = by_name["大学英语"]
        assert [(c.day, c.period, c.teacher, c.location) for c in english] == [
            ("星期四", "第7节", "钱七", "C105"),
        ]

    def test_save_json(self, report, tmp_path: Path):
        import json

        out = tmp_path / "courses.json"
        report.save_json(out)
        data = json.loads(out.read_text(encoding="utf-8"))
        assert len(data) == 9
        assert data[0]["course"] == "高等数学"
        assert set(data[0]) == {"id", "day", "period", "course", "teacher", "location", "weeks"}
