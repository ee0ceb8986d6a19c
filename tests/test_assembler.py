"""Tests für die Import-Pipeline (Rohtabelle → Kurse + Diagnosen)."""

import copy
import random

import pytest

from config.schema import ImportConfig
from extraction.assembler import (
    TimetableParser,
    counter_id_generator,
    make_id_generator,
    parse_matrix,
    resolve_row_period,
)
from extraction.errors import NoHeaderFound
from extraction.weeks import validate_weeks_format
from models.header import HeaderInfo


HEADER = ["节次", "星期一", "星期二", "星期三", "星期四", "星期五", "星期六", "星期日"]


# ─── HILFSFUNKTIONEN ──────────────────────────────────────────────────────────

def _row(label: str, **cells: str) -> list[str]:
    """Datenzeile mit Stundenbeschriftung; cells: mo/di/mi/do/fr/sa/so."""
    order = ["mo", "di", "mi", "do", "fr", "sa", "so"]
    return [label] + [cells.get(key, "") for key in order]


def _parse(matrix, **config):
    return TimetableParser(ImportConfig(**config), counter_id_generator()).parse(matrix)


# ─── ID-GENERATOREN ───────────────────────────────────────────────────────────

class TestIdGenerators:
    def test_counter(self):
        next_id = counter_id_generator()
        assert [next_id(), next_id(), next_id()] == ["course_1", "course_2", "course_3"]

    def test_counter_prefix(self):
        assert counter_id_generator("k")() == "k_1"

    def test_random_ids_are_unique(self):
        next_id = make_id_generator(random.Random(42))
        ids = {next_id() for _ in range(100)}
        assert len(ids) == 100
        assert all(i.startswith("course_") for i in ids)

    def test_random_id_format(self):
        _, millis, suffix = make_id_generator()().split("_")
        assert millis.isdigit()
        assert len(suffix) == 9


# ─── STUNDE DER ZEILE ─────────────────────────────────────────────────────────

class TestResolveRowPeriod:
    def test_from_period_column(self):
        header = HeaderInfo(header_row_index=0, period_column_index=0, rule="definitive")
        assert resolve_row_period(["第5节"], 1, header, ImportConfig()) == "第5节"
        assert resolve_row_period(["八"], 1, header, ImportConfig()) == "第8节"

    def test_unparseable_label_falls_back_to_offset(self):
        header = HeaderInfo(header_row_index=1, period_column_index=0, rule="definitive")
        assert resolve_row_period(["上午"], 3, header, ImportConfig()) == "第2节"

    def test_offset_without_period_column(self):
        header = HeaderInfo(header_row_index=2, period_column_index=None, rule="probable")
        assert resolve_row_period(["", "x"], 5, header, ImportConfig()) == "第3节"

    def test_offset_beyond_max_period(self):
        header = HeaderInfo(header_row_index=0, period_column_index=None, rule="probable")
        assert resolve_row_period([""], 13, header, ImportConfig()) is None
        assert resolve_row_period([""], 13, header, ImportConfig(max_period=12)) is None
        assert resolve_row_period([""], 5, header, ImportConfig(max_period=4)) is None


# ─── PIPELINE ─────────────────────────────────────────────────────────────────

class TestTimetableParser:
    def test_sample_cell_yields_two_courses(self):
        """Eigene Stunden "[3-4]" gehen vor der Stunde der Zeile."""
        matrix = [HEADER, _row("第1节", mo="数据结构[必修] 张三-t001[主讲] A301 [1-16周] [3-4]")]
        report = _parse(matrix)
        assert [(c.id, c.day, c.period) for c in report.courses] == [
            ("course_1", "星期一", "第3节"),
            ("course_2", "星期一", "第4节"),
        ]
        for c in report.courses:
            assert (c.course, c.teacher, c.location, c.weeks) == ("数据结构", "张三", "A301", "1-16")

    def test_row_period_from_label(self):
        matrix = [HEADER, _row("第2节", di="高等数学\n李四老师\nA101")]
        (course,) = _parse(matrix).courses
        assert (course.day, course.period) == ("星期二", "第2节")
        assert (course.course, course.teacher, course.location, course.weeks) == (
            "高等数学", "李四", "A101", "1-16",
        )

    def test_row_period_inferred_without_period_column(self):
        matrix = [
            ["", "星期一", "星期二", "星期三"],
            ["", "", "英语\n王五老师\nB202", ""],
            ["", "", "", "化学\n孙八老师\nC303"],
        ]
        report = _parse(matrix)
        assert report.header.period_column_index is None
        assert [(c.course, c.day, c.period) for c in report.courses] == [
            ("英语", "星期二", "第1节"),
            ("化学", "星期三", "第2节"),
        ]

    def test_title_rows_before_header(self):
        matrix = [["课程表"], HEADER, _row("第1节", fr="体育[考查]")]
        (course,) = _parse(matrix).courses
        assert (course.day, course.period) == ("星期五", "第1节")

    def test_blank_cells_yield_nothing(self):
        report = _parse([HEADER, _row("第1节", mo="", di="   ", mi="\n")])
        assert report.courses == []
        assert report.diagnostics == []

    def test_unmapped_columns_are_ignored(self):
        matrix = [["节次", "星期一", "备注"], ["第1节", "", "数学[必修]\n张三老师"]]
        assert _parse(matrix).courses == []

    def test_invalid_name_is_reported(self):
        report = _parse([HEADER, _row("第1节", mo="12")])
        assert report.courses == []
        assert [d.kind for d in report.diagnostics] == ["invalid_course_skipped"]
        assert report.diagnostics[0].location == "Zeile 1, 星期一"

    def test_missing_period_is_reported(self):
        """Jenseits von max_period ohne eigene Stunde → verworfen."""
        matrix = [["", "星期一", "星期二", "星期三"]] + [[""] * 4 for _ in range(13)]
        matrix.append(["", "物理\n周九老师", "", ""])
        matrix.append(["", "", "化学[必修]\n孙八老师\n[2]", ""])
        report = _parse(matrix)
        assert [(c.course, c.period) for c in report.courses] == [("化学", "第2节")]
        assert [d.kind for d in report.diagnostics] == ["missing_period"]

    def test_non_strict_fills_placeholders(self):
        (course,) = _parse([HEADER, _row("第1节", mo="体育[考查]")]).courses
        assert course.teacher == "未知教师"
        assert course.location == "未知地点"
        assert course.weeks == "1-16"

    def test_strict_drops_incomplete_courses(self):
        report = _parse([HEADER, _row("第1节", mo="体育[考查]")], strict=True)
        assert report.courses == []
        assert report.diagnostics[0].kind == "invalid_course_skipped"

    def test_period_out_of_range_is_rejected(self):
        report = _parse([HEADER, _row("第1节", mo="数学[必修]\n张三老师\n[13]")])
        assert report.courses == []
        assert "第13节" in report.diagnostics[0].description

    def test_produced_weeks_are_valid(self):
        matrix = [
            HEADER,
            _row("第1节", mo="数学[必修]\n张三老师\n[1-3,5-16周]", di="英语[必修]\n[5周]"),
            _row("第2节", mi="化学[必修]\n周次：1-8"),
        ]
        for lossless in (False, True):
            courses = _parse(matrix, lossless_weeks=lossless).courses
            assert len(courses) == 3
            assert all(validate_weeks_format(c.weeks) for c in courses)

    def test_oversized_week_range_does_not_stall_import(self):
        """Ein Tippfehler "[1-20000000周]" ergibt die Standard-Wochen, ohne Aufzählung."""
        cell = "数学[必修]\n张三老师\n[1-20000000周]"
        report = _parse([HEADER, _row("第1节", mo=cell, di=cell)])
        assert [c.weeks for c in report.courses] == ["1-16", "1-16"]
        assert report.conflicts == []

    def test_weeks_up_to_max_week_are_kept(self):
        matrix = [HEADER, _row("第1节", mo="数学[必修]\n张三老师\n[1-20周]\n语文[必修]\n李四老师\n[20周]")]
        report = _parse(matrix, max_week=20)
        assert [c.weeks for c in report.courses] == ["1-20", "20-20"]
        assert len(report.conflicts) == 1

    def test_conflicts_are_reported(self):
        cell = "数学[必修]\n张三老师\n[1-8周]\n语文[必修]\n李四老师\n[5-12周]"
        report = _parse([HEADER, _row("第1节", mo=cell)])
        assert len(report.courses) == 2
        assert len(report.conflicts) == 1
        a, b = report.conflicts[0]
        assert (a.course, b.course) == ("数学", "语文")
        assert [d.kind for d in report.diagnostics] == ["time_conflict"]
        assert report.skipped == []

    def test_disjoint_weeks_do_not_conflict(self):
        cell = "数学[必修]\n张三老师\n[1-8周]\n语文[必修]\n李四老师\n[9-16周]"
        assert _parse([HEADER, _row("第1节", mo=cell)]).conflicts == []

    def test_input_is_not_mutated(self):
        matrix = [HEADER, _row("第1节", mo="体育[考查]")]
        before = copy.deepcopy(matrix)
        _parse(matrix)
        assert matrix == before

    def test_empty_matrix_raises(self):
        with pytest.raises(NoHeaderFound):
            parse_matrix([])

    def test_parse_matrix_returns_courses(self):
        courses = parse_matrix([HEADER, _row("第1节", mo="体育[考查]")])
        assert len(courses) == 1
        assert courses[0].id.startswith("course_")

    def test_summary(self):
        report = _parse([HEADER, _row("第1节", mo="体育[考查]", di="12")])
        summary = report.summary()
        assert "Kurse: 1" in summary
        assert "Übersprungen: 1" in summary
