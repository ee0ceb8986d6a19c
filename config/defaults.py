"""Vokabular für Stundenplan-Importe: Wochentage, Unterrichtsstunden, Aliase.

Alle Tabellen sind deklarativ gehalten. Neue Schreibweisen werden hier
ergänzt, ohne die Parser-Logik anzufassen.
"""

# ─── KANONISCHE SLOTS ───

DAYS_OF_WEEK: list[str] = [
    "星期一", "星期二", "星期三", "星期四", "星期五", "星期六", "星期日",
]

PERIODS: list[str] = [f"第{i}节" for i in range(1, 13)]


def period_name(number: int) -> str:
    """1 → "第1节". Keine Bereichsprüfung (Validator entscheidet)."""
    return f"第{number}节"


# ─── TAGES-ALIASE ───
#
# contains:  Teilstring-Treffer (Zelle in Kleinbuchstaben)
# exact:     Exakter Zellinhalt; nur bei der Kopfzeilen-Suche aktiv
#            (Ziffern wie "1" sind in Datenzeilen zu mehrdeutig)

DAY_ALIASES: dict[str, dict[str, list[str]]] = {
    "星期一": {"contains": ["星期一", "一", "周一", "monday"], "exact": ["一", "1"]},
    "星期二": {"contains": ["星期二", "二", "周二", "tuesday"], "exact": ["二", "2"]},
    "星期三": {"contains": ["星期三", "三", "周三", "wednesday"], "exact": ["三", "3"]},
    "星期四": {"contains": ["星期四", "四", "周四", "thursday"], "exact": ["四", "4"]},
    "星期五": {"contains": ["星期五", "五", "周五", "friday"], "exact": ["五", "5"]},
    "星期六": {"contains": ["星期六", "六", "周六", "saturday"], "exact": ["六", "6"]},
    "星期日": {"contains": ["星期日", "日", "周日", "星期天", "周天", "sunday"], "exact": ["日", "天", "7", "0"]},
}


# ─── KOPFZEILEN-SCHLÜSSELWÖRTER ───

# Eine Zelle mit einem dieser Wörter macht die Zeile zum Kopfzeilen-Kandidaten
PERIOD_HEADER_KEYWORDS: tuple[str, ...] = ("节次", "时间", "节", "课时", "时段")

# Spalte mit den Stunden-Bezeichnungen bei eindeutiger Kopfzeile (Regel 1)
PERIOD_COLUMN_KEYWORDS_DEFINITIVE: tuple[str, ...] = ("节次", "时间", "课时")

# ... und bei wahrscheinlicher Kopfzeile (Regel 2)
PERIOD_COLUMN_KEYWORDS_PROBABLE: tuple[str, ...] = ("节", "时间", "课时")

# Chinesische Zahlwörter in der Stundenspalte
CJK_NUMERALS: dict[str, int] = {
    "一": 1, "二": 2, "三": 3, "四": 4, "五": 5, "六": 6,
    "七": 7, "八": 8, "九": 9, "十": 10, "十一": 11, "十二": 12,
}


# ─── ZELLINHALT ───

# Kategorie-Marker, die einen neuen Kursblock einleiten ("数据结构[必修]")
CATEGORY_MARKERS: tuple[str, ...] = ("考查", "必修", "选修", "实践", "理论", "考试")

# Kursnamen mit diesen Wörtern sind Beschriftungen, keine Kurse
NAME_FORBIDDEN_KEYWORDS: tuple[str, ...] = ("节次", "时间", "课时", "时段", "星期", "周")

# Raumnummer: optionaler Buchstabe, 3-4 Ziffern, optionaler Buchstabe ("A301", "B2105C")
ROOM_CODE = r"[A-Z]?\d{3,4}[A-Z]?"

# Kanonisches Wochenformat: "1-16", "1,3,5", "1-8,10-16"
WEEKS_PATTERN = r"^\d+(-\d+)?(,\d+(-\d+)?)*$"

