from models.course import Course, ExtractedEntry
from models.header import ColumnMap, HeaderInfo
from models.report import ConflictResult, Diagnostic, ImportReport, ValidationResult

__all__ = [
    "Course",
    "ExtractedEntry",
    "ColumnMap",
    "HeaderInfo",
    "Diagnostic",
    "ValidationResult",
    "ConflictResult",
    "ImportReport",
]
