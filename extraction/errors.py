"""Abbruchfehler des Imports. Fehler einzelner Zellen sind Diagnosen, keine Exceptions."""


class TimetableImportError(Exception):
    """Fehler beim Stundenplan-Import."""


class NoSheetFound(TimetableImportError):
    """Die Arbeitsmappe enthält kein Tabellenblatt."""


class NoHeaderFound(TimetableImportError):
    """Keine verwertbare Kopfzeile (leere Tabelle)."""
