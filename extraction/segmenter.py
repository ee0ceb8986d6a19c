"""Zerlegt den Text einer Zelle in Kursblöcke."""

import re

from config.defaults import CATEGORY_MARKERS

BLOCK_MARKER_RE = re.compile(r"\[(" + "|".join(CATEGORY_MARKERS) + r")\]")


def clean_cell_text(text: str) -> str:
    """HTML-Zeilenumbrüche (&#13; / &#10;) → echte Zeilenumbrüche."""
    return str(text or "").replace("&#13;", "\n").replace("&#10;", "\n")


def segment_cell(text: str) -> list[str]:
    """Zerlegt einen Zellinhalt in Kursblöcke.

    Jede Zeile mit Kategorie-Marker ("[必修]", "[选修]", ...) beginnt einen
    neuen Block; Folgezeilen werden mit Leerzeichen angehängt. Zeilen vor
    dem ersten Marker gehören zu keinem Block. Gibt es keinen Marker, ist
    der ganze (bereinigte) Text ein einziger Block.
    """
    clean = clean_cell_text(text)
    if not clean.strip():
        return []

    lines = [line.strip() for line in re.split(r"[\r\n]+", clean.strip())]
    lines = [line for line in lines if line]

    blocks: list[str] = []
    current: list[str] = []
    for line in lines:
        if BLOCK_MARKER_RE.search(line):
            if current:
                blocks.append(" ".join(current))
            current = [line]
        elif current:
            current.append(line)
    if current:
        blocks.append(" ".join(current))

    if not blocks:
        blocks.append(clean.strip())
    return blocks
