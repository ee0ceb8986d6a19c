"""Extraktion: Rohtabelle (Zeilen × Zellen) → Kurstermine.

Reihenfolge der Pipeline: header → segmenter → fields → assembler.
"""
