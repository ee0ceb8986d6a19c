"""Stundenplan-Import — Haupt-CLI.

Verwendung:
  python main.py import <datei.xlsx>          Stundenplan importieren
  python main.py import <datei.xlsx> --strict Strikte Validierung
  python main.py import <datei.xlsx> --woche 9  Nur Kurse der 9. Semesterwoche
  python main.py conflicts <datei.xlsx>       Zeitkonflikte anzeigen
  python main.py template                     Beispiel-Arbeitsmappe erzeugen
  python main.py config show                  Konfiguration anzeigen
  python main.py config init                  Standard-Konfiguration schreiben
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich import box

console = Console()

# Standard-Pfad für exportierte Kurse
DEFAULT_COURSES_JSON = Path("output/courses.json")


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_config(config_path: Optional[Path], strict: bool = False):
    """Lädt die Konfiguration oder bricht mit Fehlermeldung ab."""
    from config.manager import ConfigManager
    try:
        config = ConfigManager().load(config_path)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    if strict:
        config = config.model_copy(update={"strict": True})
    return config


def _run_import(datei: Path, config):
    from data.excel_import import import_from_excel
    from extraction.errors import TimetableImportError

    console.print(f"[bold]Importiere:[/bold] {datei}")
    try:
        return import_from_excel(datei, config)
    except TimetableImportError as e:
        console.print(f"[red bold]Import fehlgeschlagen:[/red bold]\n{e}")
        sys.exit(1)


# ─── IMPORT ───────────────────────────────────────────────────────────────────

@click.command("import")
@click.argument("datei", type=click.Path(exists=True, path_type=Path))
@click.option("--strict", is_flag=True, default=False,
              help="Kurse ohne Lehrkraft/Raum/gültige Wochen verwerfen.")
@click.option("--save-json", is_flag=True, default=False,
              help="Importierte Kurse als JSON speichern.")
@click.option("--json-path", default=str(DEFAULT_COURSES_JSON),
              help="Pfad für JSON-Export.")
@click.option("--woche", type=click.IntRange(min=1), default=None,
              help="Nur Kurse anzeigen/speichern, die in dieser Semesterwoche stattfinden.")
@click.option("--config", "config_path", type=click.Path(path_type=Path), default=None,
              help="Pfad zur YAML-Konfiguration.")
@click.option("--verbose", "-v", is_flag=True, default=False,
              help="Ausführliches Protokoll (DEBUG).")
def cmd_import(datei: Path, strict: bool, save_json: bool, json_path: str,
               woche: Optional[int], config_path: Optional[Path], verbose: bool):
    """Importiert einen Stundenplan aus einer Excel-Datei."""
    _setup_logging(verbose)
    config = _load_config(config_path, strict)
    report = _run_import(datei, config)

    console.print(f"[green]✓[/green] {len(report.courses)} Kurse importiert.")

    if woche is not None:
        from analysis.schedule_view import filter_courses_by_week

        in_week = filter_courses_by_week(report.courses, woche)
        console.print(f"Woche {woche}: {len(in_week)} von {len(report.courses)} Kursen")
        report = report.model_copy(update={"courses": in_week})

    report.print_rich()

    if save_json:
        out_path = Path(json_path)
        report.save_json(out_path)
        console.print(f"[green]✓[/green] Kurse gespeichert: {out_path}")


# ─── CONFLICTS ────────────────────────────────────────────────────────────────

@click.command("conflicts")
@click.argument("datei", type=click.Path(exists=True, path_type=Path))
@click.option("--config", "config_path", type=click.Path(path_type=Path), default=None,
              help="Pfad zur YAML-Konfiguration.")
def cmd_conflicts(datei: Path, config_path: Optional[Path]):
    """Zeigt Zeitkonflikte zwischen den importierten Kursen."""
    _setup_logging(False)
    config = _load_config(config_path)
    report = _run_import(datei, config)

    if not report.conflicts:
        console.print("[green]✓[/green] Keine Zeitkonflikte.")
        return

    table = Table(title="Zeitkonflikte", box=box.ROUNDED, show_lines=True)
    table.add_column("Tag")
    table.add_column("Stunde")
    table.add_column("Kurs A", style="bold")
    table.add_column("Wochen A")
    table.add_column("Kurs B", style="bold")
    table.add_column("Wochen B")
    for a, b in report.conflicts:
        table.add_row(a.day, a.period, a.course, a.weeks, b.course, b.weeks)
    console.print(table)
    sys.exit(1)


# ─── TEMPLATE ─────────────────────────────────────────────────────────────────

@click.command("template")
@click.option("--output", "-o", default="output/课程表示例.xlsx",
              help="Ausgabepfad für die Beispiel-Arbeitsmappe.")
def cmd_template(output: str):
    """Erzeugt eine Beispiel-Arbeitsmappe im unterstützten Format."""
    from data.excel_import import generate_example

    out_path = generate_example(Path(output))
    console.print(f"[green]✓[/green] Beispiel gespeichert: {out_path}")
    console.print(
        "\nZellnotation:\n"
        "  [cyan]课程[必修][/cyan]        – Kursname + Kategorie (beginnt einen Block)\n"
        "  [cyan]姓名-工号[主讲][/cyan]   – Lehrkraft\n"
        "  [cyan]多媒体教室 A301[/cyan]   – Raum\n"
        "  [cyan][1-8,10-16周][/cyan]     – Wochen\n"
        "  [cyan][3-4][/cyan]             – Stunden"
    )


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Konfiguration anzeigen oder anlegen."""


@cmd_config.command("show")
@click.option("--config", "config_path", type=click.Path(path_type=Path), default=None)
def config_show(config_path: Optional[Path]):
    """Zeigt die aktuelle Konfiguration an."""
    config = _load_config(config_path)
    table = Table(title="Importkonfiguration", box=box.ROUNDED)
    table.add_column("Parameter", style="bold")
    table.add_column("Wert")
    for k, v in config.model_dump().items():
        table.add_row(k, str(v))
    console.print(table)


@cmd_config.command("init")
@click.option("--config", "config_path", type=click.Path(path_type=Path), default=None)
def config_init(config_path: Optional[Path]):
    """Schreibt die Standard-Konfiguration als YAML."""
    from config.manager import ConfigManager
    from config.schema import ImportConfig

    mgr = ConfigManager()
    if mgr.exists(config_path):
        if not click.confirm("Konfiguration existiert bereits. Überschreiben?", default=False):
            return
    mgr.save(ImportConfig(), config_path)


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group()
def cli():
    """Stundenplan-Import: Excel-Stundenplan → Kursliste."""


def main():
    """Einstiegspunkt. Ohne Argumente: Kurzhilfe anzeigen."""
    if len(sys.argv) == 1:
        console.print(Panel(
            "[bold]Stundenplan-Import[/bold]\n\n"
            "Starten Sie mit: python main.py template\n"
            "und danach:      python main.py import output/课程表示例.xlsx",
            border_style="cyan",
        ))
    cli()


# Befehle registrieren
cli.add_command(cmd_import)
cli.add_command(cmd_conflicts)
cli.add_command(cmd_template)
cli.add_command(cmd_config)


if __name__ == "__main__":
    main()
