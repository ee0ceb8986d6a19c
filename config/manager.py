"""Konfigurationsmanager: Laden und Speichern der Importkonfiguration.

Nutzt ruamel.yaml für YAML-Serialisierung mit Kommentaren.
"""

import json
from datetime import date
from pathlib import Path
from typing import Optional

from rich.console import Console
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap

from config.schema import ImportConfig

console = Console()
yaml = YAML()
yaml.default_flow_style = False
yaml.width = 120


_YAML_HEADER = f"""\
# ============================================
# Stundenplan-Import — Konfiguration
# Erstellt: {date.today().isoformat()}
# ============================================
"""

_FIELD_COMMENTS = {
    "header_scan_rows": "Zeilen am Tabellenanfang, die auf eine Kopfzeile geprüft werden",
    "max_period": "Höchste Stunde, die aus dem Zeilenabstand abgeleitet wird",
    "max_week": "Höchste gültige Semesterwoche; größere Wochenangaben werden ignoriert",
    "default_weeks": "Wochenbereich, wenn die Zelle keinen angibt",
    "unknown_teacher": "Platzhalter für fehlende Lehrkraft (nur nicht-strikt)",
    "unknown_location": "Platzhalter für fehlenden Raum (nur nicht-strikt)",
    "strict": "true = Kurse ohne Lehrkraft/Raum werden verworfen",
    "lossless_weeks": "true = '1-3,9-10' statt '1-10' bei Wochen mit Lücken",
}


class ConfigManager:
    CONFIG_DIR = Path("config")
    DEFAULT_CONFIG = CONFIG_DIR / "import_config.yaml"

    def exists(self, path: Optional[Path] = None) -> bool:
        return (path or self.DEFAULT_CONFIG).exists()

    # ─── Laden ───

    def load(self, path: Optional[Path] = None) -> ImportConfig:
        """Lade Config aus YAML. Fehlt die Datei, gelten die Standardwerte."""
        target = path or self.DEFAULT_CONFIG
        if not target.exists():
            return ImportConfig()
        with open(target, "r", encoding="utf-8") as f:
            raw = yaml.load(f)
        try:
            return ImportConfig.model_validate(dict(raw or {}))
        except Exception as e:
            raise ValueError(
                f"Konfigurationsdatei ungültig: {target}\n"
                f"Pydantic-Fehler: {e}"
            ) from e

    # ─── Speichern ───

    def save(self, config: ImportConfig, path: Optional[Path] = None) -> Path:
        """Speichere Config als YAML mit Kommentaren."""
        target = path or self.DEFAULT_CONFIG
        target.parent.mkdir(parents=True, exist_ok=True)

        data = self._build_commented_yaml(config)

        with open(target, "w", encoding="utf-8") as f:
            f.write(_YAML_HEADER + "\n")
            yaml.dump(data, f)

        console.print(f"[green]✓[/green] Konfiguration gespeichert: {target}")
        return target

    def _build_commented_yaml(self, config: ImportConfig) -> CommentedMap:
        raw = json.loads(config.model_dump_json())
        cm = CommentedMap(raw)
        for field, comment in _FIELD_COMMENTS.items():
            if field in cm:
                cm.yaml_add_eol_comment(comment, field)
        return cm
