"""Konfigurationsmanager: Laden, Speichern und Validieren.

Nutzt ruamel.yaml für YAML-Serialisierung mit Kommentaren.
"""

import json
from datetime import date
from pathlib import Path
from typing import Optional

from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap

from config.defaults import default_planner_config
from config.schema import PlannerConfig

yaml = YAML()
yaml.default_flow_style = False
yaml.width = 120


# ─── YAML-KOMMENTAR-AUFBAU ───

_YAML_HEADER = f"""\
# ============================================
# Kursplaner — Konfiguration
# Erstellt: {date.today().isoformat()}
# ============================================
"""

_SECTION_COMMENTS = {
    "scheduler": (
        "Planerzeugung",
        "max_combinations: Explosionsgrenze der Aufzählung.\n"
        "max_plans_per_call: Harte Obergrenze pro Aufruf.",
    ),
    "smart": (
        "KI-Optimierung",
        "Primärmodell zuerst, bei Fehler genau ein Versuch mit dem Fallback-Modell.",
    ),
    "storage": (
        "Ablage",
        None,
    ),
}


class ConfigManager:
    DEFAULT_CONFIG = Path("config") / "planner_config.yaml"

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = Path(path) if path else self.DEFAULT_CONFIG

    def first_run_check(self) -> bool:
        """Gibt True zurück wenn noch keine Config existiert (Erstaufruf)."""
        return not self.path.exists()

    # ─── Laden ───

    def load(self) -> PlannerConfig:
        """Lade Config aus YAML. Validiert automatisch via Pydantic."""
        if not self.path.exists():
            raise FileNotFoundError(
                f"Konfigurationsdatei nicht gefunden: {self.path}\n"
                f"Führen Sie 'python main.py config init' aus."
            )
        with open(self.path, "r", encoding="utf-8") as f:
            raw = yaml.load(f)
        try:
            return PlannerConfig.model_validate(dict(raw or {}))
        except ValidationError as e:
            raise ValueError(
                f"Konfigurationsdatei ungültig: {self.path}\n"
                f"Pydantic-Fehler: {e}"
            ) from e

    def load_or_default(self) -> PlannerConfig:
        """Wie load(), liefert aber die Defaults wenn keine Datei existiert."""
        if self.first_run_check():
            return default_planner_config()
        return self.load()

    # ─── Speichern ───

    def save(self, config: PlannerConfig) -> Path:
        """Speichere Config als YAML mit Abschnitts-Kommentaren."""
        self.path.parent.mkdir(parents=True, exist_ok=True)

        data = self._build_commented_yaml(config)

        with open(self.path, "w", encoding="utf-8") as f:
            f.write(_YAML_HEADER + "\n")
            yaml.dump(data, f)
        return self.path

    def _build_commented_yaml(self, config: PlannerConfig) -> CommentedMap:
        """Baut die YAML-Struktur mit Kommentaren auf."""
        raw = json.loads(config.model_dump_json())
        cm = CommentedMap(raw)

        for field, (label, comment) in _SECTION_COMMENTS.items():
            cm.yaml_set_comment_before_after_key(
                field,
                before=f"\n─── {label} ───" + (f"\n{comment}" if comment else ""),
            )

        # Inline-Kommentar: Cooldown ist pro Nutzer
        smart_map = CommentedMap(cm["smart"])
        smart_map.yaml_add_eol_comment("pro Nutzer", "cooldown_seconds")
        cm["smart"] = smart_map

        return cm
