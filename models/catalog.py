"""Catalog: Kursangebot eines Semesters + Eingangsprüfung (Pydantic v2).

Rohdaten (JSON aus Import, Admin-Pflege, ...) werden hier einzeln
validiert. Fehlerhafte Einträge werden verworfen und im CatalogReport
gemeldet, damit der Scheduler nur mit sauberen CourseSections arbeitet.
"""

import json
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ValidationError

from models.course import CourseSection


class CatalogError(Exception):
    """Katalogdatei nicht lesbar oder strukturell unbrauchbar."""


class CatalogReport(BaseModel):
    """Ergebnis der Eingangsprüfung."""

    accepted: int
    errors: list[str]      # Verworfene Einträge
    warnings: list[str]    # Übernommen, aber auffällig

    @property
    def is_clean(self) -> bool:
        return not self.errors and not self.warnings

    def print_rich(self) -> None:
        """Gibt den Report formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel

        console = Console()
        if not self.errors:
            status = f"[bold green]✓ {self.accepted} Sections übernommen[/bold green]"
        else:
            status = (
                f"[bold yellow]{self.accepted} Sections übernommen, "
                f"{len(self.errors)} verworfen[/bold yellow]"
            )

        lines = [status]
        if self.errors:
            lines.append("\n[red bold]Verworfen:[/red bold]")
            for e in self.errors:
                lines.append(f"  [red]• {e}[/red]")
        if self.warnings:
            lines.append("\n[yellow bold]Warnungen:[/yellow bold]")
            for w in self.warnings:
                lines.append(f"  [yellow]• {w}[/yellow]")
        if self.is_clean:
            lines.append("[dim]Keine Probleme gefunden.[/dim]")

        console.print(Panel("\n".join(lines), title="Katalog-Prüfung", border_style="cyan"))


def _describe(err: ValidationError) -> str:
    parts = []
    for e in err.errors():
        loc = ".".join(str(x) for x in e["loc"]) or "entry"
        parts.append(f"{loc}: {e['msg']}")
    return "; ".join(parts)


class Catalog(BaseModel):
    """Alle angebotenen Sections. Die Reihenfolge bleibt erhalten (sie steuert
    die Aufzählungsreihenfolge im Scheduler)."""

    sections: list[CourseSection] = []

    # ─── Eingang ───

    @classmethod
    def from_raw(cls, entries: list[Any]) -> tuple["Catalog", CatalogReport]:
        """Validiert Rohdaten Eintrag für Eintrag.

        - Ungültige Einträge → errors (verworfen)
        - Doppelte IDs → warnings (spätere Duplikate verworfen)
        - Sections ohne Termine → warnings (übernommen)
        """
        sections: list[CourseSection] = []
        errors: list[str] = []
        warnings: list[str] = []
        seen_ids: set[str] = set()

        for idx, raw in enumerate(entries):
            if not isinstance(raw, dict):
                errors.append(f"Eintrag {idx}: kein Objekt ({type(raw).__name__})")
                continue
            try:
                section = CourseSection.model_validate(raw)
            except ValidationError as e:
                ident = raw.get("id") or raw.get("code") or "?"
                errors.append(f"Eintrag {idx} ({ident}): {_describe(e)}")
                continue

            if section.id in seen_ids:
                warnings.append(
                    f"Eintrag {idx}: ID '{section.id}' doppelt – Duplikat verworfen."
                )
                continue
            seen_ids.add(section.id)

            if not section.schedule:
                warnings.append(
                    f"Section {section.id} ({section.code} {section.section_class}): "
                    f"keine Termine hinterlegt."
                )
            sections.append(section)

        report = CatalogReport(accepted=len(sections), errors=errors, warnings=warnings)
        return cls(sections=sections), report

    # ─── Abfragen ───

    def codes(self) -> list[str]:
        """Alle Kurs-Codes in Katalogreihenfolge (ohne Duplikate)."""
        return list(dict.fromkeys(s.code for s in self.sections))

    def sections_for(self, code: str) -> list[CourseSection]:
        return [s for s in self.sections if s.code == code]

    def by_id(self) -> dict[str, CourseSection]:
        return {s.id: s for s in self.sections}

    def filter(self, prodi: Optional[str] = None) -> "Catalog":
        """Schränkt den Katalog auf einen Studiengang ein (None = alles)."""
        if prodi is None:
            return self
        wanted = prodi.strip().lower()
        return Catalog(sections=[
            s for s in self.sections
            if s.prodi is not None and s.prodi.strip().lower() == wanted
        ])

    def __len__(self) -> int:
        return len(self.sections)

    # ─── Persistenz ───

    def save_json(self, path: Path) -> None:
        """Speichert den Katalog als JSON-Liste (Feld `class` wie im Rohformat)."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        data = [s.model_dump(mode="json", by_alias=True, exclude_none=True)
                for s in self.sections]
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    @classmethod
    def load_json(cls, path: Path) -> tuple["Catalog", CatalogReport]:
        """Lädt eine Katalogdatei (Liste oder {"sections": [...]}) mit Eingangsprüfung."""
        path = Path(path)
        if not path.exists():
            raise CatalogError(f"Katalogdatei nicht gefunden: {path}")
        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except json.JSONDecodeError as e:
            raise CatalogError(f"Katalogdatei ist kein gültiges JSON: {path} ({e})") from e

        if isinstance(raw, dict):
            raw = raw.get("sections")
        if not isinstance(raw, list):
            raise CatalogError(
                f"Katalogdatei {path}: erwartet eine Liste von Sections "
                f"oder ein Objekt mit 'sections'."
            )
        return cls.from_raw(raw)
