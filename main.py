"""Kursplaner — Haupt-CLI.

Verwendung:
  python main.py config init                         Standard-Konfiguration anlegen
  python main.py config show                         Konfiguration anzeigen
  python main.py catalog sample                      Demo-Katalog erzeugen
  python main.py catalog check <katalog.json>        Katalog prüfen
  python main.py plan generate <katalog.json> CODE…  Konfliktfreie Pläne erzeugen
  python main.py plan smart <katalog.json> CODE…     KI-optimierte Pläne (Credits)
  python main.py archive list --caller <id>          Gespeicherte Pläne
"""

import asyncio
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich import box

console = Console()

DEFAULT_SAMPLE_JSON = Path("output/sample_catalog.json")


def _load_config():
    from config.manager import ConfigManager
    try:
        return ConfigManager().load_or_default()
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)


def _load_catalog_or_abort(path: Path, prodi: str | None = None):
    """Lädt einen Katalog; verworfene Einträge werden gemeldet, nicht abgebrochen."""
    from models.catalog import Catalog, CatalogError
    try:
        catalog, report = Catalog.load_json(path)
    except CatalogError as e:
        console.print(f"[red bold]Katalog unbrauchbar:[/red bold] {e}")
        sys.exit(1)
    if report.errors:
        report.print_rich()
    return catalog.filter(prodi)


def _stores(config):
    from smart.stores import JsonCreditLedger, JsonPlanStore, JsonResponseCache
    data_dir = Path(config.storage.data_dir)
    return (
        JsonCreditLedger(data_dir / "ledger.json", config.smart),
        JsonResponseCache(data_dir / "ai_cache.json"),
        JsonPlanStore(data_dir / "plans.json"),
    )


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Konfiguration anlegen oder anzeigen."""


@cmd_config.command("init")
@click.option("--force", is_flag=True, default=False, help="Bestehende Datei überschreiben.")
def config_init(force: bool):
    """Schreibt die Standard-Konfiguration als YAML."""
    from config.defaults import default_planner_config
    from config.manager import ConfigManager

    mgr = ConfigManager()
    if not mgr.first_run_check() and not force:
        console.print(
            f"[yellow]Konfiguration existiert bereits: {mgr.path}[/yellow]\n"
            "Mit [bold]--force[/bold] überschreiben."
        )
        return
    path = mgr.save(default_planner_config())
    console.print(f"[green]✓[/green] Konfiguration gespeichert: {path}")


@cmd_config.command("show")
def config_show():
    """Zeigt die aktuelle Konfiguration an."""
    config = _load_config()

    console.print(Panel(
        f"[bold]{config.university_name}[/bold]",
        title="Kursplaner-Konfiguration",
        border_style="cyan",
    ))

    sc = config.scheduler
    table = Table(title="Planerzeugung", box=box.ROUNDED)
    table.add_column("Parameter", style="bold")
    table.add_column("Wert", justify="right")
    table.add_row("Explosionsgrenze", str(sc.max_combinations))
    table.add_row("Pläne pro Aufruf", str(sc.max_plans_per_call))
    table.add_row("Plan-Kontingent", f"{sc.default_plan_limit} (+{sc.expansion_step}, max {sc.expansion_cap})")
    console.print(table)

    sm = config.smart
    console.print(
        f"\n[bold]KI:[/bold] {sm.primary.model} → Fallback {sm.fallback.model} | "
        f"Cooldown {sm.cooldown_seconds}s | {sm.daily_credits} Credits/Tag | "
        f"{sm.max_variants} Varianten"
    )


# ─── CATALOG ──────────────────────────────────────────────────────────────────

@click.group("catalog")
def cmd_catalog():
    """Kurskatalog prüfen oder erzeugen."""


@cmd_catalog.command("check")
@click.argument("datei", type=click.Path(exists=True, path_type=Path))
@click.option("--prodi", default=None, help="Nur diesen Studiengang betrachten.")
def catalog_check(datei: Path, prodi: str | None):
    """Prüft eine Katalogdatei und zeigt die Kurse."""
    from models.catalog import Catalog, CatalogError

    try:
        catalog, report = Catalog.load_json(datei)
    except CatalogError as e:
        console.print(f"[red bold]Katalog unbrauchbar:[/red bold] {e}")
        sys.exit(1)
    report.print_rich()

    catalog = catalog.filter(prodi)
    table = Table(title=f"Kurse ({len(catalog)} Sections)", box=box.ROUNDED)
    table.add_column("Code", style="bold cyan")
    table.add_column("Kurs")
    table.add_column("SKS", justify="right")
    table.add_column("Gruppen")
    for code in catalog.codes():
        group = catalog.sections_for(code)
        table.add_row(code, group[0].name, str(group[0].sks),
                      ", ".join(s.section_class for s in group))
    console.print(table)

    sys.exit(0 if not report.errors else 1)


@cmd_catalog.command("sample")
@click.option("--seed", default=42, help="Zufalls-Seed für reproduzierbare Daten.")
@click.option("--courses", default=8, help="Anzahl Kurse.")
@click.option("--output", "-o", default=str(DEFAULT_SAMPLE_JSON), help="Ausgabepfad.")
def catalog_sample(seed: int, courses: int, output: str):
    """Erzeugt einen Demo-Katalog."""
    from data.sample_catalog import FakeCatalogGenerator

    gen = FakeCatalogGenerator(seed=seed)
    catalog = gen.generate(num_courses=courses)
    gen.print_summary(catalog)
    out_path = Path(output)
    catalog.save_json(out_path)
    console.print(f"[green]✓[/green] Katalog gespeichert: {out_path}")


# ─── PLAN ─────────────────────────────────────────────────────────────────────

@click.group("plan")
def cmd_plan():
    """Pläne erzeugen (Aufzählung oder KI)."""


@cmd_plan.command("generate")
@click.argument("datei", type=click.Path(exists=True, path_type=Path))
@click.argument("codes", nargs=-1, required=True)
@click.option("--limit", type=int, default=None, help="Maximale Anzahl Pläne.")
@click.option("--prodi", default=None, help="Katalog auf Studiengang einschränken.")
@click.option("--detail", is_flag=True, default=False, help="Jeden Plan einzeln anzeigen.")
@click.option("--save", "caller", default=None, help="Pläne im Archiv dieses Nutzers speichern.")
def plan_generate(datei: Path, codes: tuple[str, ...], limit: int | None,
                  prodi: str | None, detail: bool, caller: str | None):
    """Erzeugt konfliktfreie Pläne aus den gewählten Kurs-Codes."""
    from analysis.plan_report import print_plan, print_plan_list
    from solver.scheduler import PlanGenerator

    config = _load_config()
    catalog = _load_catalog_or_abort(datei, prodi)

    plans = PlanGenerator(config.scheduler).generate(catalog, list(codes), limit)
    print_plan_list(plans)
    if detail:
        for plan in plans:
            print_plan(plan)

    if caller and plans:
        _, _, store = _stores(config)

        async def _save_all():
            return [await store.save(plan, caller) for plan in plans]

        ids = asyncio.run(_save_all())
        console.print(f"[green]✓[/green] {len(ids)} Pläne archiviert für {caller}")

    sys.exit(0 if plans else 1)


@cmd_plan.command("smart")
@click.argument("datei", type=click.Path(exists=True, path_type=Path))
@click.argument("codes", nargs=-1, required=True)
@click.option("--caller", required=True, help="Nutzer-ID (Kontingent, Archiv).")
@click.option("--max-sks", default=24, show_default=True, help="SKS-Obergrenze.")
@click.option("--lecturer", "lecturers", multiple=True, help="Bevorzugte Dozenten.")
@click.option("--day-off", "days_off", multiple=True, help="Freie Tage (z.B. Fri).")
@click.option("--note", default="", help="Zusätzliche Hinweise an das Modell.")
@click.option("--prodi", default=None, help="Katalog auf Studiengang einschränken.")
def plan_smart(datei: Path, codes: tuple[str, ...], caller: str, max_sks: int,
               lecturers: tuple[str, ...], days_off: tuple[str, ...], note: str,
               prodi: str | None):
    """Lässt ein Sprachmodell 3 Varianten nach Wunsch optimieren."""
    from analysis.plan_report import print_plan_list
    from models.preferences import SmartPreferences
    from smart.errors import RateLimited, SmartGenerateError
    from smart.gateway import SmartGenerator
    from smart.llm import build_model_clients

    config = _load_config()
    catalog = _load_catalog_or_abort(datei, prodi)

    try:
        prefs = SmartPreferences(
            preferred_lecturers=list(lecturers),
            preferred_days_off=list(days_off),
            custom_instructions=note,
        )
        primary, fallback = build_model_clients(config.smart)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(2)

    ledger, cache, store = _stores(config)
    generator = SmartGenerator(ledger, cache, store, primary, fallback, config.smart)

    try:
        result = asyncio.run(
            generator.smart_generate(caller, catalog, list(codes), max_sks, prefs)
        )
    except RateLimited as e:
        console.print(f"[yellow]Bitte {e.remaining_seconds} Sekunden warten.[/yellow]")
        sys.exit(1)
    except SmartGenerateError as e:
        console.print(f"[red bold]{e.kind}:[/red bold] {e}")
        sys.exit(1)
    except ValueError as e:
        # Ledger erschöpft (paralleler Aufruf) oder Ablage nicht lesbar
        console.print(f"[red bold]Ablage:[/red bold] {e}")
        sys.exit(1)

    source = "Cache" if result.from_cache else result.model
    console.print(
        f"[green]✓[/green] {result.count} Pläne gespeichert ({source}), "
        f"{result.remaining_credits} Credits übrig"
    )
    saved = [p for p in store.list_plans(caller) if p.id in set(result.plan_ids)]
    print_plan_list(saved, title="KI-Pläne")


# ─── ARCHIVE ──────────────────────────────────────────────────────────────────

@click.group("archive")
def cmd_archive():
    """Gespeicherte Pläne verwalten."""


@cmd_archive.command("list")
@click.option("--caller", required=True, help="Nutzer-ID.")
@click.option("--detail", is_flag=True, default=False, help="Jeden Plan einzeln anzeigen.")
def archive_list(caller: str, detail: bool):
    """Listet alle Pläne eines Nutzers (neueste zuerst)."""
    from analysis.plan_report import print_plan, print_plan_list

    _, _, store = _stores(_load_config())
    plans = store.list_plans(caller)
    print_plan_list(plans, title=f"Archiv von {caller}")
    for plan in plans:
        console.print(f"[dim]{plan.id}  {plan.name}[/dim]")
        if detail:
            print_plan(plan)


@cmd_archive.command("rename")
@click.argument("plan_id")
@click.argument("name")
@click.option("--caller", required=True, help="Nutzer-ID.")
def archive_rename(plan_id: str, name: str, caller: str):
    """Benennt einen Plan um."""
    _, _, store = _stores(_load_config())
    try:
        store.rename(plan_id, caller, name)
    except KeyError as e:
        console.print(f"[red]{e.args[0]}[/red]")
        sys.exit(1)
    console.print(f"[green]✓[/green] Plan umbenannt: {name}")


@cmd_archive.command("delete")
@click.argument("plan_id")
@click.option("--caller", required=True, help="Nutzer-ID.")
def archive_delete(plan_id: str, caller: str):
    """Löscht einen Plan aus dem Archiv."""
    _, _, store = _stores(_load_config())
    try:
        store.delete(plan_id, caller)
    except KeyError as e:
        console.print(f"[red]{e.args[0]}[/red]")
        sys.exit(1)
    console.print("[green]✓[/green] Plan gelöscht.")


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Ausführliches Logging.")
def cli(verbose: bool):
    """Kursplaner: konfliktfreie Stundenpläne aus dem Kurskatalog.

    Starten Sie mit: python main.py catalog sample
    """
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def main():
    """Einstiegspunkt."""
    cli()


# Befehle registrieren
cli.add_command(cmd_config)
cli.add_command(cmd_catalog)
cli.add_command(cmd_plan)
cli.add_command(cmd_archive)


if __name__ == "__main__":
    main()
