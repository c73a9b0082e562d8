"""Übersicht und Detailansicht fertiger Pläne (Rich-Ausgabe).

Ergänzt die Heuristik-Bewertung um Kennzahlen, die die Oberfläche zeigt:
SKS gesamt, Termine und SKS pro Tag (Grenze 8 SKS/Tag) sowie ein Wochenraster.
"""

from pydantic import BaseModel

from models.plan import Plan
from models.timeslot import DAYS, DayOfWeek
from solver.scoring import DAILY_SKS_LIMIT, daily_sks_load, day_loads


class PlanMetrics(BaseModel):
    """Kennzahlen eines Plans."""

    plan_id: str
    name: str
    total_sks: int
    num_courses: int
    classes_per_day: dict[str, int]
    sks_per_day: dict[str, int]
    overloaded_days: list[str]     # Tage mit > DAILY_SKS_LIMIT SKS
    earliest_start: str
    latest_end: str


def plan_metrics(plan: Plan) -> PlanMetrics:
    """Berechnet die Kennzahlen eines Plans."""
    loads = day_loads(plan.courses)
    sks = daily_sks_load(plan.courses)
    slots = [slot for c in plan.courses for slot in c.schedule]
    return PlanMetrics(
        plan_id=plan.id,
        name=plan.name,
        total_sks=plan.total_sks,
        num_courses=len(plan.courses),
        classes_per_day={d.value: loads[d] for d in DAYS if d in loads},
        sks_per_day={d.value: sks[d] for d in DAYS if d in sks},
        overloaded_days=[d.value for d in DAYS if sks.get(d, 0) > DAILY_SKS_LIMIT],
        earliest_start=min((s.start for s in slots), default="-"),
        latest_end=max((s.end for s in slots), default="-"),
    )


def week_days(plan: Plan) -> list[DayOfWeek]:
    """Mo-Fr, dazu Sa/So nur wenn der Plan dort Termine hat."""
    used = {slot.day for c in plan.courses for slot in c.schedule}
    return [d for d in DAYS if d in DAYS[:5] or d in used]


def render_week_rows(plan: Plan) -> list[list[str]]:
    """Tabellenzeilen für das Wochenraster.

    Jede Zeile: [Zeitblock, Mon, Tue, ...]. Eine Zeile pro Kombination
    aus Beginn und Ende, aufsteigend nach Beginn.
    """
    days = week_days(plan)
    cells: dict[tuple[str, str], dict[DayOfWeek, list[str]]] = {}
    for course in plan.courses:
        for slot in course.schedule:
            row = cells.setdefault((slot.start, slot.end), {})
            row.setdefault(slot.day, []).append(f"{course.code} {course.section_class}")

    rows: list[list[str]] = []
    for (start, end) in sorted(cells):
        row = cells[(start, end)]
        rows.append([f"{start}–{end}"] + ["\n".join(row.get(d, [])) or "—" for d in days])
    return rows


def print_plan_list(plans: list[Plan], title: str = "Pläne") -> None:
    """Tabelle aller Pläne mit Bewertung."""
    from rich.console import Console
    from rich.table import Table
    from rich import box

    console = Console()
    if not plans:
        console.print("[yellow]Keine konfliktfreie Kombination gefunden.[/yellow]")
        return

    table = Table(title=title, box=box.ROUNDED)
    table.add_column("#", justify="right", width=3)
    table.add_column("Name", style="bold")
    table.add_column("Kurse", justify="right")
    table.add_column("SKS", justify="right")
    table.add_column("safe", justify="right", style="green")
    table.add_column("risky", justify="right", style="red")
    table.add_column("optimal", justify="right", style="cyan")
    table.add_column("Analyse")

    for idx, plan in enumerate(plans, 1):
        table.add_row(
            str(idx), plan.name, str(len(plan.courses)), str(plan.total_sks),
            f"{plan.score.safe:.0f}", f"{plan.score.risky:.0f}",
            f"{plan.score.optimal:.0f}", plan.analysis,
        )
    console.print(table)


def print_plan(plan: Plan) -> None:
    """Detailansicht: Sections, Termine und Tageslast."""
    from rich.console import Console
    from rich.panel import Panel
    from rich.table import Table
    from rich import box

    console = Console()
    metrics = plan_metrics(plan)

    table = Table(title=plan.name, box=box.ROUNDED, show_lines=True)
    table.add_column("Code", style="bold cyan")
    table.add_column("Kurs")
    table.add_column("Gruppe", justify="center")
    table.add_column("SKS", justify="right")
    table.add_column("Dozent")
    table.add_column("Raum")
    table.add_column("Termine")
    for c in plan.courses:
        table.add_row(
            c.code, c.name, c.section_class, str(c.sks), c.lecturer, c.room,
            "\n".join(slot.compact() for slot in c.schedule),
        )
    console.print(table)

    grid = Table(title="Wochenraster", box=box.SIMPLE_HEAVY)
    grid.add_column("Zeit", style="dim")
    for day in week_days(plan):
        grid.add_column(day.value, justify="center")
    for row in render_week_rows(plan):
        grid.add_row(*row)
    console.print(grid)

    day_parts = []
    for day, sks in metrics.sks_per_day.items():
        color = "red" if day in metrics.overloaded_days else "green"
        day_parts.append(
            f"{day}: {metrics.classes_per_day.get(day, 0)}× / [{color}]{sks} SKS[/{color}]"
        )
    console.print(Panel(
        f"SKS gesamt: [bold]{metrics.total_sks}[/bold] | "
        f"Zeitraum: {metrics.earliest_start}–{metrics.latest_end}\n"
        + " | ".join(day_parts)
        + f"\n[dim]{plan.analysis}[/dim]",
        title="Tageslast",
        border_style="cyan",
    ))
