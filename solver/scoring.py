"""Heuristische Qualitätsbewertung einer Section-Kombination.

Die drei Werte (safe / risky / optimal) sind rohe Akkumulatoren für den
relativen Vergleich und die Anzeige, keine Wahrscheinlichkeiten.
"""

from collections import defaultdict

from pydantic import BaseModel

from models.course import CourseSection
from models.plan import PlanScore
from models.timeslot import DayOfWeek

BASE_SAFE = 50

# Tagesverteilung
FEW_DAYS_THRESHOLD = 3        # ≤ 3 Tage → gedrängt
BALANCED_DAYS = 5             # genau 5 Tage → ausgewogen
FEW_DAYS_RISK = 30
BALANCED_BONUS = 20
FOUR_DAY_BONUS = 20

# Tageslast (Anzahl Termine, nicht Dauer)
HEAVY_DAY_THRESHOLD = 4
HEAVY_DAY_RISK = 40
LIGHT_DAY_BONUS = 20

EARLY_HOUR_PREFIX = "07"
EARLY_RISK = 10

# Tages-SKS-Grenze aus der Studienordnung
DAILY_SKS_LIMIT = 8

LABEL_CRAMMED = "Crammed into few days"
LABEL_BALANCED = "Balanced spread"
LABEL_FOUR_DAY = "4-day week possible"
LABEL_HEAVY = "Heavy daily load (>4 classes)"
LABEL_LIGHT = "Light daily loads"
LABEL_EARLY = "Early morning classes"


class ScheduleScore(BaseModel):
    """Bewertung inkl. Begründungs-Labels."""

    safe: float
    risky: float
    optimal: float
    labels: list[str]

    def to_plan_score(self) -> PlanScore:
        return PlanScore(safe=self.safe, risky=self.risky, optimal=self.optimal)

    @property
    def analysis(self) -> str:
        return ", ".join(self.labels)


def day_loads(sections: list[CourseSection]) -> dict[DayOfWeek, int]:
    """Anzahl Termine pro Tag."""
    loads: dict[DayOfWeek, int] = defaultdict(int)
    for section in sections:
        for slot in section.schedule:
            loads[slot.day] += 1
    return dict(loads)


def score(sections: list[CourseSection]) -> ScheduleScore:
    """Bewertet eine (als konfliktfrei angenommene) Kombination.

    Tage: ≤3 → risky, genau 5 → safe, sonst (4, 6, 7) → optimal.
    6-7 Tage landen ebenfalls im "optimal"-Zweig.
    """
    safe, risky, optimal = BASE_SAFE, 0, 0
    labels: list[str] = []

    loads = day_loads(sections)
    num_days = len(loads)

    if num_days <= FEW_DAYS_THRESHOLD:
        risky += FEW_DAYS_RISK
        labels.append(LABEL_CRAMMED)
    elif num_days == BALANCED_DAYS:
        safe += BALANCED_BONUS
        labels.append(LABEL_BALANCED)
    else:
        optimal += FOUR_DAY_BONUS
        labels.append(LABEL_FOUR_DAY)

    max_daily = max(loads.values(), default=0)
    if max_daily >= HEAVY_DAY_THRESHOLD:
        risky += HEAVY_DAY_RISK
        labels.append(LABEL_HEAVY)
    else:
        safe += LIGHT_DAY_BONUS
        labels.append(LABEL_LIGHT)

    has_early = any(
        slot.start.startswith(EARLY_HOUR_PREFIX)
        for section in sections
        for slot in section.schedule
    )
    if has_early:
        risky += EARLY_RISK
        labels.append(LABEL_EARLY)

    return ScheduleScore(safe=safe, risky=risky, optimal=optimal, labels=labels)


def daily_sks_load(sections: list[CourseSection]) -> dict[DayOfWeek, int]:
    """SKS pro Tag: jede Section zählt ihre SKS an jedem ihrer Termin-Tage."""
    loads: dict[DayOfWeek, int] = defaultdict(int)
    for section in sections:
        for slot in section.schedule:
            loads[slot.day] += section.sks
    return dict(loads)


def exceeds_daily_sks(sections: list[CourseSection], limit: int = DAILY_SKS_LIMIT) -> bool:
    return any(sks > limit for sks in daily_sks_load(sections).values())
