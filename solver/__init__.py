"""Solver-Modul: Konfliktprüfung, Bewertung und Plan-Aufzählung."""

from .rules import ConflictReport, check_conflicts, overlaps
from .scoring import ScheduleScore, score
from .scheduler import PlanGenerator, expand_plan_limit, generate_plans

__all__ = [
    "ConflictReport",
    "check_conflicts",
    "overlaps",
    "ScheduleScore",
    "score",
    "PlanGenerator",
    "generate_plans",
    "expand_plan_limit",
]
