"""Datenmodell für einen fertigen Stundenplan-Vorschlag (Pydantic v2)."""

import uuid
from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, Field

from models.course import CourseSection


def new_plan_id() -> str:
    return uuid.uuid4().hex


class PlanScore(BaseModel):
    """Drei unabhängige, nicht normierte Heuristik-Akkumulatoren."""

    safe: float = 0
    risky: float = 0
    optimal: float = 0


class Plan(BaseModel):
    """Eine konfliktfreie Auswahl: höchstens eine Section pro Kurs-Code."""

    id: str = Field(default_factory=new_plan_id)
    name: str
    courses: list[CourseSection]
    score: PlanScore = Field(default_factory=PlanScore)
    analysis: str = ""
    source: Literal["enumerator", "ai"] = "enumerator"
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def codes(self) -> list[str]:
        return [c.code for c in self.courses]

    @property
    def total_sks(self) -> int:
        return sum(c.sks for c in self.courses)

    @property
    def section_ids(self) -> list[str]:
        return [c.id for c in self.courses]
