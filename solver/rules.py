"""Zeitkonflikt-Prüfung zwischen Sections.

Reine Funktionen ohne Zustand: Überlappung zweier Slots und paarweise
Prüfung einer Section-Auswahl.
"""

from pydantic import BaseModel

from models.course import CourseSection
from models.timeslot import TimeSlot


class ConflictReport(BaseModel):
    """Ergebnis der Konfliktprüfung."""

    valid: bool
    messages: list[str]


def overlaps(slot_a: TimeSlot, slot_b: TimeSlot) -> bool:
    """True wenn beide Slots am selben Tag liegen und sich zeitlich schneiden.

    Intervalle gelten als halboffen [start, end): 07:00-09:00 und
    09:00-11:00 berühren sich nur und überlappen nicht.
    """
    if slot_a.day != slot_b.day:
        return False
    return max(slot_a.start_minutes, slot_b.start_minutes) < min(
        slot_a.end_minutes, slot_b.end_minutes
    )


def sections_overlap(a: CourseSection, b: CourseSection) -> bool:
    """True sobald irgendein Slot-Paar der beiden Sections überlappt."""
    for slot_a in a.schedule:
        for slot_b in b.schedule:
            if overlaps(slot_a, slot_b):
                return True
    return False


def check_conflicts(sections: list[CourseSection]) -> ConflictReport:
    """Prüft alle ungeordneten Paare und meldet jedes konfliktbehaftete Paar genau einmal.

    O(n² · s²) – bei realistisch ≤ 10 gewählten Kursen unkritisch.
    """
    messages: list[str] = []
    for i in range(len(sections)):
        for j in range(i + 1, len(sections)):
            a, b = sections[i], sections[j]
            if sections_overlap(a, b):
                messages.append(f"Conflict: {a.label} overlaps with {b.label}")
    return ConflictReport(valid=not messages, messages=messages)
