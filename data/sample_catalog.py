"""Beispiel-Kataloge für Demo und Tests.

MOCK_COURSES: fester Mini-Katalog (4 Sections, 3 Kurse).
FakeCatalogGenerator: reproduzierbarer Zufallskatalog mit mehreren
austauschbaren Gruppen pro Kurs, realistischen Zeitblöcken (SKS × 50 min)
und absichtlichen Überschneidungen.
"""

import random
from typing import Optional

from models.catalog import Catalog
from models.course import CourseSection
from models.timeslot import DayOfWeek, TimeSlot

MOCK_COURSES: list[CourseSection] = [
    CourseSection(id="1", code="CS101", name="Intro to Programming", sks=3,
                  section_class="A", lecturer="Dr. Smith", room="Lab 1",
                  schedule=[TimeSlot(day="Mon", start="08:00", end="10:30")]),
    CourseSection(id="2", code="CS101", name="Intro to Programming", sks=3,
                  section_class="B", lecturer="Dr. Jones", room="Lab 2",
                  schedule=[TimeSlot(day="Tue", start="13:00", end="15:30")]),
    CourseSection(id="3", code="MATH201", name="Calculus II", sks=4,
                  section_class="A", lecturer="Prof. Euler", room="R101",
                  schedule=[TimeSlot(day="Wed", start="08:00", end="09:40"),
                            TimeSlot(day="Fri", start="08:00", end="09:40")]),
    CourseSection(id="4", code="ENG102", name="Academic Writing", sks=2,
                  section_class="A", lecturer="Ms. Woolf", room="Lib 3",
                  schedule=[TimeSlot(day="Thu", start="10:00", end="11:40")]),
]

# ─── Namens-Listen ────────────────────────────────────────────────────────────

_COURSES = [
    ("IF101", "Algoritma dan Pemrograman", 4),
    ("IF102", "Struktur Data", 3),
    ("IF201", "Basis Data", 3),
    ("IF202", "Jaringan Komputer", 3),
    ("IF203", "Sistem Operasi", 3),
    ("IF301", "Kecerdasan Buatan", 3),
    ("MA101", "Kalkulus I", 3),
    ("MA201", "Aljabar Linear", 3),
    ("MA202", "Statistika", 2),
    ("UM101", "Bahasa Inggris", 2),
    ("UM102", "Pancasila", 2),
    ("UM103", "Kewarganegaraan", 2),
]

_LECTURERS = [
    "Dr. Budi Santoso", "Dr. Siti Rahmawati", "Ir. Agus Wijaya", "Dewi Lestari, M.Kom",
    "Prof. Hendra Gunawan", "Rina Kusuma, M.T.", "Dr. Yusuf Hakim", "Putri Anggraini, M.Sc",
    "Eko Prasetyo, M.Kom", "Dr. Lina Marlina",
]

_ROOMS = ["R101", "R102", "R201", "R202", "Lab 1", "Lab 2", "Aula"]

# Startzeiten der Blöcke (07:00 bis 15:00)
_START_TIMES = ["07:00", "07:30", "08:00", "09:40", "10:00", "13:00", "14:40", "15:00"]

_WEEKDAYS = [DayOfWeek.MON, DayOfWeek.TUE, DayOfWeek.WED, DayOfWeek.THU, DayOfWeek.FRI]

_MINUTES_PER_SKS = 50


def _add_minutes(hhmm: str, minutes: int) -> str:
    h, m = (int(x) for x in hhmm.split(":"))
    total = h * 60 + m + minutes
    return f"{total // 60:02d}:{total % 60:02d}"


class FakeCatalogGenerator:
    """Erzeugt einen Katalog mit n Kursen und je 1-max_sections Gruppen."""

    def __init__(self, seed: Optional[int] = None, prodi: str = "Informatika") -> None:
        self.rng = random.Random(seed)
        self.prodi = prodi

    def _make_schedule(self, sks: int) -> list[TimeSlot]:
        """SKS ≥ 4 → zwei Termine, sonst ein Block von sks × 50 Minuten."""
        if sks >= 4:
            days = self.rng.sample(_WEEKDAYS, 2)
            start = self.rng.choice(_START_TIMES)
            length = (sks // 2) * _MINUTES_PER_SKS
            return [TimeSlot(day=d, start=start, end=_add_minutes(start, length))
                    for d in sorted(days, key=_WEEKDAYS.index)]
        start = self.rng.choice(_START_TIMES)
        return [TimeSlot(day=self.rng.choice(_WEEKDAYS), start=start,
                         end=_add_minutes(start, sks * _MINUTES_PER_SKS))]

    def generate(self, num_courses: int = 8, max_sections: int = 3) -> Catalog:
        courses = _COURSES[:max(1, min(num_courses, len(_COURSES)))]
        sections: list[CourseSection] = []
        for code, name, sks in courses:
            for idx in range(self.rng.randint(1, max_sections)):
                label = chr(ord("A") + idx)
                sections.append(CourseSection(
                    id=f"{code}-{label}",
                    code=code,
                    name=name,
                    sks=sks,
                    section_class=label,
                    lecturer=self.rng.choice(_LECTURERS),
                    room=self.rng.choice(_ROOMS),
                    schedule=self._make_schedule(sks),
                    prodi=self.prodi,
                ))
        return Catalog(sections=sections)

    def print_summary(self, catalog: Catalog) -> None:
        """Gibt eine Rich-Tabelle mit Übersicht des erzeugten Katalogs aus."""
        from rich.console import Console
        from rich.table import Table
        from rich import box

        console = Console()
        table = Table(title="Erzeugter Katalog", box=box.ROUNDED)
        table.add_column("Code", style="bold cyan")
        table.add_column("Kurs")
        table.add_column("SKS", justify="right")
        table.add_column("Gruppen", justify="right")

        for code in catalog.codes():
            group = catalog.sections_for(code)
            table.add_row(code, group[0].name, str(group[0].sks), str(len(group)))

        console.print(table)
