"""Datenmodell für eine Kursgruppe / Section (Pydantic v2)."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.timeslot import TimeSlot


class CourseSection(BaseModel):
    """Ein konkretes Angebot (Klasse/Gruppe) eines Kurses.

    Mehrere Sections teilen sich denselben `code` und sind untereinander
    austauschbar; `id` ist pro Section eindeutig.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    code: str                     # Gruppierungsschlüssel, z.B. "CS101"
    name: str
    sks: int = Field(gt=0)        # Credit-Gewicht
    section_class: str = Field(alias="class")  # Gruppenbezeichnung "A", "B", ...
    lecturer: str = ""            # ggf. mehrere Namen, kommagetrennt
    room: str = ""
    schedule: list[TimeSlot] = []
    prodi: Optional[str] = None   # Studiengang (Katalog-Filter)
    capacity: Optional[int] = None

    @field_validator("id", "code", mode="before")
    @classmethod
    def _strip_key(cls, v) -> str:
        v = str(v).strip()
        if not v:
            raise ValueError("darf nicht leer sein")
        return v

    @property
    def lecturers(self) -> list[str]:
        """Alle Dozenten als Liste (der Katalog speichert sie kommagetrennt)."""
        return [name.strip() for name in self.lecturer.split(",") if name.strip()]

    @property
    def label(self) -> str:
        """Anzeigename inkl. Gruppe, z.B. "Calculus II (A)"."""
        return f"{self.name} ({self.section_class})"
