"""Datenmodell für einen Zeitslot im Wochenraster (Pydantic v2)."""

import re
from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class DayOfWeek(str, Enum):
    MON = "Mon"
    TUE = "Tue"
    WED = "Wed"
    THU = "Thu"
    FRI = "Fri"
    SAT = "Sat"
    SUN = "Sun"


DAYS: list[DayOfWeek] = list(DayOfWeek)

# Präfix → Tag. Englische und indonesische Bezeichnungen (Senin, Selasa, ...)
_DAY_ALIASES: dict[str, DayOfWeek] = {
    "mon": DayOfWeek.MON, "tue": DayOfWeek.TUE, "wed": DayOfWeek.WED,
    "thu": DayOfWeek.THU, "fri": DayOfWeek.FRI, "sat": DayOfWeek.SAT,
    "sun": DayOfWeek.SUN,
    "senin": DayOfWeek.MON, "selasa": DayOfWeek.TUE, "rabu": DayOfWeek.WED,
    "kamis": DayOfWeek.THU, "jumat": DayOfWeek.FRI, "sabtu": DayOfWeek.SAT,
    "minggu": DayOfWeek.SUN,
}

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_day(raw) -> DayOfWeek:
    """Wandelt 'Monday', 'MON', 'Senin', "Jum'at" usw. in einen DayOfWeek um."""
    if isinstance(raw, DayOfWeek):
        return raw
    token = str(raw).strip().lower().replace("'", "")
    for prefix, day in _DAY_ALIASES.items():
        if token.startswith(prefix):
            return day
    raise ValueError(f"Unbekannter Wochentag: {raw!r}")


def to_minutes(hhmm: str) -> int:
    """'08:30' → 510 (Minuten seit Mitternacht)."""
    hours, minutes = hhmm.split(":")
    return int(hours) * 60 + int(minutes)


class TimeSlot(BaseModel):
    """Ein wöchentlicher Termin einer Kursgruppe: Tag + Beginn/Ende ("HH:MM", 24h).

    Immutable (frozen) damit es als Dict-Key / Set-Element nutzbar ist.
    """

    model_config = ConfigDict(frozen=True)

    day: DayOfWeek
    start: str
    end: str

    @field_validator("day", mode="before")
    @classmethod
    def _coerce_day(cls, v):
        return parse_day(v)

    @field_validator("start", "end", mode="before")
    @classmethod
    def _normalize_time(cls, v) -> str:
        match = _TIME_RE.match(str(v).strip())
        if not match:
            raise ValueError(f"Uhrzeit muss im Format HH:MM sein, nicht {v!r}")
        hours, minutes = int(match.group(1)), int(match.group(2))
        if hours > 23 or minutes > 59:
            raise ValueError(f"Ungültige Uhrzeit: {v!r}")
        return f"{hours:02d}:{minutes:02d}"

    @model_validator(mode="after")
    def _check_order(self):
        if self.start_minutes >= self.end_minutes:
            raise ValueError(
                f"Beginn ({self.start}) muss vor dem Ende ({self.end}) liegen"
            )
        return self

    @property
    def start_minutes(self) -> int:
        return to_minutes(self.start)

    @property
    def end_minutes(self) -> int:
        return to_minutes(self.end)

    def compact(self) -> str:
        """Kurzform für Prompts und Tabellen, z.B. "Mon 08:00-10:00"."""
        return f"{self.day.value} {self.start}-{self.end}"

    def __str__(self) -> str:
        return self.compact()
