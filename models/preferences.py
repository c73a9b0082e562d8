"""Nutzerwünsche für die KI-gestützte Planerstellung (Pydantic v2)."""

from pydantic import BaseModel, field_validator

from models.timeslot import DayOfWeek, parse_day


class SmartPreferences(BaseModel):
    """Wünsche, die an das Sprachmodell weitergereicht werden."""

    preferred_lecturers: list[str] = []
    preferred_days_off: list[DayOfWeek] = []
    custom_instructions: str = ""

    @field_validator("preferred_days_off", mode="before")
    @classmethod
    def _coerce_days(cls, v):
        if v is None:
            return []
        if not isinstance(v, (list, tuple)):
            v = [v]
        return [parse_day(d) for d in v]

    @field_validator("preferred_lecturers")
    @classmethod
    def _strip_names(cls, v: list[str]) -> list[str]:
        return [name.strip() for name in v if name.strip()]
