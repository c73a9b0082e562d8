"""Token-sparende Verdichtung der Kursdaten und kanonischer Cache-Schlüssel.

Verdichtetes Format (pro Kurs-Code):
    {"n": Name, "s": SKS, "c": [{"id", "k": Gruppe, "l": Dozent, "t": "Mon 08:00-10:00, ..."}]}
"""

import hashlib
import json
from typing import Any

from models.course import CourseSection
from models.preferences import SmartPreferences


def compact_schedule(section: CourseSection) -> str:
    return ", ".join(slot.compact() for slot in section.schedule)


def minify_courses(sections: list[CourseSection], selected_codes: list[str]) -> dict[str, dict]:
    """Verdichtet die gewählten Kurse für den Prompt.

    Sections werden pro Code nach ID sortiert, damit eine andere
    Katalogreihenfolge denselben Payload (und damit denselben Hash) ergibt.
    """
    wanted = set(selected_codes)
    payload: dict[str, dict] = {}
    for section in sections:
        if section.code not in wanted:
            continue
        entry = payload.setdefault(section.code, {"n": section.name, "s": section.sks, "c": []})
        entry["c"].append({
            "id": section.id,
            "k": section.section_class,
            "l": section.lecturer,
            "t": compact_schedule(section),
        })
    for entry in payload.values():
        entry["c"].sort(key=lambda c: c["id"])
    return payload


def canonical_json(value: Any) -> str:
    """Deterministische Serialisierung: sortierte Schlüssel, keine Leerzeichen."""
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def build_cache_key(
    payload: dict[str, dict],
    selected_codes: list[str],
    max_credits: int,
    preferences: SmartPreferences,
    model: str,
) -> str:
    """SHA-256 über alle Eingaben, die die Modellantwort beeinflussen.

    Mengenartige Listen (Codes, Dozenten, freie Tage) werden sortiert und
    dedupliziert; Dict-Schlüssel sortiert canonical_json.
    """
    material = {
        "courses": payload,
        "codes": sorted(set(selected_codes)),
        "max_credits": max_credits,
        "preferences": {
            "lecturers": sorted(set(preferences.preferred_lecturers)),
            "days_off": sorted({d.value for d in preferences.preferred_days_off}),
            "note": preferences.custom_instructions.strip(),
        },
        "model": model,
    }
    return hashlib.sha256(canonical_json(material).encode("utf-8")).hexdigest()
