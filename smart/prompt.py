"""Prompt-Aufbau für die KI-Planerstellung.

Primär- und Fallback-Modell bekommen exakt denselben Prompt.
"""

import json

from models.preferences import SmartPreferences

SYSTEM_PROMPT = (
    "You are a university schedule optimizer. You only answer with JSON. "
    "You never invent course sections: every id you return must appear in the provided data."
)


def build_user_prompt(
    payload: dict[str, dict],
    selected_codes: list[str],
    max_credits: int,
    preferences: SmartPreferences,
    num_variants: int = 3,
) -> str:
    """Baut den User-Prompt aus verdichteten Daten, Auswahl und Wünschen."""
    lecturers = ", ".join(preferences.preferred_lecturers) or "None"
    days_off = ", ".join(d.value for d in preferences.preferred_days_off) or "None"
    note = preferences.custom_instructions.strip() or "None"

    return f"""Create {num_variants} diverse, conflict-free schedules.

DATA (Minified JSON; n=name, s=sks, c=classes, k=class label, l=lecturer, t=times):
{json.dumps(payload, indent=2, ensure_ascii=False)}

SELECTED CODES (User wants ALL of these):
{", ".join(selected_codes)}

MAX SKS: {max_credits}

USER PREFERENCES:
- Prioritize Lecturers: {lecturers}
- Avoid Days: {days_off}
- Note: {note}

REQUIREMENTS:
1. **CRITICAL:** Aim for **ALL** selected codes in every plan, at most one class per code.
2. **FALLBACK:** If mathematically impossible, you may drop **AT MOST ONE** (1) subject.
3. No time conflicts allowed.
4. Total SKS must not exceed {max_credits}; balanced load (<=8 SKS/day).
5. Exactly {num_variants} DISTINCT VARIATIONS.

THIN OUTPUT FORMAT (JSON ONLY - USE IDS ONLY TO SAVE TOKENS):
{{
  "plans": [
    {{
      "name": "Strategy Name (e.g., 'Plan A: Early Morning Focus')",
      "courseIds": ["id1", "id2", "id3"]
    }}
  ]
}}
Return ONLY valid JSON."""
