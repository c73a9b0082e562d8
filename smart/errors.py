"""Fehlerklassen der KI-Planerstellung.

Vorabprüfungen (ohne Seiteneffekte):
    Unauthorized, InsufficientCredits, RateLimited
Nach dem Modellaufruf:
    GenerationFailed – Primär- und Fallback-Modell gescheitert
    NoValidPlans     – Antwort formal ok, aber keine verwertbare Variante;
                       das Kontingent wird dann NICHT belastet.
"""


class SmartGenerateError(Exception):
    """Basisklasse aller Fehler der KI-Planerstellung."""

    kind = "SmartGenerateError"


class Unauthorized(SmartGenerateError):
    kind = "Unauthorized"

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class InsufficientCredits(SmartGenerateError):
    kind = "InsufficientCredits"

    def __init__(self, remaining: int = 0):
        super().__init__(
            "Insufficient credits. You need 1 token for Smart Generate."
        )
        self.remaining = remaining


class RateLimited(SmartGenerateError):
    """Aufruf innerhalb des Cooldowns; remaining_seconds ist aufgerundet."""

    kind = "RateLimited"

    def __init__(self, remaining_seconds: int):
        super().__init__(
            f"Please wait {remaining_seconds} seconds before generating again"
        )
        self.remaining_seconds = remaining_seconds


class GenerationFailed(SmartGenerateError):
    kind = "GenerationFailed"

    def __init__(self, detail: str):
        super().__init__(f"AI generation failed: {detail}")
        self.detail = detail


class NoValidPlans(SmartGenerateError):
    kind = "NoValidPlans"

    def __init__(self, message: str = "AI response contained no usable plan"):
        super().__init__(message)
