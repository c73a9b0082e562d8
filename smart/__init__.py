"""KI-gestützte Planerstellung (Cache, Cooldown, Primär-/Fallback-Modell)."""

from .errors import (
    GenerationFailed,
    InsufficientCredits,
    NoValidPlans,
    RateLimited,
    SmartGenerateError,
    Unauthorized,
)
from .gateway import SmartGenerateResult, SmartGenerator
from .schema import SmartPlanVariant, SmartResponse

__all__ = [
    "SmartGenerator",
    "SmartGenerateResult",
    "SmartResponse",
    "SmartPlanVariant",
    "SmartGenerateError",
    "Unauthorized",
    "InsufficientCredits",
    "RateLimited",
    "GenerationFailed",
    "NoValidPlans",
]
