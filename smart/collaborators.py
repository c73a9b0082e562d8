"""Schnittstellen der externen Mitspieler der KI-Planerstellung.

Ledger, Cache, Plan-Ablage und Sprachmodell werden dem SmartGenerator
übergeben (kein globaler Zustand). Die In-Memory-Varianten dienen Tests
und Einzelprozess-Betrieb; dateibasierte Varianten liegen in smart.stores.
"""

from datetime import datetime
from typing import Optional, Protocol, runtime_checkable

from models.plan import Plan
from smart.schema import SmartResponse


@runtime_checkable
class CreditLedger(Protocol):
    """Kontingent und Cooldown-Zeitstempel pro Nutzer."""

    async def get_remaining_credits(self, caller_id: str) -> int: ...

    async def get_last_invocation_time(self, caller_id: str) -> Optional[datetime]: ...

    async def decrement_credit(self, caller_id: str) -> int: ...

    async def record_last_invocation_time(self, caller_id: str, now: datetime) -> None: ...


@runtime_checkable
class ResponseCache(Protocol):
    """Antwort-Cache, Schlüssel = kanonischer Hash der Anfrage. Kein TTL."""

    async def get(self, key: str) -> Optional[dict]: ...

    async def put(self, key: str, response: dict) -> None: ...


@runtime_checkable
class PlanStore(Protocol):
    """Ablage fertiger Pläne."""

    async def save(self, plan: Plan, owner_id: str) -> str: ...


@runtime_checkable
class ModelClient(Protocol):
    """Ein konfiguriertes Sprachmodell.

    invoke() liefert eine schema-valide Antwort oder wirft eine Exception
    (Timeout, Ablehnung, ungültiges JSON, ...).
    """

    name: str

    async def invoke(self, system_prompt: str, user_prompt: str) -> SmartResponse: ...


# ─── In-Memory-Implementierungen ──────────────────────────────────────────────

class InMemoryCreditLedger:
    """Ledger im Arbeitsspeicher. Unbekannte Nutzer starten mit default_credits."""

    def __init__(self, credits: Optional[dict[str, int]] = None,
                 default_credits: int = 0) -> None:
        self.credits: dict[str, int] = dict(credits or {})
        self.last_invocation: dict[str, datetime] = {}
        self.default_credits = default_credits

    async def get_remaining_credits(self, caller_id: str) -> int:
        return self.credits.get(caller_id, self.default_credits)

    async def get_last_invocation_time(self, caller_id: str) -> Optional[datetime]:
        return self.last_invocation.get(caller_id)

    async def decrement_credit(self, caller_id: str) -> int:
        remaining = self.credits.get(caller_id, self.default_credits)
        if remaining <= 0:
            raise ValueError(f"Keine Credits mehr für '{caller_id}'")
        self.credits[caller_id] = remaining - 1
        return remaining - 1

    async def record_last_invocation_time(self, caller_id: str, now: datetime) -> None:
        self.last_invocation[caller_id] = now


class InMemoryResponseCache:
    """Cache im Arbeitsspeicher; der erste Eintrag pro Schlüssel gewinnt."""

    def __init__(self) -> None:
        self.entries: dict[str, dict] = {}

    async def get(self, key: str) -> Optional[dict]:
        return self.entries.get(key)

    async def put(self, key: str, response: dict) -> None:
        self.entries.setdefault(key, response)


class InMemoryPlanStore:
    """Plan-Ablage im Arbeitsspeicher: plan_id → (owner_id, Plan)."""

    def __init__(self) -> None:
        self.plans: dict[str, tuple[str, Plan]] = {}

    async def save(self, plan: Plan, owner_id: str) -> str:
        self.plans[plan.id] = (owner_id, plan)
        return plan.id

    def list_for(self, owner_id: str) -> list[Plan]:
        return [plan for owner, plan in self.plans.values() if owner == owner_id]
