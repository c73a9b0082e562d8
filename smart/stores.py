"""Dateibasierte Mitspieler (JSON) für den CLI-Betrieb.

- JsonCreditLedger: Tageskontingent mit Reset beim Datumswechsel (UTC+7)
- JsonResponseCache: Antwort-Cache ohne Ablauf
- JsonPlanStore:     Plan-Archiv pro Nutzer (auflisten, umbenennen, löschen)
"""

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, Optional

from config.schema import SmartGenerateConfig
from models.plan import Plan


def _read(path: Path) -> dict:
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _write(path: Path, data: dict) -> None:
    """Schreibt erst in eine Nachbardatei und ersetzt dann atomar."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name(path.name + ".tmp")
    with open(tmp, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
    tmp.replace(path)


# ─── Ledger ───────────────────────────────────────────────────────────────────

class JsonCreditLedger:
    """Credits pro Nutzer; neue Nutzer und neue Tage starten mit daily_credits."""

    def __init__(
        self,
        path: Path,
        config: Optional[SmartGenerateConfig] = None,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self.path = Path(path)
        self.config = config or SmartGenerateConfig()
        self._clock = clock

    def _today(self) -> str:
        offset = timedelta(hours=self.config.credit_reset_utc_offset_hours)
        return (self._clock() + offset).date().isoformat()

    def _account(self, data: dict, caller_id: str) -> dict:
        today = self._today()
        account = data.setdefault(caller_id, {
            "credits": self.config.daily_credits,
            "last_reset_date": today,
            "last_invocation": None,
        })
        if account.get("last_reset_date") != today:
            account["credits"] = self.config.daily_credits
            account["last_reset_date"] = today
        return account

    async def get_remaining_credits(self, caller_id: str) -> int:
        data = _read(self.path)
        return int(self._account(data, caller_id)["credits"])

    async def get_last_invocation_time(self, caller_id: str) -> Optional[datetime]:
        data = _read(self.path)
        raw = self._account(data, caller_id).get("last_invocation")
        return datetime.fromisoformat(raw) if raw else None

    async def decrement_credit(self, caller_id: str) -> int:
        data = _read(self.path)
        account = self._account(data, caller_id)
        if account["credits"] <= 0:
            raise ValueError("Daily limit reached. Come back tomorrow!")
        account["credits"] -= 1
        _write(self.path, data)
        return account["credits"]

    async def record_last_invocation_time(self, caller_id: str, now: datetime) -> None:
        data = _read(self.path)
        self._account(data, caller_id)["last_invocation"] = now.isoformat()
        _write(self.path, data)


# ─── Cache ────────────────────────────────────────────────────────────────────

class JsonResponseCache:
    """Hash → Modellantwort. Vorhandene Einträge werden nicht überschrieben."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    async def get(self, key: str) -> Optional[dict]:
        return _read(self.path).get(key)

    async def put(self, key: str, response: dict) -> None:
        data = _read(self.path)
        if key in data:
            return
        data[key] = response
        _write(self.path, data)


# ─── Plan-Archiv ──────────────────────────────────────────────────────────────

class JsonPlanStore:
    """Plan-Archiv: plan_id → {"owner": ..., "plan": {...}}."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    async def save(self, plan: Plan, owner_id: str) -> str:
        data = _read(self.path)
        data[plan.id] = {
            "owner": owner_id,
            "plan": plan.model_dump(mode="json", by_alias=True),
        }
        _write(self.path, data)
        return plan.id

    def list_plans(self, owner_id: str) -> list[Plan]:
        """Alle Pläne eines Nutzers, neueste zuerst."""
        plans = [
            Plan.model_validate(entry["plan"])
            for entry in _read(self.path).values()
            if entry.get("owner") == owner_id
        ]
        return sorted(plans, key=lambda p: p.created_at, reverse=True)

    def _owned(self, data: dict, plan_id: str, owner_id: str) -> dict:
        entry = data.get(plan_id)
        if entry is None or entry.get("owner") != owner_id:
            raise KeyError(f"Plan not found or unauthorized: {plan_id}")
        return entry

    def rename(self, plan_id: str, owner_id: str, new_name: str) -> None:
        data = _read(self.path)
        self._owned(data, plan_id, owner_id)["plan"]["name"] = new_name
        _write(self.path, data)

    def delete(self, plan_id: str, owner_id: str) -> None:
        data = _read(self.path)
        self._owned(data, plan_id, owner_id)
        del data[plan_id]
        _write(self.path, data)
