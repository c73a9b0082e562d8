"""SmartGenerator – KI-gestützte Planerstellung mit Cache, Cooldown und Fallback.

Ablauf pro Aufruf (strikt sequentiell, jeder Schritt kann abbrechen):

    AUTHORIZING → RATE_CHECKING → CACHE_LOOKUP
        → {CACHE_HIT | MODEL_PRIMARY → MODEL_FALLBACK?}
        → RECONSTRUCTING → PERSISTING → DONE

Ledger und Cache werden nur gelesen, bevor gehandelt wird, und erst nach
einem erfolgreichen Schritt beschrieben. Es gibt keine Sperre: zwei fast
gleichzeitige Aufrufe desselben Nutzers können beide den Cooldown passieren.
"""

import logging
import math
from datetime import datetime, timezone
from typing import Callable, Optional, Union

from pydantic import BaseModel, ValidationError

from config.schema import SmartGenerateConfig
from models.catalog import Catalog
from models.course import CourseSection
from models.plan import Plan
from models.preferences import SmartPreferences
from smart.collaborators import CreditLedger, ModelClient, PlanStore, ResponseCache
from smart.errors import (
    GenerationFailed,
    InsufficientCredits,
    NoValidPlans,
    RateLimited,
    Unauthorized,
)
from smart.minify import build_cache_key, minify_courses
from smart.prompt import SYSTEM_PROMPT, build_user_prompt
from smart.schema import SmartResponse
from solver.rules import check_conflicts
from solver.scoring import score

logger = logging.getLogger(__name__)

AI_ANALYSIS_PREFIX = "AI-optimized schedule"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SmartGenerateResult(BaseModel):
    """Ergebnis eines erfolgreichen Aufrufs."""

    plan_ids: list[str]
    count: int
    from_cache: bool = False
    model: Optional[str] = None   # None bei Cache-Treffer
    remaining_credits: Optional[int] = None


class SmartGenerator:
    """Orchestriert einen KI-Aufruf über injizierte Mitspieler.

    Verwendung:
        generator = SmartGenerator(ledger, cache, store, primary, fallback, config.smart)
        result = await generator.smart_generate("user-1", catalog, ["CS101"], 24, prefs)
    """

    def __init__(
        self,
        ledger: CreditLedger,
        cache: ResponseCache,
        store: PlanStore,
        primary: ModelClient,
        fallback: ModelClient,
        config: Optional[SmartGenerateConfig] = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.ledger = ledger
        self.cache = cache
        self.store = store
        self.primary = primary
        self.fallback = fallback
        self.config = config or SmartGenerateConfig()
        self._clock = clock

    # ─── Öffentliche API ──────────────────────────────────────────────────────

    async def smart_generate(
        self,
        caller_id: Optional[str],
        catalog: Union[Catalog, list[CourseSection]],
        selected_codes: list[str],
        max_credits: int,
        preferences: Optional[SmartPreferences] = None,
    ) -> SmartGenerateResult:
        preferences = preferences or SmartPreferences()
        sections = catalog.sections if isinstance(catalog, Catalog) else list(catalog)

        # ── AUTHORIZING ──────────────────────────────────────────────────────
        if not caller_id:
            raise Unauthorized()
        logger.info(f"SmartGenerate {caller_id}: autorisiert")

        # ── RATE_CHECKING ────────────────────────────────────────────────────
        now = self._clock()
        await self._check_quota(caller_id, now)
        logger.info(f"SmartGenerate {caller_id}: Kontingent und Cooldown ok")

        # ── CACHE_LOOKUP ─────────────────────────────────────────────────────
        payload = minify_courses(sections, selected_codes)
        key = build_cache_key(payload, selected_codes, max_credits, preferences,
                              self.primary.name)
        response = await self._lookup(key)
        from_cache = response is not None
        model_used: Optional[str] = None

        if response is None:
            logger.info(f"SmartGenerate {caller_id}: kein Cache-Treffer ({key[:12]}…), Modellaufruf")
            prompt = build_user_prompt(payload, selected_codes, max_credits, preferences,
                                       num_variants=self.config.max_variants)
            response, model_used = await self._invoke_with_fallback(prompt)

        # ── RECONSTRUCTING ───────────────────────────────────────────────────
        allowed = {s.id: s for s in sections if s.code in set(selected_codes)}
        plans = self.reconstruct(response, allowed)
        if not plans:
            logger.warning(f"SmartGenerate {caller_id}: keine verwertbare Variante")
            raise NoValidPlans()

        if not from_cache:
            await self.cache.put(key, response.to_cache())
            logger.info(f"SmartGenerate: Antwort von {model_used} gecacht ({key[:12]}…)")

        # ── PERSISTING ───────────────────────────────────────────────────────
        plan_ids = [await self.store.save(plan, caller_id) for plan in plans]
        remaining = await self.ledger.decrement_credit(caller_id)
        await self.ledger.record_last_invocation_time(caller_id, now)

        logger.info(
            f"SmartGenerate {caller_id}: {len(plan_ids)} Pläne gespeichert "
            f"({'Cache' if from_cache else model_used}), {remaining} Credits übrig"
        )
        return SmartGenerateResult(
            plan_ids=plan_ids,
            count=len(plan_ids),
            from_cache=from_cache,
            model=model_used,
            remaining_credits=remaining,
        )

    # ─── Schritte ─────────────────────────────────────────────────────────────

    async def _check_quota(self, caller_id: str, now: datetime) -> None:
        """Kontingent und Cooldown prüfen; keine Seiteneffekte."""
        credits = await self.ledger.get_remaining_credits(caller_id)
        if credits <= 0:
            raise InsufficientCredits(credits)

        last = await self.ledger.get_last_invocation_time(caller_id)
        if last is None:
            return
        elapsed = (now - last).total_seconds()
        cooldown = self.config.cooldown_seconds
        if elapsed < cooldown:
            raise RateLimited(math.ceil(cooldown - elapsed))

    async def _lookup(self, key: str) -> Optional[SmartResponse]:
        cached = await self.cache.get(key)
        if cached is None:
            return None
        try:
            response = SmartResponse.model_validate(cached)
        except ValidationError as e:
            logger.warning(f"Cache-Eintrag {key[:12]}… unbrauchbar, wird ignoriert: {e}")
            return None
        logger.info(f"SmartGenerate: Cache-Treffer ({key[:12]}…)")
        return response

    async def _invoke_with_fallback(self, prompt: str) -> tuple[SmartResponse, str]:
        """Primärmodell, bei jedem Fehler genau ein Versuch mit dem Fallback-Modell."""
        try:
            return await self.primary.invoke(SYSTEM_PROMPT, prompt), self.primary.name
        except Exception as e:
            logger.warning(
                f"Primärmodell {self.primary.name} fehlgeschlagen: {e} – "
                f"Fallback auf {self.fallback.name}"
            )

        try:
            return await self.fallback.invoke(SYSTEM_PROMPT, prompt), self.fallback.name
        except Exception as e:
            logger.error(f"Fallback-Modell {self.fallback.name} fehlgeschlagen: {e}")
            raise GenerationFailed(str(e)) from e

    def reconstruct(
        self, response: SmartResponse, allowed: dict[str, CourseSection]
    ) -> list[Plan]:
        """IDs der Modellantwort → vollständige Pläne.

        - Nur die ersten max_variants Varianten
        - Unbekannte IDs werden still verworfen
        - Pro Kurs-Code zählt nur die erste Section
        - Varianten ohne verbleibende Section entfallen
        """
        plans: list[Plan] = []
        for idx, variant in enumerate(response.plans[: self.config.max_variants]):
            courses: list[CourseSection] = []
            seen_codes: set[str] = set()
            dropped = 0
            for course_id in variant.course_ids:
                section = allowed.get(course_id)
                if section is None or section.code in seen_codes:
                    dropped += 1
                    continue
                seen_codes.add(section.code)
                courses.append(section)

            if dropped:
                logger.info(f"Variante {idx + 1}: {dropped} ungültige/doppelte ID(s) verworfen")
            if not courses:
                continue

            result = score(courses)
            analysis = f"{AI_ANALYSIS_PREFIX}: {result.analysis}"
            conflicts = check_conflicts(courses)
            if not conflicts.valid:
                analysis += " | Warning: " + "; ".join(conflicts.messages)

            plans.append(Plan(
                name=variant.name.strip() or f"AI Plan {idx + 1}",
                courses=courses,
                score=result.to_plan_score(),
                analysis=analysis,
                source="ai",
            ))
        return plans
