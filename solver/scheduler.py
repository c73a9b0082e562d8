"""Plan-Generator: aufzählende Suche über austauschbare Sections.

Ablauf:
  1. Katalog auf die gewählten Kurs-Codes einschränken
  2. Pro Code ein Bucket (Katalogreihenfolge bleibt erhalten)
  3. Kartesisches Produkt schrittweise aufbauen, mit Explosionsgrenze
  4. Konfliktprüfung, Bewertung, Abbruch nach max_plans_per_call Plänen

Deterministisch: gleiche Eingabe (inkl. Reihenfolge) → gleiche Pläne,
nur die generierten IDs unterscheiden sich. Kein Zustand zwischen Aufrufen.
"""

import logging
from typing import Optional, Union

from config.schema import SchedulerConfig
from models.catalog import Catalog
from models.course import CourseSection
from models.plan import Plan
from solver.rules import check_conflicts
from solver.scoring import score

logger = logging.getLogger(__name__)


class PlanGenerator:
    """Erzeugt konfliktfreie Pläne aus einem Katalog.

    Verwendung:
        generator = PlanGenerator(config.scheduler)
        plans = generator.generate(catalog, ["CS101", "MATH201"])
    """

    def __init__(self, config: Optional[SchedulerConfig] = None) -> None:
        self.config = config or SchedulerConfig()

    # ─── Öffentliche API ──────────────────────────────────────────────────────

    def generate(
        self,
        catalog: Union[Catalog, list[CourseSection]],
        selected_codes: list[str],
        plan_limit: Optional[int] = None,
    ) -> list[Plan]:
        """Liefert höchstens min(plan_limit, max_plans_per_call) gültige Pläne."""
        sections = catalog.sections if isinstance(catalog, Catalog) else list(catalog)
        codes = list(dict.fromkeys(selected_codes))
        limit = self._effective_limit(plan_limit)

        wanted = set(codes)
        relevant = [s for s in sections if s.code in wanted]
        if not relevant or limit == 0:
            return []

        buckets = self._group_by_code(relevant, codes)
        combos = self._expand(buckets)

        plans: list[Plan] = []
        for combo in combos:
            if not check_conflicts(combo).valid:
                continue
            plans.append(self._to_plan(combo, len(plans) + 1, len(codes)))
            if len(plans) >= limit:
                break

        logger.info(
            f"Plan-Generator: {len(plans)} Pläne aus {len(combos)} Kombinationen "
            f"({len(buckets)}/{len(codes)} Codes)"
        )
        return plans

    # ─── Schritte ─────────────────────────────────────────────────────────────

    def _effective_limit(self, plan_limit: Optional[int]) -> int:
        cap = self.config.max_plans_per_call
        if plan_limit is None:
            return cap
        return max(0, min(plan_limit, cap))

    def _group_by_code(
        self, relevant: list[CourseSection], codes: list[str]
    ) -> list[list[CourseSection]]:
        """Ein Bucket pro gewähltem Code, in der Reihenfolge der Auswahl."""
        buckets: list[list[CourseSection]] = []
        for code in codes:
            options = [s for s in relevant if s.code == code]
            if not options:
                logger.warning(f"Kurs '{code}': keine Section im Katalog – wird übersprungen")
                continue
            buckets.append(options)
        return buckets

    def _expand(self, buckets: list[list[CourseSection]]) -> list[list[CourseSection]]:
        """Kartesisches Produkt, Code für Code.

        Überschreitet die Zahl der Teilkombinationen max_combinations, werden
        die restlichen Codes nicht mehr angehängt.
        """
        ceiling = self.config.max_combinations
        combos: list[list[CourseSection]] = [[]]
        for idx, bucket in enumerate(buckets):
            if len(combos) > ceiling:
                logger.warning(
                    f"Explosionsgrenze erreicht: {len(combos)} > {ceiling} Kombinationen – "
                    f"{len(buckets) - idx} Code(s) nicht mehr expandiert"
                )
                break
            combos = [combo + [option] for combo in combos for option in bucket]
        return combos

    def _to_plan(self, combo: list[CourseSection], number: int, num_selected: int) -> Plan:
        result = score(combo)
        analysis = result.analysis
        missing = num_selected - len(combo)
        if missing > 0:
            analysis = f"Missing {missing} subjects. {analysis}"
        return Plan(
            name=f"Plan {number}",
            courses=list(combo),
            score=result.to_plan_score(),
            analysis=analysis,
            source="enumerator",
        )


def generate_plans(
    catalog: Union[Catalog, list[CourseSection]],
    selected_codes: list[str],
    plan_limit: Optional[int] = None,
    config: Optional[SchedulerConfig] = None,
) -> list[Plan]:
    """Kurzform für PlanGenerator(config).generate(...)."""
    return PlanGenerator(config).generate(catalog, selected_codes, plan_limit)


def expand_plan_limit(current_limit: int, config: Optional[SchedulerConfig] = None) -> int:
    """Gibt das nächste Plan-Kontingent zurück (+expansion_step, gedeckelt).

    Raises:
        ValueError: wenn das Kontingent bereits expansion_cap erreicht hat.
    """
    config = config or SchedulerConfig()
    if current_limit >= config.expansion_cap:
        raise ValueError(
            f"Maximum plan limit ({config.expansion_cap}) already reached."
        )
    return min(current_limit + config.expansion_step, config.expansion_cap)
