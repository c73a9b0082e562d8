from config.schema import (
    ModelConfig,
    PlannerConfig,
    SchedulerConfig,
    SmartGenerateConfig,
    StorageConfig,
)


def default_scheduler() -> SchedulerConfig:
    """Standard-Grenzen der Planerzeugung.

    5000 Teilkombinationen halten die Aufzählung auch bei 8-10 Kursen mit
    je 4-6 Gruppen im Millisekundenbereich; 6 Pläne pro Aufruf sind das,
    was die Oberfläche auf einmal sinnvoll darstellt. Erweiterungen geben
    je 12 weitere Pläne frei, bis höchstens 36.
    """
    return SchedulerConfig(
        max_combinations=5000,
        max_plans_per_call=6,
        default_plan_limit=12,
        expansion_step=12,
        expansion_cap=36,
    )


def default_smart() -> SmartGenerateConfig:
    """Standard-Konfiguration der KI-Optimierung.

    Primär:   llama-3.3-70b-versatile (bessere Logik, langsamer)
    Fallback: llama-3.1-8b-instant    (schnell, günstig)
    Beide über den OpenAI-kompatiblen Groq-Endpunkt, identischer Prompt.
    """
    return SmartGenerateConfig(
        cooldown_seconds=30,
        max_variants=3,
        daily_credits=5,
        credit_reset_utc_offset_hours=7,
        primary=ModelConfig(model="llama-3.3-70b-versatile", temperature=0.3,
                            max_tokens=2048, timeout_seconds=60.0),
        fallback=ModelConfig(model="llama-3.1-8b-instant", temperature=0.3,
                             max_tokens=2048, timeout_seconds=30.0),
    )


def default_planner_config() -> PlannerConfig:
    """Komplette Default-Konfiguration."""
    return PlannerConfig(
        university_name="Universitas Contoh",
        scheduler=default_scheduler(),
        smart=default_smart(),
        storage=StorageConfig(data_dir="output"),
    )
