from pydantic import BaseModel, Field, model_validator


# ─── SCHEDULER (Aufzählung) ───

class SchedulerConfig(BaseModel):
    """Grenzen der kombinatorischen Planerzeugung.

    Die Obergrenzen tauschen Vollständigkeit gegen Antwortzeit: Ab
    `max_combinations` Teilkombinationen wird nicht weiter expandiert, das
    Ergebnis ist dann nur eine Annäherung des Suchraums.
    """
    # Maximale Anzahl Teilkombinationen, ab der nicht weiter expandiert wird
    max_combinations: int = Field(5000, ge=1,
        description="Explosionsgrenze für Teilkombinationen")
    # Harte Obergrenze gültiger Pläne pro Aufruf
    max_plans_per_call: int = Field(6, ge=1,
        description="Maximale Pläne pro Aufruf")
    # Anfangskontingent an Plänen pro Nutzer (Erweiterungs-Modus)
    default_plan_limit: int = Field(12, ge=1,
        description="Plan-Kontingent ohne Erweiterung")
    # Zuwachs pro Erweiterung
    expansion_step: int = Field(12, ge=1,
        description="Zusätzliche Pläne pro Erweiterung")
    # Absolute Obergrenze über alle Erweiterungen
    expansion_cap: int = Field(36, ge=1,
        description="Maximales Plan-Kontingent")

    @model_validator(mode='after')
    def validate_expansion(self):
        if self.default_plan_limit > self.expansion_cap:
            raise ValueError(
                f"default_plan_limit ({self.default_plan_limit}) > "
                f"expansion_cap ({self.expansion_cap})")
        return self


# ─── SPRACHMODELL ───

class ModelConfig(BaseModel):
    """Eine Modell-Konfiguration (primär oder Fallback)."""
    # Modell-Bezeichner beim Anbieter
    model: str
    # Niedrige Temperatur für logische Konsistenz
    temperature: float = Field(0.3, ge=0.0, le=2.0)
    # Antwort enthält nur IDs → kleines Budget reicht
    max_tokens: int = Field(2048, ge=256)
    # Zeitlimit pro Aufruf in Sekunden
    timeout_seconds: float = Field(60.0, gt=0)


class SmartGenerateConfig(BaseModel):
    """Konfiguration der KI-gestützten Planerstellung."""
    # Sperrzeit zwischen zwei Aufrufen desselben Nutzers
    cooldown_seconds: int = Field(30, ge=0,
        description="Cooldown zwischen zwei Aufrufen (Sekunden)")
    # Anzahl Planvarianten, die das Modell liefern soll
    max_variants: int = Field(3, ge=1, le=10,
        description="Planvarianten pro Antwort")
    # Tägliches Kontingent pro Nutzer
    daily_credits: int = Field(5, ge=0,
        description="Credits pro Tag")
    # Zeitzone für den Tageswechsel (WIB = UTC+7)
    credit_reset_utc_offset_hours: int = Field(7, ge=-12, le=14,
        description="UTC-Offset für den täglichen Credit-Reset")
    # OpenAI-kompatibler Endpunkt
    api_base_url: str = Field("https://api.groq.com/openai/v1",
        description="OpenAI-kompatibler API-Endpunkt")
    # Umgebungsvariable mit dem API-Schlüssel
    api_key_env: str = Field("GROQ_API_KEY",
        description="Umgebungsvariable für den API-Schlüssel")
    # Leistungsstärkeres Modell (erster Versuch)
    primary: ModelConfig = Field(
        default_factory=lambda: ModelConfig(model="llama-3.3-70b-versatile"))
    # Schnelleres/günstigeres Modell (einziger Wiederholungsversuch)
    fallback: ModelConfig = Field(
        default_factory=lambda: ModelConfig(model="llama-3.1-8b-instant",
                                            timeout_seconds=30.0))


# ─── ABLAGE ───

class StorageConfig(BaseModel):
    """Ablageorte der JSON-Dateien (Ledger, Cache, Plan-Archiv)."""
    data_dir: str = Field("output",
        description="Verzeichnis für Ledger, Cache und Plan-Archiv")


# ─── GESAMT-CONFIG ───

class PlannerConfig(BaseModel):
    """Gesamtkonfiguration des Kursplaners."""
    # Name der Hochschule (nur Anzeige)
    university_name: str = Field("Universitas Contoh",
        description="Name der Hochschule")
    # Grenzen der Planerzeugung
    scheduler: SchedulerConfig = Field(default_factory=SchedulerConfig)
    # KI-Optimierung
    smart: SmartGenerateConfig = Field(default_factory=SmartGenerateConfig)
    # Dateiablage
    storage: StorageConfig = Field(default_factory=StorageConfig)
