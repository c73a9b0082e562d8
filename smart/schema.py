"""Antwortschema des Sprachmodells (Pydantic v2).

Das Modell antwortet "dünn": nur Plan-Namen und Section-IDs. Die vollen
CourseSections werden serverseitig aus dem Katalog rekonstruiert.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SmartPlanVariant(BaseModel):
    """Eine vom Modell vorgeschlagene Planvariante."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    course_ids: list[str] = Field(default=[], alias="courseIds")

    @field_validator("course_ids", mode="before")
    @classmethod
    def _stringify_ids(cls, v):
        # Modelle liefern numerische IDs gern als Zahl
        if v is None:
            return []
        if not isinstance(v, (list, tuple)):
            raise ValueError(f"courseIds muss eine Liste sein, nicht {type(v).__name__}")
        return [str(x) for x in v]


class SmartResponse(BaseModel):
    """Gesamtantwort: {"plans": [{"name": ..., "courseIds": [...]}, ...]}"""

    plans: list[SmartPlanVariant] = Field(min_length=1)

    def to_cache(self) -> dict:
        """Form, in der die Antwort im Cache abgelegt wird."""
        return self.model_dump(mode="json", by_alias=True)
