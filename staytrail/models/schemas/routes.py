"""Route report schemas."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from staytrail.models.models import RouteDifficulty


class RouteRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str | None = None
    distance: float = Field(default=0.0, ge=0)  # km
    difficulty: str = RouteDifficulty.EASY.value  # raw value, unknown levels are kept for display
    estimated_time: int | None = None  # minutes
    start_location: str | None = None
    end_location: str | None = None

    @field_validator("difficulty", mode="before")
    @classmethod
    def _normalize_difficulty(cls, v: object) -> str:
        return "" if v is None else str(v).strip()

    @property
    def difficulty_level(self) -> RouteDifficulty:
        try:
            return RouteDifficulty(self.difficulty.lower())
        except ValueError:
            return RouteDifficulty.UNKNOWN
