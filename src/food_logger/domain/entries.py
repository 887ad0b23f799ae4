"""Food log entry models."""

from datetime import date, datetime

from pydantic import Field

from food_logger.domain.base import CamelModel
from food_logger.domain.nutrition import (
    FoodItem,
    GoalEstimate,
    MacroBalance,
    NutritionFacts,
)
from food_logger.domain.settings import UserSettings


class Entry(CamelModel):
    """A logged meal."""

    id: str
    timestamp: datetime
    name: str
    nutrition: NutritionFacts
    items: list[FoodItem] | None = None
    image_url: str | None = None


class AppData(CamelModel):
    """Aggregate document persisted by file storage."""

    settings: UserSettings = Field(default_factory=UserSettings)
    entries: list[Entry] = Field(default_factory=list)


class DailySummary(CamelModel):
    """Totals for one calendar day compared with the goals."""

    day: date = Field(alias="date")
    entry_count: int
    totals: MacroBalance
    goals: GoalEstimate
    remaining: MacroBalance
