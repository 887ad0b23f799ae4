"""Request bodies for the HTTP API."""

from pydantic import BaseModel, ConfigDict, Field

from food_logger.domain.base import CamelModel
from food_logger.domain.nutrition import FoodItem, NutritionFacts
from food_logger.domain.settings import ActivityLevel, Gender, UserStats


class AnalyzeRequest(BaseModel):
    """Photo (data URI) or text description of a meal."""

    image: str | None = None
    text: str | None = None


class GoalsRequest(BaseModel):
    """Body statistics for goal estimation."""

    model_config = ConfigDict(allow_inf_nan=False)

    age: int = Field(gt=0)
    gender: Gender
    height: float = Field(gt=0)
    weight: float = Field(gt=0)
    activity: ActivityLevel

    def to_user_stats(self) -> UserStats:
        return UserStats(
            age=self.age,
            height_cm=self.height,
            weight_kg=self.weight,
            gender=self.gender,
            activity_level=self.activity,
        )


class EntryCreateRequest(CamelModel):
    """Confirmed analysis to log as an entry."""

    name: str = Field(min_length=1)
    nutrition: NutritionFacts
    items: list[FoodItem] | None = None
    image_url: str | None = None


class SettingsUpdateRequest(CamelModel):
    """Partial settings; only the fields sent are changed."""

    daily_goal: float | None = Field(default=None, ge=0)
    protein_goal: float | None = Field(default=None, ge=0)
    carbs_goal: float | None = Field(default=None, ge=0)
    fat_goal: float | None = Field(default=None, ge=0)
    user_stats: UserStats | None = None
    api_base_url: str | None = None

    def changes(self) -> dict[str, object]:
        """Return the fields present in the request body."""
        changes = self.model_dump(exclude_unset=True)
        for goal in ("daily_goal", "protein_goal", "carbs_goal", "fat_goal"):
            if goal in changes and changes[goal] is None:
                del changes[goal]
        return changes
