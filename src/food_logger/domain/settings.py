"""User settings models."""

from typing import Literal

from pydantic import Field

from food_logger.domain.base import CamelModel
from food_logger.domain.nutrition import GoalEstimate

DEFAULT_DAILY_GOAL = 2000
DEFAULT_PROTEIN_GOAL = 150
DEFAULT_CARBS_GOAL = 250
DEFAULT_FAT_GOAL = 70

Gender = Literal["male", "female"]
ActivityLevel = Literal["sedentary", "light", "moderate", "active", "very_active"]


class UserStats(CamelModel):
    """Body statistics used for goal estimation."""

    age: int = Field(gt=0)
    height_cm: float = Field(gt=0, alias="height")
    weight_kg: float = Field(gt=0, alias="weight")
    gender: Gender
    activity_level: ActivityLevel


class UserSettings(CamelModel):
    """Singleton settings document."""

    daily_goal: float = Field(default=DEFAULT_DAILY_GOAL, ge=0)
    protein_goal: float = Field(default=DEFAULT_PROTEIN_GOAL, ge=0)
    carbs_goal: float = Field(default=DEFAULT_CARBS_GOAL, ge=0)
    fat_goal: float = Field(default=DEFAULT_FAT_GOAL, ge=0)
    user_stats: UserStats | None = None
    api_base_url: str | None = None

    def goals(self) -> GoalEstimate:
        """Return the four goal values."""
        return GoalEstimate(
            daily_goal=self.daily_goal,
            protein_goal=self.protein_goal,
            carbs_goal=self.carbs_goal,
            fat_goal=self.fat_goal,
        )
