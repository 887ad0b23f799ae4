"""Nutrition models produced by analysis and stored with entries."""

from pydantic import Field

from food_logger.domain.base import CamelModel


class NutritionFacts(CamelModel):
    """Calories and macro grams; values are estimated independently."""

    calories: float = Field(ge=0)
    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fat: float = Field(ge=0)


class FoodItem(NutritionFacts):
    """Single detected component of a meal."""

    name: str


class FoodAnalysis(NutritionFacts):
    """Structured reply for a food photo or description."""

    name: str
    items: list[FoodItem]


class GoalEstimate(CamelModel):
    """Daily calorie and macro goals."""

    daily_goal: float = Field(ge=0)
    protein_goal: float = Field(ge=0)
    carbs_goal: float = Field(ge=0)
    fat_goal: float = Field(ge=0)


class MacroBalance(CamelModel):
    """Calories and macros that may go negative, e.g. goal minus intake."""

    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fat: float = 0
