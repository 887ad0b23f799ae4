"""Food and goal analysis backed by the AI gateway."""

import json
import logging
from dataclasses import dataclass
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from food_logger.domain.errors import InvalidRequestError, ParseError
from food_logger.domain.nutrition import FoodAnalysis, GoalEstimate
from food_logger.domain.settings import UserStats
from food_logger.services.ai import ChatClient
from food_logger.services.user_settings import UserSettingsService

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

_NUTRIENT_PROPERTIES: dict[str, object] = {
    "name": {"type": "string"},
    "calories": {"type": "number"},
    "protein": {"type": "number"},
    "carbs": {"type": "number"},
    "fat": {"type": "number"},
}
_NUTRIENT_FIELDS = ["name", "calories", "protein", "carbs", "fat"]

ANALYZE_RESPONSE_FORMAT: dict[str, object] = {
    "type": "json_schema",
    "json_schema": {
        "name": "analyze_response",
        "schema": {
            "type": "object",
            "properties": {
                **_NUTRIENT_PROPERTIES,
                "items": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": _NUTRIENT_PROPERTIES,
                        "required": _NUTRIENT_FIELDS,
                    },
                },
            },
            "required": [*_NUTRIENT_FIELDS, "items"],
        },
    },
}

GOALS_RESPONSE_FORMAT: dict[str, object] = {
    "type": "json_schema",
    "json_schema": {
        "name": "goals_response",
        "schema": {
            "type": "object",
            "properties": {
                "dailyGoal": {"type": "number"},
                "proteinGoal": {"type": "number"},
                "carbsGoal": {"type": "number"},
                "fatGoal": {"type": "number"},
            },
            "required": ["dailyGoal", "proteinGoal", "carbsGoal", "fatGoal"],
        },
    },
}

NUTRITIONIST_SYSTEM_PROMPT = """You are a nutritionist and an expert in food \
and nutrition.
Your mission is to give the best estimate of the dish and its nutritional \
content from what the user provides.
Analyze only the ingredients that can be identified.
Do not include uncertainty, concerns or notes.
Rules:
- Do not answer requests that do not describe or show food."""

IMAGE_ANALYSIS_PROMPT = """Analyze only the food items visible in the provided \
image.
Rules:
- Ignore people, backgrounds, objects and every other non-food element.
- Identify each food item as precisely as possible, including ingredients, \
preparation method, sauces and toppings.
- Name the dish. If the exact name is unclear, choose a reasonable name based \
only on the visible food.
- Estimate calories and protein, carbs and fat in grams for each item and for \
the whole plate, assuming typical portion sizes for what is visible."""

TEXT_ANALYSIS_PROMPT_TEMPLATE = """Analyze the meal described below.
Rules:
- Treat the description as the complete list of what was eaten.
- Split it into individual food items, using the stated quantities or typical \
portions when none are given.
- Name the dish in a few words.
- Estimate calories and protein, carbs and fat in grams for each item and for \
the whole meal.

Description: {description}"""

GOALS_SYSTEM_PROMPT = (
    "You are an expert nutritionist. Calculate the daily calorie and macro goals "
    "for a user based on their stats. Return ONLY a JSON object with this exact "
    "structure: { dailyGoal: number, proteinGoal: number, carbsGoal: number, "
    "fatGoal: number }. Do NOT include any units (e.g., 'g') or extra text. "
    "Ensure the macros add up to the total calories roughly "
    "(Protein=4 kcal/g, Carbs=4 kcal/g, Fat=9 kcal/g)."
)


@dataclass
class AnalysisService:
    """Builds prompts, calls the AI gateway and validates replies."""

    client: ChatClient
    settings_service: UserSettingsService

    async def analyze_food(
        self, image: str | None = None, text: str | None = None
    ) -> FoodAnalysis:
        """Estimate nutrition for a meal photo or description.

        A non-blank ``text`` takes precedence over ``image``.
        """
        description = text.strip() if text else ""
        if description:
            user_prompt = TEXT_ANALYSIS_PROMPT_TEMPLATE.format(description=description)
            image = None
        elif image:
            user_prompt = IMAGE_ANALYSIS_PROMPT
        else:
            raise InvalidRequestError("Provide an image or a text description")

        response = await self.client.complete(
            system_prompt=NUTRITIONIST_SYSTEM_PROMPT,
            user_prompt=user_prompt,
            image=image,
            response_format=ANALYZE_RESPONSE_FORMAT,
            base_url=self._base_url_override(),
        )
        return parse_reply(response.content, FoodAnalysis)

    async def calculate_goals(self, stats: UserStats) -> GoalEstimate:
        """Estimate daily calorie and macro goals from body statistics."""
        user_prompt = (
            f"Calculate goals for a {stats.age} year old {stats.gender}, "
            f"{stats.height_cm:g}cm tall, weighing {stats.weight_kg:g}kg, "
            f'with an activity level of "{stats.activity_level}".'
        )
        response = await self.client.complete(
            system_prompt=GOALS_SYSTEM_PROMPT,
            user_prompt=user_prompt,
            response_format=GOALS_RESPONSE_FORMAT,
            base_url=self._base_url_override(),
        )
        return parse_reply(response.content, GoalEstimate)

    def _base_url_override(self) -> str | None:
        value = self.settings_service.get().api_base_url
        return value.strip() if value and value.strip() else None


def parse_reply(content: str, model: type[ModelT]) -> ModelT:
    """Parse a JSON reply and validate it against ``model``."""
    try:
        raw = json.loads(content)
    except json.JSONDecodeError as exc:
        logger.warning("AI reply is not valid JSON: %.200s", content)
        raise ParseError(f"AI reply is not valid JSON: {exc.msg}") from exc
    try:
        return model.model_validate(raw)
    except ValidationError as exc:
        locations = {".".join(map(str, err["loc"])) for err in exc.errors()}
        fields = sorted(location or "reply" for location in locations)
        raise ParseError(
            f"AI reply does not match the expected schema: {', '.join(fields)}"
        ) from exc
