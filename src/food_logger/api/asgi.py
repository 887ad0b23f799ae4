"""ASGI entrypoint for the food logger API."""

from food_logger.api.app import create_app
from food_logger.containers import build_container

app = create_app(build_container())
