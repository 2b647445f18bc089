"""ASGI entrypoint, served as ``meal_browser.api.asgi:app``."""

import logging

from meal_browser.api.app import create_app
from meal_browser.config import Settings
from meal_browser.containers import build_container

settings = Settings()
app = create_app(build_container(settings))

logging.getLogger(__name__).info(
    "Browsing TheMealDB at %s (environment=%s)",
    settings.mealdb_base_url,
    settings.environment,
)
