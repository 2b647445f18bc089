"""Catalog service on top of TheMealDB."""

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import httpx

from meal_browser.adapters.mealdb_client import MealDbClient
from meal_browser.domain.meals import Category, MealDetail, MealSummary
from meal_browser.services.cancellation import CancelToken
from meal_browser.services.normalizer import normalize_detail, normalize_summary

_logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable


class CatalogUnavailableError(RuntimeError):
    """Raised when the upstream catalog call fails."""


@dataclass
class CatalogService:
    """Normalized catalog lookups honoring cancellation tokens."""

    client: MealDbClient
    debug: bool = False

    async def search_by_text(
        self, text: str, cancel: CancelToken | None = None
    ) -> list[MealSummary]:
        """Search meals by name. Blank text returns no meals without a call."""
        query = text.strip()
        if not query:
            return []
        payload = await self._call(
            lambda: self.client.search_meals(query), cancel, action="search"
        )
        return [normalize_summary(raw) for raw in _meals(payload)]

    async def list_categories(
        self, cancel: CancelToken | None = None
    ) -> list[Category]:
        """Return the full category vocabulary."""
        payload = await self._call(
            self.client.list_categories, cancel, action="list_categories"
        )
        return [
            Category(name=str(raw["strCategory"]))
            for raw in _meals(payload)
            if raw.get("strCategory")
        ]

    async def filter_by_category(
        self, category: str, cancel: CancelToken | None = None
    ) -> list[MealSummary]:
        """Return meals of a category; records without one inherit it."""
        payload = await self._call(
            lambda: self.client.filter_by_category(category),
            cancel,
            action=f"filter:{category}",
        )
        return [normalize_summary(raw, category) for raw in _meals(payload)]

    async def get_by_id(
        self, meal_id: str, cancel: CancelToken | None = None
    ) -> MealDetail | None:
        """Look up a meal; ``None`` means the catalog has no such meal."""
        if not meal_id:
            return None
        payload = await self._call(
            lambda: self.client.lookup_meal(meal_id),
            cancel,
            action=f"lookup:{meal_id}",
        )
        meals = _meals(payload)
        if not meals:
            return None
        return normalize_detail(meals[0])

    async def get_random_batch(
        self,
        count: int,
        cancel: CancelToken | None = None,
        *,
        require_results: bool = False,
    ) -> list[MealSummary]:
        """Fetch ``count`` random meals, one request each.

        Failed requests contribute nothing. The batch only fails when every
        request failed and ``require_results`` is set.
        """
        results = await asyncio.gather(
            *(
                self._call(self.client.random_meal, cancel, action="random")
                for _ in range(count)
            ),
            return_exceptions=True,
        )
        if cancel is not None:
            cancel.raise_if_cancelled()
        meals: list[MealSummary] = []
        failures = 0
        for result in results:
            if isinstance(result, CatalogUnavailableError):
                failures += 1
                continue
            if isinstance(result, BaseException):
                raise result
            raw_meals = _meals(result)
            if raw_meals:
                meals.append(normalize_summary(raw_meals[0]))
        if failures and self.debug:
            _logger.info("Random batch: %s of %s requests failed", failures, count)
        if require_results and count > 0 and not meals:
            raise CatalogUnavailableError("Every random meal request failed")
        return meals

    async def _call(
        self,
        func: "Callable[[], Awaitable[dict[str, object]]]",
        cancel: CancelToken | None,
        *,
        action: str,
    ) -> dict[str, object]:
        """Run a client call, translating transport errors and stale tokens."""
        if cancel is not None:
            cancel.raise_if_cancelled()
        try:
            payload = await func()
        except (httpx.HTTPError, json.JSONDecodeError) as exc:
            _logger.warning(
                "Catalog %s failed (status=%s): %s",
                action,
                _status_code_from_exception(exc),
                exc,
            )
            raise CatalogUnavailableError(f"Catalog {action} failed") from exc
        if cancel is not None:
            cancel.raise_if_cancelled()
        if self.debug:
            _logger.info("Catalog %s: meals=%s", action, len(_meals(payload)))
        return payload


def _meals(payload: dict[str, object]) -> list[dict[str, object]]:
    """Return the ``meals`` array of a payload; the API sends null for none."""
    meals = payload.get("meals") if isinstance(payload, dict) else None
    if not isinstance(meals, list):
        return []
    return [meal for meal in meals if isinstance(meal, dict)]


def _status_code_from_exception(exc: Exception) -> str:
    """Extract HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"
