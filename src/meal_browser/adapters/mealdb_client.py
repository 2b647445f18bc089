"""TheMealDB API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class MealDbClient(Protocol):
    """Interface for TheMealDB API interactions."""

    async def search_meals(self, query: str) -> dict[str, object]:
        """Search meals by name and return raw API data."""

    async def list_categories(self) -> dict[str, object]:
        """Return the raw category list."""

    async def filter_by_category(self, category: str) -> dict[str, object]:
        """Return raw meals belonging to a category."""

    async def lookup_meal(self, meal_id: str) -> dict[str, object]:
        """Fetch a meal by id and return raw API data."""

    async def random_meal(self) -> dict[str, object]:
        """Fetch a single random meal."""


@dataclass
class HttpxMealDbClient(MealDbClient):
    """HTTPX-backed TheMealDB client."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout: float = 10

    @classmethod
    def create(cls, base_url: str, timeout: float = 10) -> "HttpxMealDbClient":
        """Create a TheMealDB client with a managed httpx session."""
        return cls(base_url=base_url, http_client=httpx.AsyncClient(), timeout=timeout)

    async def search_meals(self, query: str) -> dict[str, object]:
        """Search meals by name."""
        return await self._get("search.php", {"s": query})

    async def list_categories(self) -> dict[str, object]:
        """Return the category list."""
        return await self._get("list.php", {"c": "list"})

    async def filter_by_category(self, category: str) -> dict[str, object]:
        """Return meals belonging to a category."""
        return await self._get("filter.php", {"c": category})

    async def lookup_meal(self, meal_id: str) -> dict[str, object]:
        """Fetch a meal by id."""
        return await self._get("lookup.php", {"i": meal_id})

    async def random_meal(self) -> dict[str, object]:
        """Fetch a single random meal."""
        return await self._get("random.php", None)

    async def _get(
        self, endpoint: str, params: dict[str, str] | None
    ) -> dict[str, object]:
        url = f"{self.base_url.rstrip('/')}/{endpoint}"
        response = await self.http_client.get(url, params=params, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
