"""Shared test fixtures."""

import asyncio
from dataclasses import dataclass, field

import httpx
import pytest

from meal_browser.adapters.mealdb_client import MealDbClient
from meal_browser.config import Settings
from meal_browser.containers import AppContainer
from meal_browser.services.catalog import CatalogService


def raw_meal(  # noqa: PLR0913
    meal_id: str,
    name: str,
    category: str | None = None,
    area: str | None = None,
    thumbnail: str | None = None,
    **extra: object,
) -> dict[str, object]:
    """Build a raw TheMealDB meal record."""
    record: dict[str, object] = {
        "idMeal": meal_id,
        "strMeal": name,
        "strCategory": category,
        "strArea": area,
        "strMealThumb": thumbnail or f"https://img.test/{meal_id}.jpg",
    }
    record.update(extra)
    return record


def _upstream_error(path: str) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", f"https://mealdb.test/{path}")
    response = httpx.Response(500, request=request)
    return httpx.HTTPStatusError("Server error", request=request, response=response)


@dataclass
class FakeMealDbClient(MealDbClient):
    """Fake TheMealDB client backed by in-memory records."""

    search_results: dict[str, list[dict[str, object]]] = field(default_factory=dict)
    categories: list[str] = field(default_factory=list)
    category_meals: dict[str, list[dict[str, object]]] = field(default_factory=dict)
    meals_by_id: dict[str, dict[str, object]] = field(default_factory=dict)
    random_meals: list[dict[str, object] | None] = field(default_factory=list)
    category_delays: dict[str, float] = field(default_factory=dict)
    search_delay: float = 0
    lookup_delays: dict[str, float] = field(default_factory=dict)
    random_delay: float = 0
    failing: set[str] = field(default_factory=set)
    calls: list[tuple[str, str]] = field(default_factory=list)

    async def search_meals(self, query: str) -> dict[str, object]:
        self.calls.append(("search", query))
        await asyncio.sleep(self.search_delay)
        if "search" in self.failing:
            raise _upstream_error("search.php")
        return {"meals": self.search_results.get(query)}

    async def list_categories(self) -> dict[str, object]:
        self.calls.append(("list_categories", ""))
        if "list_categories" in self.failing:
            raise _upstream_error("list.php")
        return {"meals": [{"strCategory": name} for name in self.categories]}

    async def filter_by_category(self, category: str) -> dict[str, object]:
        self.calls.append(("filter", category))
        await asyncio.sleep(self.category_delays.get(category, 0))
        if f"filter:{category}" in self.failing:
            raise _upstream_error("filter.php")
        return {"meals": self.category_meals.get(category)}

    async def lookup_meal(self, meal_id: str) -> dict[str, object]:
        self.calls.append(("lookup", meal_id))
        await asyncio.sleep(self.lookup_delays.get(meal_id, 0))
        if "lookup" in self.failing:
            raise _upstream_error("lookup.php")
        meal = self.meals_by_id.get(meal_id)
        return {"meals": [meal] if meal else None}

    async def random_meal(self) -> dict[str, object]:
        position = sum(1 for name, _ in self.calls if name == "random")
        self.calls.append(("random", str(position)))
        await asyncio.sleep(self.random_delay)
        meal = self.random_meals[position % len(self.random_meals)]
        if meal is None:
            raise _upstream_error("random.php")
        return {"meals": [meal]}

    def calls_to(self, name: str) -> list[str]:
        """Return the arguments of every recorded call to ``name``."""
        return [argument for call, argument in self.calls if call == name]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        mealdb_base_url="https://mealdb.test/api/json/v1/1",
        search_debounce_seconds=0.02,
        featured_count=3,
    )


@pytest.fixture
def mealdb_client() -> FakeMealDbClient:
    return FakeMealDbClient(
        search_results={
            "chicken": [
                raw_meal("52795", "Chicken Handi", "Chicken", "Indian"),
                raw_meal("52772", "Teriyaki Chicken Casserole", "Chicken", "Japanese"),
                raw_meal("52940", "brown stew chicken", "Chicken", None),
            ],
        },
        categories=["Seafood", "Vegan", "Dessert"],
        category_meals={
            "Seafood": [
                {"idMeal": "1", "strMeal": "Salmon", "strMealThumb": "s.jpg"},
                {"idMeal": "2", "strMeal": "Tuna Nicoise", "strMealThumb": "t.jpg"},
            ],
            "Vegan": [
                {"idMeal": "3", "strMeal": "Vegan Chili", "strMealThumb": "c.jpg"},
                {"idMeal": "1", "strMeal": "Salmon (vegan)", "strMealThumb": "v.jpg"},
            ],
            "Dessert": [
                {"idMeal": "4", "strMeal": "Apple Frangipan", "strMealThumb": "a.jpg"},
            ],
        },
        meals_by_id={
            "1": raw_meal("1", "Salmon", "Seafood", "Japanese"),
            "2": raw_meal("2", "Tuna Nicoise", "Seafood", "French"),
            "3": raw_meal("3", "Vegan Chili", "Vegan", "American"),
        },
        random_meals=[
            raw_meal("10", "Kumpir", "Side", "Turkish"),
            raw_meal("11", "Bakewell tart", "Dessert", "British"),
            raw_meal("12", "Ayam Percik", "Chicken", "Malaysian"),
        ],
    )


@pytest.fixture
def catalog_service(mealdb_client: FakeMealDbClient) -> CatalogService:
    return CatalogService(client=mealdb_client)


@pytest.fixture
def container(
    settings: Settings,
    mealdb_client: FakeMealDbClient,
    catalog_service: CatalogService,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        mealdb_client=mealdb_client,
        catalog_service=catalog_service,
        close_resources=close_resources,
    )
