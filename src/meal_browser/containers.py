"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from meal_browser.adapters.mealdb_client import HttpxMealDbClient, MealDbClient
from meal_browser.config import Settings
from meal_browser.services.catalog import CatalogService
from meal_browser.services.detail_view import DetailView
from meal_browser.services.gallery_view import GalleryView
from meal_browser.services.list_view import ListView
from meal_browser.services.query_state import QueryStateStore


@dataclass
class AppContainer:
    """Holds application-wide dependencies and builds per-request views."""

    settings: Settings
    mealdb_client: MealDbClient
    catalog_service: CatalogService
    close_resources: Callable[[], Awaitable[None]]

    def list_view(self, restorable: str | None = None) -> ListView:
        """Create a list view restored from a query string."""
        return ListView(
            catalog=self.catalog_service,
            store=QueryStateStore.from_restorable(restorable),
            debounce_seconds=self.settings.search_debounce_seconds,
            featured_count=self.settings.featured_count,
            require_featured=self.settings.featured_require_results,
        )

    def gallery_view(self, restorable: str | None = None) -> GalleryView:
        """Create a gallery view restored from a query string."""
        return GalleryView(
            catalog=self.catalog_service,
            store=QueryStateStore.from_restorable(restorable),
        )

    def detail_view(self) -> DetailView:
        """Create an unbound detail view."""
        return DetailView(catalog=self.catalog_service)


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    mealdb_client = HttpxMealDbClient.create(
        base_url=resolved_settings.mealdb_base_url,
        timeout=resolved_settings.mealdb_timeout_seconds,
    )
    catalog_service = CatalogService(
        client=mealdb_client,
        debug=resolved_settings.debug,
    )

    async def close_resources() -> None:
        await mealdb_client.close()

    return AppContainer(
        settings=resolved_settings,
        mealdb_client=mealdb_client,
        catalog_service=catalog_service,
        close_resources=close_resources,
    )
