"""Category gallery view."""

import asyncio
import logging
from dataclasses import dataclass, field

from meal_browser.domain.meals import Category, MealSummary
from meal_browser.domain.navigation import NavigationPayload
from meal_browser.services.aggregator import aggregate
from meal_browser.services.cancellation import RequestCancelledError, RequestTracker
from meal_browser.services.catalog import CatalogService, CatalogUnavailableError
from meal_browser.services.query_state import QueryStateStore
from meal_browser.services.sorting import sort_meals

CATEGORIES_ERROR = "We could not load categories. Please refresh the page."
GALLERY_ERROR = "Something went wrong fetching gallery meals."

_logger = logging.getLogger(__name__)


@dataclass
class GalleryView:
    """Meals of every selected category, merged into one gallery.

    One fetch per selected category runs concurrently; the merged list is
    applied only once all of them have finished. Changing the selection
    discards the whole batch in flight.
    """

    catalog: CatalogService
    store: QueryStateStore
    categories: list[Category] = field(default_factory=list)
    meals: list[MealSummary] = field(default_factory=list)
    loading: bool = False
    categories_error: str | None = None
    gallery_error: str | None = None
    _category_requests: RequestTracker = field(
        default_factory=RequestTracker, init=False, repr=False
    )
    _meal_requests: RequestTracker = field(
        default_factory=RequestTracker, init=False, repr=False
    )
    _pending: "asyncio.Task[None] | None" = field(default=None, init=False, repr=False)

    async def mount(self) -> None:
        """Load categories, then the meals of the current selection."""
        await self.load_categories()
        await self.refresh()

    async def load_categories(self) -> None:
        """Fetch the category list and select the first one if none is set."""
        token = self._category_requests.begin()
        try:
            categories = await self.catalog.list_categories(token)
        except RequestCancelledError:
            return
        except CatalogUnavailableError:
            if self._category_requests.is_current(token):
                self.categories_error = CATEGORIES_ERROR
            return
        if not self._category_requests.is_current(token):
            return
        self.categories = categories
        self.categories_error = None
        if categories and not self.store.state.selected_categories:
            self.store.select_categories([categories[0].name])

    def toggle_category(self, category: str) -> None:
        """Toggle a category and refetch the gallery for the new selection."""
        self.store.toggle_category(category)
        self._cancel_pending()
        self._pending = asyncio.get_running_loop().create_task(self.refresh())

    async def refresh(self) -> None:
        """Fetch and merge meals for every selected category."""
        token = self._meal_requests.begin()
        selected = self.store.state.selected_categories
        if not selected:
            self.meals = []
            self.loading = False
            return
        self.loading = True
        self.gallery_error = None
        try:
            results = await asyncio.gather(
                *(self.catalog.filter_by_category(name, token) for name in selected)
            )
        except RequestCancelledError:
            _logger.debug("Discarded stale gallery batch for %s", selected)
            return
        except CatalogUnavailableError:
            if self._meal_requests.is_current(token):
                self.gallery_error = GALLERY_ERROR
                self.meals = []
                self.loading = False
            token.cancel()
            return
        if not self._meal_requests.is_current(token):
            _logger.debug("Discarded stale gallery batch for %s", selected)
            return
        self.meals = aggregate(results)
        self.loading = False

    async def settle(self) -> None:
        """Wait until no gallery refresh is pending."""
        while self._pending is not None and not self._pending.done():
            await asyncio.gather(self._pending, return_exceptions=True)

    def close(self) -> None:
        """Cancel all outstanding work."""
        self._category_requests.cancel()
        self._meal_requests.cancel()
        self._cancel_pending()

    @property
    def error(self) -> str | None:
        """Return the category list error, else the gallery batch error."""
        return self.categories_error or self.gallery_error

    @property
    def display_meals(self) -> list[MealSummary]:
        state = self.store.state
        return sort_meals(self.meals, state.sort_key, state.sort_order)

    @property
    def show_empty_state(self) -> bool:
        return (
            not self.loading
            and not self.error
            and bool(self.store.state.selected_categories)
            and not self.meals
        )

    def navigation_payload(self, index: int) -> NavigationPayload:
        """Build the payload for opening the meal at ``index`` of the display."""
        ids = tuple(meal.id for meal in self.display_meals)
        return NavigationPayload(ids=ids, index=index, origin="gallery")

    def _cancel_pending(self) -> None:
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = None
