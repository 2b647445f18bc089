"""Search and featured meals list view."""

import asyncio
import logging
from dataclasses import dataclass, field

from meal_browser.domain.meals import MealSummary
from meal_browser.domain.navigation import NavigationPayload
from meal_browser.domain.query import SortKey
from meal_browser.services.cancellation import (
    CancelToken,
    RequestCancelledError,
    RequestTracker,
)
from meal_browser.services.catalog import CatalogService, CatalogUnavailableError
from meal_browser.services.query_state import QueryStateStore
from meal_browser.services.sorting import sort_meals

FEATURED_ERROR = "We could not load featured meals. Please try again later."
SEARCH_ERROR = "We could not complete that search. Please try again."

_logger = logging.getLogger(__name__)


@dataclass
class ListView:
    """Debounced free-text search with a random featured list as fallback.

    Results are shown only while the request that produced them is still
    current. Each keystroke restarts the debounce timer and cancels any
    search in flight for older text.
    """

    catalog: CatalogService
    store: QueryStateStore
    debounce_seconds: float = 0.4
    featured_count: int = 8
    require_featured: bool = False
    search_results: list[MealSummary] = field(default_factory=list)
    featured: list[MealSummary] = field(default_factory=list)
    loading: bool = False
    initial_loading: bool = True
    featured_error: str | None = None
    search_error: str | None = None
    _featured_requests: RequestTracker = field(
        default_factory=RequestTracker, init=False, repr=False
    )
    _search_requests: RequestTracker = field(
        default_factory=RequestTracker, init=False, repr=False
    )
    _pending: "asyncio.Task[None] | None" = field(default=None, init=False, repr=False)

    async def mount(self) -> None:
        """Load featured meals and run the restored search right away."""
        await asyncio.gather(self.load_featured(), self.search())

    async def load_featured(self) -> None:
        """Fetch the random featured list."""
        token = self._featured_requests.begin()
        try:
            meals = await self.catalog.get_random_batch(
                self.featured_count, token, require_results=self.require_featured
            )
        except RequestCancelledError:
            _logger.debug("Discarded stale featured meals")
            return
        except CatalogUnavailableError:
            if self._featured_requests.is_current(token):
                self.featured_error = FEATURED_ERROR
                self.initial_loading = False
            return
        if not self._featured_requests.is_current(token):
            return
        self.featured = meals
        self.featured_error = None
        self.initial_loading = False

    def set_query(self, text: str) -> None:
        """Update the free text and schedule a debounced search."""
        self.store.set_free_text(text)
        token = self._search_requests.begin()
        self._cancel_pending()
        self._pending = asyncio.get_running_loop().create_task(
            self._debounced_search(token)
        )

    async def search(self) -> None:
        """Search for the current free text immediately."""
        self._cancel_pending()
        await self._run_search(self._search_requests.begin())

    async def settle(self) -> None:
        """Wait until no debounced search is pending."""
        while self._pending is not None and not self._pending.done():
            await asyncio.gather(self._pending, return_exceptions=True)

    def close(self) -> None:
        """Cancel all outstanding work, e.g. when the view goes away."""
        self._featured_requests.cancel()
        self._search_requests.cancel()
        self._cancel_pending()

    def set_sort_key(self, key: SortKey) -> None:
        self.store.set_sort_key(key)

    def toggle_sort_order(self) -> None:
        self.store.toggle_sort_order()

    @property
    def has_query(self) -> bool:
        return bool(self.store.state.free_text.strip())

    @property
    def error(self) -> str | None:
        """Return the error of whichever list is on display."""
        return self.search_error if self.has_query else self.featured_error

    @property
    def origin(self) -> str:
        return "search" if self.has_query else "featured"

    @property
    def display_meals(self) -> list[MealSummary]:
        """Return search results (or featured meals) in the chosen order."""
        state = self.store.state
        meals = self.search_results if self.has_query else self.featured
        return sort_meals(meals, state.sort_key, state.sort_order)

    @property
    def show_empty_state(self) -> bool:
        return (
            not self.initial_loading
            and not self.loading
            and self.has_query
            and not self.error
            and not self.display_meals
        )

    def navigation_payload(self, index: int) -> NavigationPayload:
        """Build the payload for opening the meal at ``index`` of the display."""
        ids = tuple(meal.id for meal in self.display_meals)
        return NavigationPayload(ids=ids, index=index, origin=self.origin)

    async def _debounced_search(self, token: CancelToken) -> None:
        await asyncio.sleep(self.debounce_seconds)
        await self._run_search(token)

    async def _run_search(self, token: CancelToken) -> None:
        if not self._search_requests.is_current(token):
            return
        text = self.store.state.free_text.strip()
        if not text:
            self.search_results = []
            self.loading = False
            self.search_error = None
            return
        self.loading = True
        try:
            meals = await self.catalog.search_by_text(text, token)
        except RequestCancelledError:
            _logger.debug("Discarded stale search for %r", text)
            return
        except CatalogUnavailableError:
            if self._search_requests.is_current(token):
                self.search_error = SEARCH_ERROR
                self.search_results = []
                self.loading = False
            return
        if not self._search_requests.is_current(token):
            _logger.debug("Discarded stale search for %r", text)
            return
        self.search_results = meals
        self.search_error = None
        self.loading = False

    def _cancel_pending(self) -> None:
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = None
