"""Meal detail view with next/previous navigation."""

import logging
from dataclasses import dataclass, field

from meal_browser.domain.meals import MealDetail
from meal_browser.domain.navigation import NavigationPayload
from meal_browser.services.cancellation import RequestCancelledError, RequestTracker
from meal_browser.services.catalog import CatalogService, CatalogUnavailableError
from meal_browser.services.navigator import ListContextNavigator

NOT_FOUND_ERROR = "We could not find that meal."
DETAIL_ERROR = "Something went wrong fetching the meal."

_logger = logging.getLogger(__name__)


@dataclass
class DetailView:
    """Shows one meal and steps through the list it was opened from."""

    catalog: CatalogService
    navigator: ListContextNavigator = field(default_factory=ListContextNavigator)
    meal_id: str | None = None
    meal: MealDetail | None = None
    loading: bool = False
    error: str | None = None
    not_found: bool = False
    _requests: RequestTracker = field(
        default_factory=RequestTracker, init=False, repr=False
    )

    async def open(
        self, meal_id: str, payload: NavigationPayload | None = None
    ) -> None:
        """Enter the view for ``meal_id``.

        With a payload the navigator is bound to the originating list;
        without one (a direct link) navigation stays disabled.
        """
        if payload is None:
            self.navigator.unbind()
        else:
            self.navigator.bind(payload)
        await self.load(meal_id)

    async def step(self, offset: int) -> None:
        """Move to the next (+1) or previous (-1) meal of the list."""
        next_id = self.navigator.step(offset)
        if next_id is None:
            return
        await self.load(next_id)

    async def load(self, meal_id: str) -> None:
        """Fetch ``meal_id`` and store the outcome as view state."""
        token = self._requests.begin()
        self.meal_id = meal_id
        self.loading = True
        self.error = None
        self.not_found = False
        try:
            meal = await self.catalog.get_by_id(meal_id, token)
        except RequestCancelledError:
            _logger.debug("Discarded stale detail for %s", meal_id)
            return
        except CatalogUnavailableError:
            if self._requests.is_current(token):
                self.error = DETAIL_ERROR
                self.meal = None
                self.loading = False
            return
        if not self._requests.is_current(token):
            return
        self.loading = False
        if meal is None:
            self.error = NOT_FOUND_ERROR
            self.not_found = True
            self.meal = None
            return
        self.meal = meal

    def leave(self) -> None:
        """Leave the view: drop the list context and any fetch in flight."""
        self._requests.cancel()
        self.navigator.unbind()
