"""Tests for the search list view."""

import asyncio

from meal_browser.domain.navigation import NavigationPayload
from meal_browser.services.catalog import CatalogService
from meal_browser.services.list_view import FEATURED_ERROR, SEARCH_ERROR, ListView
from meal_browser.services.query_state import QueryStateStore
from tests.conftest import FakeMealDbClient


def _view(catalog_service: CatalogService, restorable: str = "") -> ListView:
    return ListView(
        catalog=catalog_service,
        store=QueryStateStore.from_restorable(restorable),
        debounce_seconds=0.03,
        featured_count=3,
    )


def test_query_cleared_within_debounce_never_fetches(
    catalog_service: CatalogService, mealdb_client: FakeMealDbClient
) -> None:
    view = _view(catalog_service)

    async def scenario() -> None:
        view.set_query("chicken")
        await asyncio.sleep(0.01)
        view.set_query("")
        await view.settle()

    asyncio.run(scenario())

    assert mealdb_client.calls_to("search") == []
    assert view.search_results == []
    assert view.store.restorable == ""


def test_only_final_keystroke_is_fetched(
    catalog_service: CatalogService, mealdb_client: FakeMealDbClient
) -> None:
    view = _view(catalog_service)

    async def scenario() -> None:
        view.set_query("chi")
        await asyncio.sleep(0.01)
        view.set_query("chick")
        await asyncio.sleep(0.01)
        view.set_query("chicken")
        await view.settle()

    asyncio.run(scenario())

    assert mealdb_client.calls_to("search") == ["chicken"]
    assert view.store.restorable == "q=chicken"
    assert [meal.name for meal in view.display_meals] == [
        "brown stew chicken",
        "Chicken Handi",
        "Teriyaki Chicken Casserole",
    ]
    assert view.origin == "search"


def test_stale_search_in_flight_is_discarded(
    catalog_service: CatalogService, mealdb_client: FakeMealDbClient
) -> None:
    mealdb_client.search_delay = 0.1
    view = _view(catalog_service)

    async def scenario() -> None:
        view.set_query("chicken")
        await asyncio.sleep(0.06)
        assert view.loading
        view.set_query("")
        await view.settle()
        await asyncio.sleep(0.1)

    asyncio.run(scenario())

    assert mealdb_client.calls_to("search") == ["chicken"]
    assert view.search_results == []
    assert not view.loading


def test_search_failure_sets_view_error(
    catalog_service: CatalogService, mealdb_client: FakeMealDbClient
) -> None:
    mealdb_client.failing.add("search")
    view = _view(catalog_service, "q=chicken")

    asyncio.run(view.search())

    assert view.error == SEARCH_ERROR
    assert view.search_results == []
    assert not view.loading


def test_mount_restores_query_and_sort(
    catalog_service: CatalogService, mealdb_client: FakeMealDbClient
) -> None:
    view = _view(catalog_service, "q=chicken&order=desc")

    asyncio.run(view.mount())

    assert [meal.id for meal in view.display_meals] == ["52772", "52795", "52940"]
    assert len(view.featured) == 3
    assert not view.initial_loading
    assert view.error is None


def test_featured_meals_without_query(catalog_service: CatalogService) -> None:
    view = _view(catalog_service)

    asyncio.run(view.mount())

    assert view.origin == "featured"
    assert [meal.name for meal in view.display_meals] == [
        "Ayam Percik",
        "Bakewell tart",
        "Kumpir",
    ]
    assert view.navigation_payload(1) == NavigationPayload(
        ids=("12", "11", "10"), index=1, origin="featured"
    )
    assert not view.show_empty_state


def test_featured_failures_are_tolerated(
    catalog_service: CatalogService, mealdb_client: FakeMealDbClient
) -> None:
    mealdb_client.random_meals = [None]
    view = _view(catalog_service)

    asyncio.run(view.load_featured())

    assert view.featured == []
    assert view.error is None
    assert not view.initial_loading


def test_empty_state_for_query_without_matches(catalog_service: CatalogService) -> None:
    view = _view(catalog_service, "q=zzz")

    asyncio.run(view.mount())

    assert view.show_empty_state


def test_sort_changes_do_not_refetch(
    catalog_service: CatalogService, mealdb_client: FakeMealDbClient
) -> None:
    view = _view(catalog_service, "q=chicken")
    asyncio.run(view.search())

    view.set_sort_key("area")
    view.toggle_sort_order()

    assert mealdb_client.calls_to("search") == ["chicken"]
    assert view.store.restorable == "q=chicken&sort=area&order=desc"
    assert [meal.id for meal in view.display_meals] == ["52772", "52795", "52940"]


def test_featured_success_keeps_restored_search_error(
    catalog_service: CatalogService, mealdb_client: FakeMealDbClient
) -> None:
    mealdb_client.random_delay = 0.05
    mealdb_client.failing.add("search")
    view = _view(catalog_service, "q=chicken")

    asyncio.run(view.mount())

    assert len(view.featured) == 3
    assert view.featured_error is None
    assert view.search_error == SEARCH_ERROR
    assert view.error == SEARCH_ERROR
    assert not view.show_empty_state


def test_featured_error_shown_only_without_query(
    catalog_service: CatalogService, mealdb_client: FakeMealDbClient
) -> None:
    mealdb_client.random_meals = [None]
    view = ListView(
        catalog=catalog_service,
        store=QueryStateStore.from_restorable("q=chicken"),
        featured_count=2,
        require_featured=True,
    )

    asyncio.run(view.mount())

    assert view.featured_error == FEATURED_ERROR
    assert view.error is None

    view.store.set_free_text("")

    assert view.error == FEATURED_ERROR
