"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict

from fastapi import FastAPI, HTTPException, Query, Request, Response, status

from meal_browser.api.models import NavigationStepRequest
from meal_browser.app_logging import configure_logging
from meal_browser.containers import AppContainer
from meal_browser.domain.meals import MealDetail, MealSummary
from meal_browser.domain.navigation import NavigationPayload
from meal_browser.services.catalog import CatalogUnavailableError
from meal_browser.services.detail_view import DetailView
from meal_browser.services.navigator import ListContextNavigator


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(debug=container.settings.debug)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/meals")
    async def list_meals(request: Request, response: Response) -> dict[str, object]:
        """Search results for ``q``, or featured meals when ``q`` is blank."""
        state_container: AppContainer = request.app.state.container
        view = state_container.list_view(request.url.query)
        await view.mount()
        if view.error:
            response.status_code = status.HTTP_502_BAD_GATEWAY
        return {
            "query": view.store.restorable,
            "origin": view.origin,
            "meals": [_summary(meal) for meal in view.display_meals],
            "empty": view.show_empty_state,
            "error": view.error,
        }

    @app.get("/categories")
    async def categories(request: Request) -> dict[str, object]:
        """Return the catalog's category vocabulary."""
        state_container: AppContainer = request.app.state.container
        try:
            loaded = await state_container.catalog_service.list_categories()
        except CatalogUnavailableError as exc:
            logger.warning("Category list unavailable: %s", exc)
            raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY) from exc
        return {"categories": [category.name for category in loaded]}

    @app.get("/gallery")
    async def gallery(request: Request, response: Response) -> dict[str, object]:
        """Merged meals of the selected categories."""
        state_container: AppContainer = request.app.state.container
        view = state_container.gallery_view(request.url.query)
        await view.mount()
        if view.error:
            response.status_code = status.HTTP_502_BAD_GATEWAY
        return {
            "query": view.store.restorable,
            "categories": [category.name for category in view.categories],
            "selected": list(view.store.state.selected_categories),
            "meals": [_summary(meal) for meal in view.display_meals],
            "empty": view.show_empty_state,
            "error": view.error,
        }

    @app.post("/meals/navigate")
    async def navigate(
        step: NavigationStepRequest, request: Request, response: Response
    ) -> dict[str, object]:
        """Step to the next or previous meal of the carried list context."""
        state_container: AppContainer = request.app.state.container
        view = state_container.detail_view()
        payload = NavigationPayload(
            ids=tuple(step.ids), index=step.index, origin=step.origin
        )
        try:
            view.navigator.bind(payload)
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        await view.step(step.offset)
        response.status_code = _detail_status(view)
        return _detail_body(view)

    @app.get("/meals/{meal_id}")
    async def meal_detail(
        meal_id: str,
        request: Request,
        response: Response,
        ids: list[str] = Query(default=[]),
        index: int | None = None,
        origin: str | None = None,
    ) -> dict[str, object]:
        """Meal detail, bound to a list context when ``ids`` and ``index`` are given."""
        state_container: AppContainer = request.app.state.container
        view = state_container.detail_view()
        payload = None
        if ids and index is not None:
            payload = NavigationPayload(ids=tuple(ids), index=index, origin=origin)
        try:
            await view.open(meal_id, payload)
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        response.status_code = _detail_status(view)
        return _detail_body(view)

    return app


def _summary(meal: MealSummary) -> dict[str, object]:
    return asdict(meal)


def _detail(meal: MealDetail) -> dict[str, object]:
    body = asdict(meal)
    body["instruction_paragraphs"] = meal.instruction_paragraphs
    return body


def _navigation(navigator: ListContextNavigator) -> dict[str, object]:
    context = navigator.context
    return {
        "ids": list(context.ordered_ids) if context else [],
        "index": context.current_index if context else None,
        "origin": context.origin if context else None,
        "disabled": navigator.navigation_disabled,
        "has_multiple": navigator.has_multiple,
        "hint": navigator.hint,
    }


def _detail_body(view: DetailView) -> dict[str, object]:
    return {
        "meal_id": view.meal_id,
        "meal": _detail(view.meal) if view.meal else None,
        "navigation": _navigation(view.navigator),
        "error": view.error,
    }


def _detail_status(view: DetailView) -> int:
    if view.not_found:
        return status.HTTP_404_NOT_FOUND
    if view.error:
        return status.HTTP_502_BAD_GATEWAY
    return status.HTTP_200_OK
