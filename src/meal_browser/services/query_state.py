"""Restorable query string encoding of list and gallery state."""

from collections.abc import Iterable
from dataclasses import replace

import httpx

from meal_browser.domain.query import (
    DEFAULT_SORT_KEY,
    DEFAULT_SORT_ORDER,
    SORT_KEYS,
    SORT_ORDERS,
    QueryState,
    SortKey,
    SortOrder,
)

_QUERY_PARAM = "q"
_SORT_PARAM = "sort"
_ORDER_PARAM = "order"
_CATEGORY_PARAM = "category"


def encode_query_state(state: QueryState) -> str:
    """Encode state as a query string, omitting default values."""
    items: list[tuple[str, str]] = []
    if state.free_text:
        items.append((_QUERY_PARAM, state.free_text))
    if state.sort_key != DEFAULT_SORT_KEY:
        items.append((_SORT_PARAM, state.sort_key))
    if state.sort_order != DEFAULT_SORT_ORDER:
        items.append((_ORDER_PARAM, state.sort_order))
    items.extend((_CATEGORY_PARAM, category) for category in state.selected_categories)
    return str(httpx.QueryParams(items))


def decode_query_state(raw: str | None) -> QueryState:
    """Decode a query string; unknown sort values fall back to defaults."""
    params = httpx.QueryParams((raw or "").lstrip("?"))
    sort_key = params.get(_SORT_PARAM)
    sort_order = params.get(_ORDER_PARAM)
    return QueryState(
        free_text=params.get(_QUERY_PARAM) or "",
        sort_key=sort_key if sort_key in SORT_KEYS else DEFAULT_SORT_KEY,
        sort_order=sort_order if sort_order in SORT_ORDERS else DEFAULT_SORT_ORDER,
        selected_categories=_unique(params.get_list(_CATEGORY_PARAM)),
    )


def _unique(categories: Iterable[str]) -> tuple[str, ...]:
    seen: dict[str, None] = {}
    for category in categories:
        if category.strip():
            seen.setdefault(category, None)
    return tuple(seen)


class QueryStateStore:
    """Holds the current query state and its restorable string.

    Every mutation replaces the state and re-encodes ``restorable`` right
    away, so the string is always what a reload would decode.
    """

    def __init__(self, state: QueryState | None = None) -> None:
        self._state = state or QueryState()
        self._restorable = encode_query_state(self._state)

    @classmethod
    def from_restorable(cls, raw: str | None) -> "QueryStateStore":
        """Create a store from a restorable query string."""
        return cls(decode_query_state(raw))

    @property
    def state(self) -> QueryState:
        return self._state

    @property
    def restorable(self) -> str:
        return self._restorable

    def set_free_text(self, text: str) -> QueryState:
        """Replace the free text query."""
        return self._commit(replace(self._state, free_text=text))

    def set_sort_key(self, key: SortKey) -> QueryState:
        """Change the sort field."""
        if key not in SORT_KEYS:
            raise ValueError(f"Unknown sort key: {key}")
        return self._commit(replace(self._state, sort_key=key))

    def set_sort_order(self, order: SortOrder) -> QueryState:
        """Change the sort direction."""
        if order not in SORT_ORDERS:
            raise ValueError(f"Unknown sort order: {order}")
        return self._commit(replace(self._state, sort_order=order))

    def toggle_sort_order(self) -> QueryState:
        """Flip between ascending and descending order."""
        order: SortOrder = "desc" if self._state.sort_order == "asc" else "asc"
        return self._commit(replace(self._state, sort_order=order))

    def toggle_category(self, category: str) -> QueryState:
        """Select a category, or deselect it if already selected."""
        selected = self._state.selected_categories
        if category in selected:
            updated = tuple(value for value in selected if value != category)
        else:
            updated = _unique((*selected, category))
        return self._commit(replace(self._state, selected_categories=updated))

    def select_categories(self, categories: Iterable[str]) -> QueryState:
        """Replace the category selection, keeping the given order."""
        return self._commit(
            replace(self._state, selected_categories=_unique(categories))
        )

    def _commit(self, state: QueryState) -> QueryState:
        self._state = state
        self._restorable = encode_query_state(state)
        return state
