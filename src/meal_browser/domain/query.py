"""Domain models for list query state."""

from dataclasses import dataclass
from typing import Literal

SortKey = Literal["name", "category", "area"]
SortOrder = Literal["asc", "desc"]

SORT_KEYS: tuple[SortKey, ...] = ("name", "category", "area")
SORT_ORDERS: tuple[SortOrder, ...] = ("asc", "desc")
DEFAULT_SORT_KEY: SortKey = "name"
DEFAULT_SORT_ORDER: SortOrder = "asc"


@dataclass(frozen=True)
class QueryState:
    """Free text, sort and category selection of a listing view.

    ``free_text`` only drives the list view and ``selected_categories`` only
    drives the gallery view. Categories keep selection order.
    """

    free_text: str = ""
    sort_key: SortKey = DEFAULT_SORT_KEY
    sort_order: SortOrder = DEFAULT_SORT_ORDER
    selected_categories: tuple[str, ...] = ()
