"""Ordering of meal summaries."""

from collections.abc import Iterable

from meal_browser.domain.meals import MealSummary
from meal_browser.domain.query import SORT_KEYS, SortKey, SortOrder


def sort_meals(
    meals: Iterable[MealSummary], key: SortKey, order: SortOrder = "asc"
) -> list[MealSummary]:
    """Sort meals by a field, case-insensitively.

    Missing values compare as the empty string. The sort is stable in both
    directions: meals with equal keys keep their input order.
    """
    if key not in SORT_KEYS:
        raise ValueError(f"Unknown sort key: {key}")
    return sorted(
        meals,
        key=lambda meal: (getattr(meal, key) or "").lower(),
        reverse=order == "desc",
    )
