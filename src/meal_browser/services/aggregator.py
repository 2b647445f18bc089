"""Merge per-category result sets into one list."""

from collections.abc import Iterable, Sequence

from meal_browser.domain.meals import MealSummary


def aggregate(result_sets: Iterable[Sequence[MealSummary]]) -> list[MealSummary]:
    """Merge result sets by meal id.

    A duplicate id takes the record from the later result set but keeps the
    position where the id was first seen.
    """
    unique: dict[str, MealSummary] = {}
    for meals in result_sets:
        for meal in meals:
            unique[meal.id] = meal
    return list(unique.values())
