"""Map raw TheMealDB records into domain models."""

from collections.abc import Mapping

from meal_browser.domain.meals import Ingredient, MealDetail, MealSummary

INGREDIENT_SLOTS = 20

_INGREDIENT_FIELDS: tuple[tuple[str, str], ...] = tuple(
    (f"strIngredient{index}", f"strMeasure{index}")
    for index in range(1, INGREDIENT_SLOTS + 1)
)


def normalize_summary(
    raw: Mapping[str, object], fallback_category: str | None = None
) -> MealSummary:
    """Build a summary, using ``fallback_category`` when the record has none."""
    return MealSummary(
        id=str(raw["idMeal"]),
        name=_text(raw.get("strMeal")) or "",
        category=_text(raw.get("strCategory")) or fallback_category,
        area=_text(raw.get("strArea")),
        thumbnail=_text(raw.get("strMealThumb")) or "",
    )


def normalize_detail(raw: Mapping[str, object]) -> MealDetail:
    """Build a full detail record from a lookup payload."""
    summary = normalize_summary(raw)
    return MealDetail(
        id=summary.id,
        name=summary.name,
        category=summary.category,
        area=summary.area,
        thumbnail=summary.thumbnail,
        instructions=_text(raw.get("strInstructions")) or "",
        tags=extract_tags(raw.get("strTags")),
        youtube=_text(raw.get("strYoutube")) or None,
        source=_text(raw.get("strSource")) or None,
        ingredients=extract_ingredients(raw),
    )


def extract_ingredients(raw: Mapping[str, object]) -> tuple[Ingredient, ...]:
    """Collect filled ingredient slots 1..20 in slot order."""
    ingredients: list[Ingredient] = []
    for name_field, measure_field in _INGREDIENT_FIELDS:
        name = (_text(raw.get(name_field)) or "").strip()
        if not name:
            continue
        measure = (_text(raw.get(measure_field)) or "").strip()
        ingredients.append(Ingredient(ingredient=name, measure=measure))
    return tuple(ingredients)


def extract_tags(raw_tags: object) -> tuple[str, ...]:
    """Split a comma separated tag field, dropping blanks."""
    text = _text(raw_tags)
    if not text:
        return ()
    return tuple(tag.strip() for tag in text.split(",") if tag.strip())


def _text(value: object) -> str | None:
    if value is None:
        return None
    return str(value)
