"""Domain models for catalog meals."""

from dataclasses import dataclass


@dataclass(frozen=True)
class MealSummary:
    """Lightweight meal record shown in list and gallery views."""

    id: str
    name: str
    category: str | None
    area: str | None
    thumbnail: str


@dataclass(frozen=True)
class Ingredient:
    """Ingredient line of a meal."""

    ingredient: str
    measure: str


@dataclass(frozen=True)
class MealDetail(MealSummary):
    """Full meal record shown in the detail view."""

    instructions: str
    tags: tuple[str, ...]
    youtube: str | None
    source: str | None
    ingredients: tuple[Ingredient, ...]

    @property
    def instruction_paragraphs(self) -> list[str]:
        """Return non-blank instruction paragraphs split on line breaks."""
        return [line.strip() for line in self.instructions.splitlines() if line.strip()]


@dataclass(frozen=True)
class Category:
    """Catalog category name."""

    name: str
