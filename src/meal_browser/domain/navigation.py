"""Domain models for list-to-detail navigation."""

from dataclasses import dataclass


@dataclass(frozen=True)
class NavigationPayload:
    """Ordered ids and clicked index handed from a list to the detail view."""

    ids: tuple[str, ...]
    index: int
    origin: str | None = None


@dataclass(frozen=True)
class ListContext:
    """Snapshot of the originating list and the current position in it."""

    ordered_ids: tuple[str, ...]
    current_index: int
    origin: str | None = None

    def __post_init__(self) -> None:
        if self.ordered_ids and not 0 <= self.current_index < len(self.ordered_ids):
            raise ValueError(
                f"Index {self.current_index} is out of range for "
                f"{len(self.ordered_ids)} ids"
            )

    @property
    def current_id(self) -> str | None:
        """Return the id at the current index, if any."""
        if not self.ordered_ids:
            return None
        return self.ordered_ids[self.current_index]
