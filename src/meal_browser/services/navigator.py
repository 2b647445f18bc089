"""Next/previous navigation through the list a detail view was opened from."""

from dataclasses import replace

from meal_browser.domain.navigation import ListContext, NavigationPayload

IDLE = "IDLE"
BOUND = "BOUND"

DISABLED_HINT = "Visit this page from the search or gallery to enable quick navigation."
SINGLE_ITEM_HINT = "Keep browsing to build a list for quick navigation."


class ListContextNavigator:
    """State machine owning the list context of a detail view.

    The navigator is ``IDLE`` until it is bound with the payload attached to
    a list-to-detail navigation. Stepping replaces the current index and never
    the id snapshot. Only ``unbind`` returns it to ``IDLE``; a failed detail
    fetch leaves the context untouched.
    """

    def __init__(self) -> None:
        self._context: ListContext | None = None

    @property
    def context(self) -> ListContext | None:
        return self._context

    @property
    def state(self) -> str:
        return IDLE if self._context is None else BOUND

    def bind(self, payload: NavigationPayload) -> ListContext:
        """Capture the originating list and the clicked index."""
        self._context = ListContext(
            ordered_ids=tuple(payload.ids),
            current_index=payload.index,
            origin=payload.origin,
        )
        return self._context

    def unbind(self) -> None:
        """Drop the list context."""
        self._context = None

    def step(self, offset: int) -> str | None:
        """Move by ``offset`` (+1 or -1) with wraparound and return the new id.

        Returns ``None`` without changing anything when there is no context or
        the list is empty.
        """
        if offset not in (1, -1):
            raise ValueError(f"Offset must be 1 or -1, got {offset}")
        context = self._context
        if context is None or not context.ordered_ids:
            return None
        length = len(context.ordered_ids)
        next_index = ((context.current_index + offset) % length + length) % length
        self._context = replace(context, current_index=next_index)
        return self._context.current_id

    def payload(self) -> NavigationPayload | None:
        """Return the current context as a payload for the next navigation."""
        if self._context is None:
            return None
        return NavigationPayload(
            ids=self._context.ordered_ids,
            index=self._context.current_index,
            origin=self._context.origin,
        )

    @property
    def navigation_disabled(self) -> bool:
        """Controls are disabled without a context or with an empty list."""
        return self._context is None or not self._context.ordered_ids

    @property
    def has_multiple(self) -> bool:
        return self._context is not None and len(self._context.ordered_ids) > 1

    @property
    def hint(self) -> str | None:
        """Return the hint shown next to the navigation controls."""
        if self.navigation_disabled:
            return DISABLED_HINT
        if not self.has_multiple:
            return SINGLE_ITEM_HINT
        return None
