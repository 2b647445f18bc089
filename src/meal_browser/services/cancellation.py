"""Cancellation tokens for stale asynchronous work."""

from dataclasses import dataclass


class RequestCancelledError(Exception):
    """Raised when a request's token was cancelled before it could commit."""


@dataclass
class CancelToken:
    """Marks a request batch; cancelled tokens must not commit results."""

    generation: int
    cancelled: bool = False

    def cancel(self) -> None:
        """Mark the request as stale."""
        self.cancelled = True

    def raise_if_cancelled(self) -> None:
        """Raise ``RequestCancelledError`` if the token was cancelled."""
        if self.cancelled:
            raise RequestCancelledError(
                f"Request generation {self.generation} cancelled"
            )


class RequestTracker:
    """Issues tokens and remembers which one is current."""

    def __init__(self) -> None:
        self._generation = 0
        self._current: CancelToken | None = None

    @property
    def generation(self) -> int:
        """Return the generation of the most recently issued token."""
        return self._generation

    def begin(self) -> CancelToken:
        """Cancel the current token and issue a new one."""
        self.cancel()
        self._generation += 1
        self._current = CancelToken(generation=self._generation)
        return self._current

    def cancel(self) -> None:
        """Cancel the current token, if any."""
        if self._current is not None:
            self._current.cancel()

    def is_current(self, token: CancelToken) -> bool:
        """Return True if ``token`` is the latest one and still active."""
        return token is self._current and not token.cancelled
