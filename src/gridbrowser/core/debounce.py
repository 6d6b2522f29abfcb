"""Trailing-edge, change-gated debounce for the search box."""

from typing import Callable, Optional, Protocol

from loguru import logger

DEFAULT_DEBOUNCE_MS = 800


class TimerHandle(Protocol):
    def stop(self) -> None: ...


# Scheduler signature matches ``Widget.set_timer(delay_seconds, callback)``.
Scheduler = Callable[[float, Callable[[], None]], TimerHandle]


class SearchDebouncer:
    """Turns raw keystrokes into committed search terms.

    Every call to :meth:`feed` cancels the pending timer and schedules a new
    one, so only the last value typed within the window is considered. When
    the timer fires, the trimmed value is committed and ``on_commit`` is called
    only if it differs from the previous commit.

    The debouncer owns its timer. :meth:`cancel` (or leaving the ``with``
    block) guarantees no callback fires afterwards.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        on_commit: Callable[[str], None],
        debounce_ms: int = DEFAULT_DEBOUNCE_MS,
    ):
        if debounce_ms < 0:
            raise ValueError(f"debounce_ms must not be negative, got {debounce_ms}")
        self._scheduler = scheduler
        self._on_commit = on_commit
        self.debounce_ms = debounce_ms
        self.raw_input = ""
        self.committed_term = ""
        self._timer: Optional[TimerHandle] = None

    def __enter__(self) -> "SearchDebouncer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cancel()

    @property
    def pending(self) -> bool:
        return self._timer is not None

    def feed(self, value: str) -> None:
        """Record a keystroke and restart the quiet-period timer."""
        self.raw_input = value
        self.cancel()
        self._timer = self._scheduler(self.debounce_ms / 1000, self._settle)

    def cancel(self) -> None:
        """Stop the pending timer, if any."""
        if self._timer is not None:
            self._timer.stop()
            self._timer = None

    def reset(self) -> None:
        """Drop the pending timer and forget both the input and the last commit."""
        self.cancel()
        self.raw_input = ""
        self.committed_term = ""

    def _settle(self) -> None:
        self._timer = None
        term = self.raw_input.strip()
        if term == self.committed_term:
            return
        self.committed_term = term
        logger.debug(f"Search committed: '{term}'")
        self._on_commit(term)
