"""
BannerCarousel — looping banner state machine.

    index:  -1   0   1  ...  N-1   N
                 └── real slides ──┘
    -1 and N are clones used for the wrap animation; a settle snaps
    them back to N-1 and 0 once the transition is over.

Time never advances on its own: callers drive tick() from a clock
(see CarouselDriver).
"""

from __future__ import annotations

import logging

from storefront._observable import Observable
from storefront._types import Clock

logger = logging.getLogger(__name__)

DEFAULT_TRANSITION_MS = 500.0
DEFAULT_AUTOPLAY_MS = 5000.0


class BannerCarousel(Observable):
    """
    Explicit carousel state: index, transitioning fence, settle deadline
    and the auto-advance schedule.

    Example:
        carousel = BannerCarousel(3, clock)
        carousel.next()           # index 1
        carousel.prev()           # index 0
        carousel.prev()           # index -1, fenced
        carousel.next()           # no-op until the settle
        clock.advance(500)
        carousel.tick()           # snapped to 2
    """

    def __init__(
        self,
        slide_count: int,
        clock: Clock,
        transition_ms: float = DEFAULT_TRANSITION_MS,
        autoplay_ms: float | None = DEFAULT_AUTOPLAY_MS,
    ) -> None:
        if slide_count < 1:
            raise ValueError("slide_count must be positive")
        super().__init__()
        self._count = slide_count
        self._clock = clock
        self._transition_ms = transition_ms
        self._autoplay_ms = autoplay_ms
        self._index = 0
        self._transitioning = False
        self._settle_at: float | None = None
        self._next_auto_at: float | None = (
            clock.now() + autoplay_ms if autoplay_ms is not None else None
        )
        self._closed = False

    # ───────────────────────────────────────────────────────────────────────
    # State
    # ───────────────────────────────────────────────────────────────────────

    @property
    def slide_count(self) -> int:
        return self._count

    @property
    def index(self) -> int:
        """Raw position, in [-1, N]."""
        return self._index

    @property
    def display_index(self) -> int:
        return self._index % self._count

    @property
    def transitioning(self) -> bool:
        return self._transitioning

    @property
    def closed(self) -> bool:
        return self._closed

    def next_deadline(self) -> float | None:
        """Earliest instant at which tick() has work to do."""
        if self._closed:
            return None
        deadlines = [d for d in (self._settle_at, self._next_auto_at) if d is not None]
        return min(deadlines) if deadlines else None

    # ───────────────────────────────────────────────────────────────────────
    # Transitions
    # ───────────────────────────────────────────────────────────────────────

    def _move(self, index: int) -> bool:
        if self._closed or self._transitioning:
            return False
        self._index = index
        # Only the clone positions hold the fence until the snap.
        if index in (-1, self._count):
            self._transitioning = True
            self._settle_at = self._clock.now() + self._transition_ms
        self._notify()
        return True

    def next(self) -> bool:
        return self._move(self._index + 1)

    def prev(self) -> bool:
        return self._move(self._index - 1)

    def go_to(self, index: int) -> bool:
        """Dot navigation to a real slide."""
        if not 0 <= index < self._count:
            raise IndexError(f"slide {index} out of range [0, {self._count})")
        if self._closed or index == self._index:
            return False
        # Dots jump straight to a real slide, even mid-transition.
        self._index = index
        self._transitioning = False
        self._settle_at = None
        self._notify()
        return True

    def _settle(self) -> None:
        if self._index == self._count:
            self._index = 0
        elif self._index == -1:
            self._index = self._count - 1
        self._transitioning = False
        self._settle_at = None

    def tick(self) -> None:
        """Apply every deadline that has passed."""
        if self._closed:
            return
        now = self._clock.now()
        changed = False

        if self._settle_at is not None and now >= self._settle_at:
            self._settle()
            changed = True

        if self._next_auto_at is not None and self._autoplay_ms is not None and now >= self._next_auto_at:
            missed = int((now - self._next_auto_at) // self._autoplay_ms)
            self._next_auto_at += (missed + 1) * self._autoplay_ms
            if not self.next():
                logger.debug("Auto-advance dropped at %.0f: transition in flight", now)

        if changed:
            self._notify()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._settle_at = None
        self._next_auto_at = None
        self._notify()


__all__ = ("BannerCarousel", "DEFAULT_TRANSITION_MS", "DEFAULT_AUTOPLAY_MS")
