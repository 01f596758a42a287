"""
Transient user-facing notices.

A notice is shown until its dismissal deadline passes. Showing a new
notice replaces the current one. Reading is side-effect free; expire()
clears a lapsed notice and notifies.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront._observable import Observable
from storefront._types import Clock, MonotonicClock

DEFAULT_NOTICE_MS = 2000.0


@dataclass(frozen=True, slots=True)
class Notice:
    message: str
    expires_at: float


class Notices(Observable):
    """Single-slot notice board driven by a clock."""

    def __init__(self, clock: Clock | None = None, duration_ms: float = DEFAULT_NOTICE_MS) -> None:
        super().__init__()
        self._clock = clock or MonotonicClock()
        self._duration_ms = duration_ms
        self._current: Notice | None = None

    def show(self, message: str) -> Notice:
        notice = Notice(message, self._clock.now() + self._duration_ms)
        self._current = notice
        self._notify()
        return notice

    def _expired(self) -> bool:
        return self._current is not None and self._clock.now() >= self._current.expires_at

    @property
    def current(self) -> str:
        """Message on display, or an empty string once dismissed or past its deadline."""
        if self._current is None or self._expired():
            return ""
        return self._current.message

    def expire(self) -> bool:
        """Drop the notice if its deadline has passed. Call from a timer."""
        if not self._expired():
            return False
        self._current = None
        self._notify()
        return True

    def dismiss(self) -> None:
        if self._current is not None:
            self._current = None
            self._notify()


__all__ = ("Notice", "Notices", "DEFAULT_NOTICE_MS")
