"""
RelatedScroller — bounded window over the related products strip.
"""

from __future__ import annotations

from collections.abc import Sequence

from storefront._observable import Observable


class RelatedScroller[T](Observable):
    """Window of `visible` items, stepped one at a time. No wrap, no autoplay."""

    def __init__(self, items: Sequence[T], visible: int = 3) -> None:
        if visible < 1:
            raise ValueError("visible must be positive")
        super().__init__()
        self._items = tuple(items)
        self._visible = visible
        self._index = 0

    @property
    def index(self) -> int:
        return self._index

    @property
    def max_index(self) -> int:
        return max(0, len(self._items) - self._visible)

    @property
    def can_next(self) -> bool:
        return self._index < self.max_index

    @property
    def can_prev(self) -> bool:
        return self._index > 0

    @property
    def items(self) -> tuple[T, ...]:
        return self._items

    def visible_items(self) -> tuple[T, ...]:
        return self._items[self._index : self._index + self._visible]

    def next(self) -> bool:
        if not self.can_next:
            return False
        self._index += 1
        self._notify()
        return True

    def prev(self) -> bool:
        if not self.can_prev:
            return False
        self._index -= 1
        self._notify()
        return True

    def reset(self, items: Sequence[T]) -> None:
        self._items = tuple(items)
        self._index = 0
        self._notify()


__all__ = ("RelatedScroller",)
