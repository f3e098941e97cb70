"""Scrolling window that keeps the cursor on screen."""

from __future__ import annotations

from dataclasses import dataclass


def recompute(cursor: int, start: int, size: int, n: int) -> int:
    """Return the window start that keeps *cursor* visible.

    Pure and idempotent: feeding the result back in returns it unchanged.
    """
    size = max(1, size)
    if cursor < start:
        start = cursor
    elif cursor >= start + size:
        start = cursor - size + 1
    return min(max(0, start), max(0, n - size))


@dataclass(frozen=True, slots=True)
class ViewWindow:
    """Contiguous visible slice ``[start, start + size)`` of the options."""

    start: int = 0
    size: int = 1

    def follow(self, cursor: int, n: int) -> "ViewWindow":
        return ViewWindow(start=recompute(cursor, self.start, self.size, n), size=self.size)

    @property
    def has_more_above(self) -> bool:
        return self.start > 0

    def has_more_below(self, n: int) -> bool:
        return self.start + self.size < n

    def visible_range(self, n: int) -> range:
        return range(self.start, min(n, self.start + self.size))


__all__ = ["ViewWindow", "recompute"]
