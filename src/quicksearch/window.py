"""Selection and scroll window over the match set.

The window is a pair ``(selection, start)``: ``selection`` indexes the match
set, ``start`` is the first row shown when the view is limited. Navigation
wraps around at both ends; when limited, the window follows the selection one
row at a time.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class NavigationWindow:
    selection: int = 0
    start: int = 0


class WindowManager:
    """Navigation over a match set of a given size.

    The match count is passed to every operation so the window never holds a
    stale copy of it.
    """

    def __init__(self, limit: int = 0) -> None:
        self._limit = limit
        self._window = NavigationWindow()

    @property
    def selection(self) -> int:
        return self._window.selection

    @property
    def start(self) -> int:
        return self._window.start

    @property
    def window(self) -> NavigationWindow:
        return NavigationWindow(self._window.selection, self._window.start)

    def is_scrolling(self, count: int) -> bool:
        return self._limit > 0 and count > self._limit

    def reset(self) -> None:
        self._window = NavigationWindow()

    def move_up(self, count: int) -> None:
        if count == 0:
            return
        selection, start = self._window.selection, self._window.start
        if selection == 0:
            self._window.selection = count - 1
            if self.is_scrolling(count):
                self._window.start = count - self._limit
            return
        self._window.selection = selection - 1
        if self.is_scrolling(count) and selection - start <= 1 and start > 0:
            self._window.start = start - 1

    def move_down(self, count: int) -> None:
        if count == 0:
            return
        selection, start = self._window.selection, self._window.start
        if selection == count - 1:
            self._window = NavigationWindow()
            return
        selection += 1
        self._window.selection = selection
        if self.is_scrolling(count) and selection - start >= self._limit - 1:
            self._window.start = min(start + 1, count - self._limit)

    def clamp(self, count: int) -> None:
        """Pull the window back inside a match set of *count* items."""
        if count == 0:
            self.reset()
            return
        selection = min(max(self._window.selection, 0), count - 1)
        if not self.is_scrolling(count):
            self._window = NavigationWindow(selection, 0)
            return
        start = min(max(self._window.start, 0), count - self._limit)
        if selection < start:
            start = selection
        elif selection > start + self._limit - 1:
            start = selection - self._limit + 1
        self._window = NavigationWindow(selection, start)

    def place(self, index: int, count: int) -> None:
        """Select *index* (clamped) with the lowest start that shows it."""
        if count == 0:
            self.reset()
            return
        selection = min(max(index, 0), count - 1)
        start = 0
        if self.is_scrolling(count):
            start = min(max(0, selection - self._limit + 1), count - self._limit)
        self._window = NavigationWindow(selection, start)
