"""Default line renderer for the quick search view model."""

from __future__ import annotations

from typing import Protocol

from quicksearch.utils import truncate_to_width
from quicksearch.view import ScrollInfo, ViewModel, VisibleItem

_RESET = "\x1b[0m"


def _fg(hex_color: str):
    r, g, b = (int(hex_color[i : i + 2], 16) for i in (1, 3, 5))

    def paint(text: str) -> str:
        return f"\x1b[38;2;{r};{g};{b}m{text}{_RESET}" if text else text

    return paint


class QuickSearchTheme(Protocol):
    """Pieces a host can restyle without touching the layout."""

    def indicator(self, is_selected: bool) -> str: ...

    def item(self, text: str, is_selected: bool) -> str: ...

    def highlight(self, text: str) -> str: ...

    def status(self, label: str, query: str, has_match: bool) -> str: ...

    def scroll_info(self, text: str) -> str: ...

    def no_match(self, text: str) -> str: ...


class DefaultTheme:
    """Green selection, violet match highlight, blue query."""

    _selected = staticmethod(_fg("#00FF00"))
    _highlight = staticmethod(_fg("#6C71C4"))
    _query = staticmethod(_fg("#74BEFF"))

    def indicator(self, is_selected: bool) -> str:
        return self._selected("> ") if is_selected else "  "

    def item(self, text: str, is_selected: bool) -> str:
        # Highlighted spans reset the color, so re-apply it after each one.
        if not is_selected:
            return text
        return self._selected(text.replace(_RESET, _RESET + "\x1b[38;2;0;255;0m"))

    def highlight(self, text: str) -> str:
        return self._highlight(text)

    def status(self, label: str, query: str, has_match: bool) -> str:
        return f"{label or 'Query'}: {self._query(query)}"

    def scroll_info(self, text: str) -> str:
        return self._highlight(text)

    def no_match(self, text: str) -> str:
        return text


class PlainTheme:
    """Theme without any escape codes; handy for logs and tests."""

    def indicator(self, is_selected: bool) -> str:
        return "> " if is_selected else "  "

    def item(self, text: str, is_selected: bool) -> str:
        return text

    def highlight(self, text: str) -> str:
        return text

    def status(self, label: str, query: str, has_match: bool) -> str:
        return f"{label or 'Query'}: {query}"

    def scroll_info(self, text: str) -> str:
        return text

    def no_match(self, text: str) -> str:
        return text


def scroll_text(info: ScrollInfo) -> str:
    return (
        f"Viewing {info.start}-{info.end} of {info.total_matches} matching items "
        f"({info.total_items} items overall)"
    )


def render_item(entry: VisibleItem, theme: QuickSearchTheme) -> str:
    label = entry.item.label
    pre = label[: entry.match_start]
    match = label[entry.match_start : entry.match_end]
    post = label[entry.match_end :]
    text = pre + theme.highlight(match) + post
    return theme.indicator(entry.is_selected) + theme.item(text, entry.is_selected)


def render_lines(
    view: ViewModel, width: int, theme: QuickSearchTheme | None = None
) -> list[str]:
    """Render *view* into terminal lines no wider than *width*."""
    theme = theme or DefaultTheme()
    lines = [theme.status(view.label, view.query, view.has_match)]

    if not view.visible_items:
        lines.append(theme.no_match("No matches"))
    else:
        lines.extend(render_item(entry, theme) for entry in view.visible_items)

    if view.scrolled is not None:
        lines.append(theme.scroll_info(scroll_text(view.scrolled)))

    return [truncate_to_width(line, width) for line in lines]
