"""Mapping from key events to quick search actions.

The dispatcher holds no state: the same event and configuration always
produce the same action.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from quicksearch.config import QuickSearchConfig
from quicksearch.keys import KeyEvent, is_escape_sequence

ActionKind = Literal[
    "insertChar",
    "clearQuery",
    "commit",
    "deleteLast",
    "navigateUp",
    "navigateDown",
    "cancel",
]


@dataclass(frozen=True)
class Action:
    kind: ActionKind
    char: str = ""


CLEAR_QUERY = Action("clearQuery")
COMMIT = Action("commit")
DELETE_LAST = Action("deleteLast")
NAVIGATE_UP = Action("navigateUp")
NAVIGATE_DOWN = Action("navigateDown")
CANCEL = Action("cancel")


def insert_char(char: str) -> Action:
    return Action("insertChar", char)


def _is_printable(text: str) -> bool:
    return bool(text) and text.isprintable()


def dispatch(  # noqa: C901
    event: KeyEvent, config: QuickSearchConfig
) -> Action | None:
    """Return the action for *event*, or ``None`` when it is ignored.

    Rules are checked in order; the first one that applies wins.
    """
    if not config.focus:
        return None

    raw = event.raw_char
    name = event.name

    if name is None and _is_printable(raw) and not is_escape_sequence(raw):
        return insert_char(raw)

    if raw in config.clear_query_chars:
        return CLEAR_QUERY

    if name in ("enter", "return"):
        return COMMIT
    if name == "backspace":
        return DELETE_LAST
    if name == "up":
        return NAVIGATE_UP
    if name == "down":
        return NAVIGATE_DOWN
    if name == "tab":
        return NAVIGATE_UP if event.shift else NAVIGATE_DOWN
    if name == "escape" or (event.ctrl and name == "c"):
        return CANCEL

    # Unhandled control sequences are never inserted as literal text.
    if is_escape_sequence(event.sequence or raw):
        return None
    if not _is_printable(raw):
        return None

    return insert_char(raw)
