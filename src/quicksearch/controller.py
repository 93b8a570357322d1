"""Selection controller: applies actions to the query and the window."""

from __future__ import annotations

import logging
from typing import Callable, Sequence

from quicksearch.config import QuickSearchConfig
from quicksearch.dispatch import Action, dispatch
from quicksearch.items import EMPTY_ITEM, Item
from quicksearch.keys import KeyEvent
from quicksearch.matching import matches
from quicksearch.query import QueryState
from quicksearch.window import WindowManager

logger = logging.getLogger(__name__)


class SelectionController:
    """Reducer over ``(query, window)`` driven by dispatched actions.

    The match set is cached and only recomputed when the query or the items
    change; navigation never touches it.
    """

    def __init__(
        self,
        items: Sequence[Item],
        on_select: Callable[[Item], None],
        config: QuickSearchConfig | None = None,
        on_cancel: Callable[[], None] | None = None,
    ) -> None:
        self.config = config or QuickSearchConfig()
        self.on_select = on_select
        self.on_cancel = on_cancel

        self._items: list[Item] = list(items)
        self._query = QueryState(
            case_sensitive=self.config.case_sensitive,
            force_matching_query=self.config.force_matching_query,
        )
        self._window = WindowManager(self.config.limit)
        self._matches: list[Item] = list(self._items)
        self._window.place(self.config.initial_selection_index, len(self._matches))

    # -- state accessors ----------------------------------------------------

    @property
    def items(self) -> list[Item]:
        return self._items

    @property
    def query(self) -> str:
        return self._query.value

    @property
    def matches(self) -> list[Item]:
        return self._matches

    @property
    def selection(self) -> int:
        return self._window.selection

    @property
    def start(self) -> int:
        return self._window.start

    def highlighted_item(self) -> Item:
        if not self._matches:
            return EMPTY_ITEM
        return self._matches[self._window.selection]

    # -- items ----------------------------------------------------------------

    def set_items(self, items: Sequence[Item]) -> bool:
        """Replace the item collection. Returns ``True`` if it changed.

        Passing a collection with the same content is a no-op, even if it is
        a different object.
        """
        new_items = list(items)
        if new_items == self._items:
            return False
        logger.debug(
            "Items replaced (%d -> %d), resetting query", len(self._items), len(new_items)
        )
        self._items = new_items
        self._query.reset_for_new_items()
        self._window.reset()
        self._refresh_matches()
        return True

    # -- actions --------------------------------------------------------------

    def handle_key(self, event: KeyEvent) -> Action | None:
        action = dispatch(event, self.config)
        if action is not None:
            self.handle(action)
        return action

    def handle(self, action: Action) -> None:  # noqa: C901
        kind = action.kind
        if kind == "insertChar":
            if self._query.append(action.char, self._items):
                self._window.reset()
                self._refresh_matches()
            else:
                logger.debug(
                    "Rejected %r: no item matches %r",
                    action.char,
                    self._query.value + action.char,
                )
        elif kind == "deleteLast":
            if self._query.value:
                self._query.delete_last()
                self._refresh_matches()
        elif kind == "clearQuery":
            if self._query.value:
                self._query.clear()
                self._refresh_matches()
        elif kind == "navigateUp":
            self._window.move_up(len(self._matches))
        elif kind == "navigateDown":
            self._window.move_down(len(self._matches))
        elif kind == "commit":
            item = self.highlighted_item()
            logger.debug("Committing %r", item)
            self.on_select(item)
        elif kind == "cancel":
            if self.on_cancel is not None:
                self.on_cancel()

    # -- internals ------------------------------------------------------------

    def _refresh_matches(self) -> None:
        self._matches = matches(
            self._items, self._query.value, self.config.case_sensitive
        )
        self._window.clamp(len(self._matches))
