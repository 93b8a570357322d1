"""Interactive quick search session bound to a terminal.

The session owns the controller and is the only listener on the terminal's
input while it holds keyboard focus. Every key is processed to completion
(decode, dispatch, update, redraw) before the next one is read.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import contextmanager
from dataclasses import replace
from typing import Callable, Iterator, Sequence

from quicksearch.config import QuickSearchConfig
from quicksearch.controller import SelectionController
from quicksearch.dispatch import CANCEL, Action
from quicksearch.items import Item
from quicksearch.keys import decode_key
from quicksearch.render import QuickSearchTheme, render_lines
from quicksearch.terminal import ProcessTerminal, Terminal
from quicksearch.view import ViewModel, build_view_model

logger = logging.getLogger(__name__)


class QuickSearchSession:
    """Quick search list selector running on a :class:`Terminal`."""

    def __init__(
        self,
        items: Sequence[Item],
        on_select: Callable[[Item], None],
        terminal: Terminal | None = None,
        config: QuickSearchConfig | None = None,
        theme: QuickSearchTheme | None = None,
        on_cancel: Callable[[], None] | None = None,
    ) -> None:
        self.terminal: Terminal = terminal or ProcessTerminal()
        self.theme = theme
        self.controller = SelectionController(
            items, on_select, config=config, on_cancel=on_cancel
        )
        self._has_keyboard = False
        self._lines_drawn = 0
        self._done: asyncio.Future[None] | None = None

    @property
    def config(self) -> QuickSearchConfig:
        return self.controller.config

    @property
    def focused(self) -> bool:
        return self.config.focus

    @property
    def has_keyboard(self) -> bool:
        return self._has_keyboard

    # -- keyboard focus -----------------------------------------------------

    def acquire_keyboard_focus(self) -> None:
        """Become the terminal's input listener. Idempotent."""
        if self._has_keyboard:
            return
        self.terminal.start(self.handle_input, self._on_input_closed)
        self.terminal.hide_cursor()
        self._has_keyboard = True
        logger.debug("Keyboard focus acquired")

    def release_keyboard_focus(self) -> None:
        """Stop listening and restore the terminal. Idempotent."""
        if not self._has_keyboard:
            return
        self._has_keyboard = False
        try:
            self.terminal.show_cursor()
        finally:
            self.terminal.stop()
        logger.debug("Keyboard focus released")

    @contextmanager
    def keyboard_focus(self) -> Iterator[QuickSearchSession]:
        self.acquire_keyboard_focus()
        try:
            yield self
        finally:
            self.release_keyboard_focus()

    def set_focus(self, focus: bool) -> None:
        """Toggle focus; losing it releases the keyboard."""
        if focus == self.config.focus:
            return
        self.controller.config = replace(self.config, focus=focus)
        if not focus:
            self.release_keyboard_focus()
        elif self._done is not None:
            self.acquire_keyboard_focus()

    # -- state changes --------------------------------------------------------

    def set_items(self, items: Sequence[Item]) -> None:
        if self.controller.set_items(items) and self._has_keyboard:
            self.redraw()

    def handle_input(self, data: str) -> Action | None:
        action = self.controller.handle_key(decode_key(data))
        if action is not None and self._has_keyboard:
            self.redraw()
        return action

    def _on_input_closed(self) -> None:
        # End of input cancels the session.
        self.controller.handle(CANCEL)
        self.stop()

    # -- rendering ------------------------------------------------------------

    def view_model(self) -> ViewModel:
        return build_view_model(self.controller)

    def render(self, width: int) -> list[str]:
        return render_lines(self.view_model(), width, self.theme)

    def redraw(self) -> None:
        """Replace the previously drawn frame with the current state."""
        lines = self.render(self.terminal.columns)
        if self._lines_drawn:
            self.terminal.write("\r")
            self.terminal.move_up(self._lines_drawn - 1)
        self.terminal.clear_from_cursor()
        self.terminal.write("\r\n".join(lines))
        self._lines_drawn = len(lines)

    def erase(self) -> None:
        if not self._lines_drawn:
            return
        self.terminal.write("\r")
        self.terminal.move_up(self._lines_drawn - 1)
        self.terminal.clear_from_cursor()
        self._lines_drawn = 0

    # -- run loop -------------------------------------------------------------

    async def run(self) -> None:
        """Draw and process keys until :meth:`stop` is called."""
        self._done = asyncio.get_running_loop().create_future()
        try:
            if self.focused:
                self.acquire_keyboard_focus()
            self.redraw()
            await self._done
        finally:
            self.release_keyboard_focus()
            self.erase()
            self._done = None

    def stop(self) -> None:
        if self._done is not None and not self._done.done():
            self._done.set_result(None)
