"""Terminal abstraction for raw-mode stdin/stdout interaction.

Provides a ``Terminal`` protocol and a concrete ``ProcessTerminal`` backed by
the process's stdin/stdout. Raw mode is entered on ``start`` and the previous
terminal attributes are restored on ``stop``.
"""

from __future__ import annotations

import asyncio
import logging
import os
import sys
import termios
import tty
from typing import Callable, Protocol, TextIO

from quicksearch.stdin_buffer import StdinBuffer

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_HIDE_CURSOR = "\x1b[?25l"
_SHOW_CURSOR = "\x1b[?25h"
_CLEAR_FROM_CURSOR = "\x1b[0J"
_CURSOR_UP_FMT = "\x1b[{}A"


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """Interface for terminal I/O operations."""

    def start(
        self,
        on_input: Callable[[str], None],
        on_eof: Callable[[], None] | None = None,
    ) -> None: ...

    def stop(self) -> None: ...

    def write(self, data: str) -> None: ...

    @property
    def columns(self) -> int: ...

    def move_up(self, lines: int) -> None: ...

    def hide_cursor(self) -> None: ...

    def show_cursor(self) -> None: ...

    def clear_from_cursor(self) -> None: ...


# ---------------------------------------------------------------------------
# ProcessTerminal implementation
# ---------------------------------------------------------------------------


class ProcessTerminal:
    """Terminal reading ``sys.stdin`` and drawing on *output*.

    *output* defaults to ``sys.stdout``. When stdin is not a TTY, raw mode is
    skipped and input is still read line-buffered, so the selector keeps
    working under pipes and test harnesses. End of input is reported once
    through ``on_eof`` and reading stops.
    """

    def __init__(self, output: TextIO | None = None) -> None:
        self._output = output
        self._input_handler: Callable[[str], None] | None = None
        self._eof_handler: Callable[[], None] | None = None
        self._stdin_buffer: StdinBuffer | None = None
        self._stdin_reader_active: bool = False
        self._original_termios: list | None = None
        self._write_log_path: str = os.environ.get("QUICKSEARCH_WRITE_LOG", "")

    @property
    def columns(self) -> int:
        try:
            return os.get_terminal_size(self.output.fileno()).columns
        except (ValueError, OSError):
            return 80

    @property
    def output(self) -> TextIO:
        return self._output if self._output is not None else sys.stdout

    @property
    def raw_mode(self) -> bool:
        return self._original_termios is not None

    # -- start / stop -------------------------------------------------------

    def start(
        self,
        on_input: Callable[[str], None],
        on_eof: Callable[[], None] | None = None,
    ) -> None:
        """Enable raw mode and begin reading stdin."""
        self._input_handler = on_input
        self._eof_handler = on_eof
        self._enter_raw_mode()

        self._stdin_buffer = StdinBuffer(timeout=0.01)
        self._stdin_buffer.on_data(self._on_buffer_data)
        self._start_stdin_reader()

    def stop(self) -> None:
        """Stop reading stdin and restore the terminal attributes."""
        self._remove_stdin_reader()

        if self._stdin_buffer is not None:
            self._stdin_buffer.destroy()
            self._stdin_buffer = None

        self._leave_raw_mode()
        self._input_handler = None
        self._eof_handler = None

    # -- output -------------------------------------------------------------

    def write(self, data: str) -> None:
        """Write data to stdout and optionally to the write log."""
        self._raw_write(data)

        if self._write_log_path:
            try:
                with open(self._write_log_path, "a") as f:
                    f.write(data)
            except OSError:
                logger.debug("Cannot append to %s", self._write_log_path)

    def move_up(self, lines: int) -> None:
        if lines > 0:
            self._raw_write(_CURSOR_UP_FMT.format(lines))

    def hide_cursor(self) -> None:
        self._raw_write(_HIDE_CURSOR)

    def show_cursor(self) -> None:
        self._raw_write(_SHOW_CURSOR)

    def clear_from_cursor(self) -> None:
        self._raw_write(_CLEAR_FROM_CURSOR)

    # -- private: raw mode ----------------------------------------------------

    def _enter_raw_mode(self) -> None:
        try:
            fd = sys.stdin.fileno()
            self._original_termios = termios.tcgetattr(fd)
            tty.setraw(fd)
        except (termios.error, OSError, ValueError) as exc:
            logger.warning("Raw mode unsupported, reading input as-is: %s", exc)
            self._original_termios = None

    def _leave_raw_mode(self) -> None:
        if self._original_termios is None:
            return
        try:
            termios.tcsetattr(
                sys.stdin.fileno(), termios.TCSADRAIN, self._original_termios
            )
        except (termios.error, OSError, ValueError) as exc:
            logger.warning("Failed to restore terminal attributes: %s", exc)
        self._original_termios = None

    # -- private: stdin reading -----------------------------------------------

    def _on_buffer_data(self, data: str) -> None:
        if self._input_handler is not None:
            self._input_handler(data)

    def _start_stdin_reader(self) -> None:
        """Register an asyncio reader on stdin to feed the stdin buffer."""
        if self._stdin_reader_active:
            return
        try:
            loop = asyncio.get_running_loop()
            loop.add_reader(sys.stdin.fileno(), self._on_stdin_readable)
            self._stdin_reader_active = True
        except RuntimeError:
            logger.debug("No running event loop, stdin reader not registered")

    def _remove_stdin_reader(self) -> None:
        if not self._stdin_reader_active:
            return
        try:
            loop = asyncio.get_running_loop()
            loop.remove_reader(sys.stdin.fileno())
        except (RuntimeError, ValueError):
            logger.debug("Event loop gone before stdin reader removal")
        self._stdin_reader_active = False

    def _on_stdin_readable(self) -> None:
        try:
            raw = os.read(sys.stdin.fileno(), 4096)
        except OSError as exc:
            logger.debug("stdin read failed: %s", exc)
            raw = b""

        if not raw:
            self._on_stdin_closed()
            return

        data = raw.decode("utf-8", errors="replace")
        if self._stdin_buffer is not None:
            self._stdin_buffer.process(data)

    def _on_stdin_closed(self) -> None:
        """Stop reading at end of input and report it once."""
        self._remove_stdin_reader()
        if self._stdin_buffer is not None:
            for sequence in self._stdin_buffer.flush():
                self._on_buffer_data(sequence)
        logger.info("End of input on stdin")
        handler, self._eof_handler = self._eof_handler, None
        if handler is not None:
            handler()

    # -- private: raw write ---------------------------------------------------

    def _raw_write(self, data: str) -> None:
        try:
            self.output.write(data)
            self.output.flush()
        except OSError:
            logger.debug("Terminal write failed")
