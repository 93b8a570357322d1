"""StdinBuffer splits raw stdin chunks into complete key sequences.

Reads can end in the middle of an escape sequence, and fast typing can
deliver several keys in one read. Each complete sequence is emitted on its
own so it decodes to exactly one key event.
"""

from __future__ import annotations

import asyncio
from typing import Callable, Literal

ESC = "\x1b"

_Status = Literal["complete", "incomplete", "not-escape"]


def _sequence_status(data: str) -> _Status:
    """Classify *data* as a complete escape sequence or one needing more input."""
    if not data.startswith(ESC):
        return "not-escape"

    if len(data) == 1:
        return "incomplete"

    introducer = data[1]

    # CSI: ESC [ <params> <final byte 0x40-0x7e>
    if introducer == "[":
        if len(data) < 3:
            return "incomplete"
        return "complete" if 0x40 <= ord(data[-1]) <= 0x7E else "incomplete"

    # OSC: ESC ] ... (BEL | ESC \)
    if introducer == "]":
        if data.endswith("\x07") or data.endswith(f"{ESC}\\"):
            return "complete"
        return "incomplete"

    # SS3: ESC O <char>
    if introducer == "O":
        return "complete" if len(data) >= 3 else "incomplete"

    # Meta key: ESC <char>
    return "complete"


def split_sequences(buffer: str) -> tuple[list[str], str]:
    """Split *buffer* into complete sequences and an incomplete remainder."""
    sequences: list[str] = []
    pos = 0

    while pos < len(buffer):
        if buffer[pos] != ESC:
            sequences.append(buffer[pos])
            pos += 1
            continue

        end = pos + 1
        while True:
            status = _sequence_status(buffer[pos:end])
            if status != "incomplete":
                break
            if end >= len(buffer):
                return sequences, buffer[pos:]
            end += 1

        sequences.append(buffer[pos:end])
        pos = end

    return sequences, ""


class StdinBuffer:
    """Buffers stdin input and emits complete sequences.

    A lone ``ESC`` is ambiguous (the Escape key or the start of a sequence),
    so a trailing partial sequence is held for ``timeout`` seconds and then
    flushed as-is.
    """

    def __init__(self, *, timeout: float = 0.01) -> None:
        self._buffer: str = ""
        self._timeout = timeout
        self._timeout_handle: asyncio.TimerHandle | None = None
        self._on_data: Callable[[str], None] | None = None

    def on_data(self, callback: Callable[[str], None]) -> None:
        """Set callback for complete sequences."""
        self._on_data = callback

    def _emit(self, data: str) -> None:
        if self._on_data:
            self._on_data(data)

    def process(self, data: str) -> None:
        """Feed input data into the buffer."""
        self._cancel_timeout()

        self._buffer += data
        sequences, self._buffer = split_sequences(self._buffer)
        for sequence in sequences:
            self._emit(sequence)

        if not self._buffer:
            return

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No event loop - flush immediately
            for sequence in self.flush():
                self._emit(sequence)
            return
        self._timeout_handle = loop.call_later(self._timeout, self._flush_timeout)

    def _flush_timeout(self) -> None:
        self._timeout_handle = None
        for sequence in self.flush():
            self._emit(sequence)

    def _cancel_timeout(self) -> None:
        if self._timeout_handle is not None:
            self._timeout_handle.cancel()
            self._timeout_handle = None

    def flush(self) -> list[str]:
        self._cancel_timeout()
        if not self._buffer:
            return []
        sequences = [self._buffer]
        self._buffer = ""
        return sequences

    def destroy(self) -> None:
        self._cancel_timeout()
        self._buffer = ""
        self._on_data = None
