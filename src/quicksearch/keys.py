"""Decoding of raw terminal input into key events.

Understands the legacy xterm/VT sequences most terminals send: plain and
SS3 cursor keys, ``CSI <n> ~`` editing and function keys, and their
``CSI 1;<mod>`` / ``CSI <n>;<mod> ~`` modified forms. ASCII letters are
named by their lowercase form. Anything else without a recognised name is
reported with ``name=None``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

MODIFIERS: dict[str, int] = {
    "shift": 1,
    "alt": 2,
    "ctrl": 4,
}

# Unmodified sequences -> key names
LEGACY_KEY_SEQUENCES: dict[str, str] = {
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
    "\x1b[H": "home",
    "\x1b[F": "end",
    "\x1bOA": "up",
    "\x1bOB": "down",
    "\x1bOC": "right",
    "\x1bOD": "left",
    "\x1bOH": "home",
    "\x1bOF": "end",
    "\x1bOP": "f1",
    "\x1bOQ": "f2",
    "\x1bOR": "f3",
    "\x1bOS": "f4",
    "\x1b[E": "clear",
}

# Final byte of ``CSI 1;<mod> X`` -> key name
_CSI_LETTER_KEYS: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
    "H": "home",
    "F": "end",
    "P": "f1",
    "Q": "f2",
    "R": "f3",
    "S": "f4",
}

# Number in ``CSI <n> ~`` -> key name
_CSI_TILDE_KEYS: dict[int, str] = {
    1: "home",
    2: "insert",
    3: "delete",
    4: "end",
    5: "pageUp",
    6: "pageDown",
    15: "f5",
    17: "f6",
    18: "f7",
    19: "f8",
    20: "f9",
    21: "f10",
    23: "f11",
    24: "f12",
}

_CSI_MODIFIED_LETTER_RE = re.compile(r"^\x1b\[1;(\d+)([A-DHFPQRS])$")
_SS3_MODIFIED_LETTER_RE = re.compile(r"^\x1bO(\d+)([PQRS])$")
_CSI_TILDE_RE = re.compile(r"^\x1b\[(\d+)(?:;(\d+))?~$")

# The ``ansi-regex`` pattern: CSI/OSC style sequences, 7- or 8-bit introducer.
_ANSI_SEQUENCE_RE = re.compile(
    r"[\x1b\x9b][\[\]()#;?]*"
    r"(?:(?:(?:[a-zA-Z\d]*(?:;[-a-zA-Z\d/#&.:=?%@~_]*)*)?\x07)"
    r"|(?:(?:\d{1,4}(?:;\d{0,4})*)?[\dA-PR-TZcf-ntqry=><~]))"
)


def is_escape_sequence(data: str) -> bool:
    """Return ``True`` if *data* contains an ANSI escape sequence."""
    return bool(_ANSI_SEQUENCE_RE.search(data))


# ---------------------------------------------------------------------------
# Key events
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class KeyEvent:
    """One decoded keypress.

    ``raw_char`` is the character the key produced (the whole input for
    multi-byte sequences), ``name`` the named key if any, ``sequence`` the
    raw input the event was decoded from.
    """

    raw_char: str
    name: str | None = None
    shift: bool = False
    ctrl: bool = False
    meta: bool = False
    sequence: str = ""


def _from_modifier(
    data: str, name: str, modifier: int
) -> KeyEvent:
    bits = max(modifier - 1, 0)
    return KeyEvent(
        raw_char=data,
        name=name,
        shift=bool(bits & MODIFIERS["shift"]),
        meta=bool(bits & MODIFIERS["alt"]),
        ctrl=bool(bits & MODIFIERS["ctrl"]),
        sequence=data,
    )


def _decode_escape(data: str) -> KeyEvent | None:
    name = LEGACY_KEY_SEQUENCES.get(data)
    if name is not None:
        return KeyEvent(raw_char=data, name=name, sequence=data)

    if data == "\x1b[Z":
        return KeyEvent(raw_char=data, name="tab", shift=True, sequence=data)

    match = _CSI_MODIFIED_LETTER_RE.match(data) or _SS3_MODIFIED_LETTER_RE.match(
        data
    )
    if match:
        return _from_modifier(
            data, _CSI_LETTER_KEYS[match.group(2)], int(match.group(1))
        )

    match = _CSI_TILDE_RE.match(data)
    if match:
        name = _CSI_TILDE_KEYS.get(int(match.group(1)))
        if name is None:
            return None
        return _from_modifier(data, name, int(match.group(2) or 1))

    return None


def decode_key(data: str) -> KeyEvent:  # noqa: C901
    """Decode one complete input sequence into a :class:`KeyEvent`."""
    if data.startswith("\x1b") and len(data) > 2:
        event = _decode_escape(data)
        if event is not None:
            return event
        return KeyEvent(raw_char=data, sequence=data)

    if data == "\x1b":
        return KeyEvent(raw_char=data, name="escape", sequence=data)
    if data in ("\r", "\n"):
        return KeyEvent(raw_char=data, name="enter", sequence=data)
    if data == "\t":
        return KeyEvent(raw_char=data, name="tab", sequence=data)
    if data == " ":
        return KeyEvent(raw_char=data, name="space", sequence=data)
    if data in ("\x7f", "\x08"):
        return KeyEvent(raw_char=data, name="backspace", sequence=data)
    if data == "\x00":
        return KeyEvent(raw_char=data, name="space", ctrl=True, sequence=data)

    # Ctrl + letter (0x01 - 0x1a)
    if len(data) == 1 and 1 <= ord(data) <= 26:
        return KeyEvent(
            raw_char=data,
            name=chr(ord(data) + ord("a") - 1),
            ctrl=True,
            sequence=data,
        )

    # Meta + key (ESC prefix)
    if len(data) == 2 and data[0] == "\x1b":
        ch = data[1]
        if ch in ("\r", "\n"):
            return KeyEvent(raw_char=data, name="enter", meta=True, sequence=data)
        if ch in ("\x7f", "\x08"):
            return KeyEvent(
                raw_char=data, name="backspace", meta=True, sequence=data
            )
        if ch.isprintable():
            return KeyEvent(
                raw_char=data,
                name=ch.lower(),
                shift=ch.isupper(),
                meta=True,
                sequence=data,
            )
        return KeyEvent(raw_char=data, meta=True, sequence=data)

    if len(data) == 1 and data.isascii() and data.isalpha():
        return KeyEvent(
            raw_char=data, name=data.lower(), shift=data.isupper(), sequence=data
        )

    return KeyEvent(raw_char=data, sequence=data)
