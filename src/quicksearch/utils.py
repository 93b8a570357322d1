"""Terminal text utilities: ANSI-aware width measurement and truncation."""

from __future__ import annotations

import re
import unicodedata

import grapheme
import wcwidth as _wcwidth

_STRIP_RE = re.compile(
    r"\x1b\[[0-9;:]*[mGKHJ]"        # CSI
    r"|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)"  # OSC
)

_RESET = "\x1b[0m"

# ---------------------------------------------------------------------------
# Width cache (capped at 512 entries)
# ---------------------------------------------------------------------------

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def _cache_width(key: str, value: int) -> int:
    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[key] = value
    return value


def _grapheme_width(g: str) -> int:
    """Return the terminal display width of a single grapheme cluster.

    Emoji sequences (VS16, ZWJ, skin tones, flags) count as two columns,
    control characters and marks as zero; everything else goes to wcwidth.
    """
    if not g:
        return 0

    if len(g) == 1:
        cp = ord(g)
        if cp < 0x20 or (0x7F <= cp <= 0x9F):
            return 0
        return max(_wcwidth.wcwidth(g), 0)

    for ch in g:
        cp = ord(ch)
        if cp in (0xFE0F, 0x200D):
            return 2
        if 0x1F3FB <= cp <= 0x1F3FF or 0x1F1E6 <= cp <= 0x1F1FF:
            return 2

    first = g[0]
    if ord(first) >= 0x1F000:
        return 2
    if unicodedata.category(first) in ("Mn", "Me", "Mc", "Cf"):
        return 0
    return max(_wcwidth.wcwidth(first), 0)


def strip_ansi(text: str) -> str:
    return _STRIP_RE.sub("", text)


def visible_width(text: str) -> int:
    """Calculate the visible terminal width of *text*, ignoring ANSI codes."""
    if not text:
        return 0

    stripped = strip_ansi(text)
    if not stripped:
        return 0

    if all(0x20 <= ord(ch) <= 0x7E for ch in stripped):
        return len(stripped)

    cached = _width_cache.get(stripped)
    if cached is not None:
        return cached

    total = sum(_grapheme_width(g) for g in grapheme.graphemes(stripped))
    return _cache_width(stripped, total)


def _split_ansi(text: str) -> list[tuple[bool, str]]:
    """Split *text* into ``(is_code, chunk)`` pairs."""
    parts: list[tuple[bool, str]] = []
    pos = 0
    for match in _STRIP_RE.finditer(text):
        if match.start() > pos:
            parts.append((False, text[pos : match.start()]))
        parts.append((True, match.group()))
        pos = match.end()
    if pos < len(text):
        parts.append((False, text[pos:]))
    return parts


def _take_columns(text: str, max_cols: int) -> tuple[str, bool]:
    """Return the prefix of *text* fitting in *max_cols* columns.

    ANSI codes are kept; the text is cut at grapheme boundaries. The second
    element tells whether any escape code was emitted.
    """
    result: list[str] = []
    cols = 0
    saw_code = False
    for is_code, chunk in _split_ansi(text):
        if is_code:
            result.append(chunk)
            saw_code = True
            continue
        for g in grapheme.graphemes(chunk):
            w = _grapheme_width(g)
            if cols + w > max_cols:
                return "".join(result), saw_code
            result.append(g)
            cols += w
    return "".join(result), saw_code


def truncate_to_width(text: str, max_width: int, ellipsis: str = "...") -> str:
    """Truncate *text* to fit within *max_width* visible columns.

    If the text is wider than *max_width* it is cut and *ellipsis* appended
    (the ellipsis counts towards the width).
    """
    if max_width <= 0:
        return ""

    if visible_width(text) <= max_width:
        return text

    target_width = max_width - visible_width(ellipsis)
    if target_width <= 0:
        return _take_columns(ellipsis, max_width)[0]

    result, saw_code = _take_columns(text, target_width)
    if saw_code:
        result += _RESET
    return result + ellipsis
