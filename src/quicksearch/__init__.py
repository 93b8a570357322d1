"""quicksearch: incremental substring-filter list selector for terminals."""

# Configuration
from quicksearch.config import DEFAULT_CLEAR_QUERY_CHARS, QuickSearchConfig

# Core state machine
from quicksearch.controller import SelectionController
from quicksearch.dispatch import Action, ActionKind, dispatch
from quicksearch.items import EMPTY_ITEM, Item, as_items
from quicksearch.matching import find_match, matches
from quicksearch.query import QueryState
from quicksearch.window import NavigationWindow, WindowManager

# Keyboard input
from quicksearch.keys import KeyEvent, decode_key, is_escape_sequence
from quicksearch.stdin_buffer import StdinBuffer

# View model and rendering
from quicksearch.render import DefaultTheme, PlainTheme, QuickSearchTheme, render_lines
from quicksearch.view import ScrollInfo, ViewModel, VisibleItem, build_view_model

# Terminal and session
from quicksearch.session import QuickSearchSession
from quicksearch.terminal import ProcessTerminal, Terminal

__all__ = [
    # Configuration
    "DEFAULT_CLEAR_QUERY_CHARS",
    "QuickSearchConfig",
    # Core
    "Action",
    "ActionKind",
    "EMPTY_ITEM",
    "Item",
    "NavigationWindow",
    "QueryState",
    "SelectionController",
    "WindowManager",
    "as_items",
    "dispatch",
    "find_match",
    "matches",
    # Keys
    "KeyEvent",
    "StdinBuffer",
    "decode_key",
    "is_escape_sequence",
    # View
    "DefaultTheme",
    "PlainTheme",
    "QuickSearchTheme",
    "ScrollInfo",
    "ViewModel",
    "VisibleItem",
    "build_view_model",
    "render_lines",
    # Terminal / session
    "ProcessTerminal",
    "QuickSearchSession",
    "Terminal",
]
