"""Session configuration for the quick search selector."""

from __future__ import annotations

from dataclasses import dataclass, field

CTRL_U = "\x15"
CTRL_W = "\x17"

DEFAULT_CLEAR_QUERY_CHARS: frozenset[str] = frozenset({CTRL_U, CTRL_W})


@dataclass(frozen=True)
class QuickSearchConfig:
    """Immutable per-session options.

    ``limit`` is the number of rows shown at once; ``0`` shows every match
    and disables scrolling. ``initial_selection_index`` only applies when
    the session starts; later resets always go back to the first match.
    ``clear_query_chars`` may hold control characters or ASCII letters;
    digits and punctuation are always typed into the query instead.
    """

    case_sensitive: bool = False
    limit: int = 0
    force_matching_query: bool = True
    clear_query_chars: frozenset[str] = field(
        default_factory=lambda: DEFAULT_CLEAR_QUERY_CHARS
    )
    initial_selection_index: int = 0
    focus: bool = True
    label: str = "Query"

    def __post_init__(self) -> None:
        if self.limit < 0:
            raise ValueError(f"limit must be >= 0, got {self.limit}")
        if self.initial_selection_index < 0:
            raise ValueError(
                "initial_selection_index must be >= 0, "
                f"got {self.initial_selection_index}"
            )
        if not isinstance(self.clear_query_chars, frozenset):
            object.__setattr__(
                self, "clear_query_chars", frozenset(self.clear_query_chars)
            )

    @property
    def limited(self) -> bool:
        return self.limit > 0
