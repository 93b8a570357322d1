"""Query buffer and its edit operations."""

from __future__ import annotations

from typing import Sequence

from quicksearch.items import Item
from quicksearch.matching import matches


class QueryState:
    """Owns the query string typed by the user."""

    def __init__(
        self, case_sensitive: bool = False, force_matching_query: bool = True
    ) -> None:
        self._value: str = ""
        self._case_sensitive = case_sensitive
        self._force_matching_query = force_matching_query

    @property
    def value(self) -> str:
        return self._value

    def append(self, char: str, items: Sequence[Item]) -> bool:
        """Append *char* to the query. Returns ``False`` when rejected.

        With ``force_matching_query`` set, a character that would leave no
        matching item is dropped and the query stays as it was.
        """
        candidate = self._value + char
        if self._force_matching_query and not matches(
            items, candidate, self._case_sensitive
        ):
            return False
        self._value = candidate
        return True

    def delete_last(self) -> None:
        self._value = self._value[:-1]

    def clear(self) -> None:
        self._value = ""

    def reset_for_new_items(self) -> None:
        self._value = ""
