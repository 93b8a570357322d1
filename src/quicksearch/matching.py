"""Substring matching.

An item matches when its label contains the query. Matching is case-folded
unless the session is case-sensitive. Results keep the original item order.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Sequence

from quicksearch.items import Item


def find_match(label: str, query: str, case_sensitive: bool = False) -> int:
    """Return the index of the first occurrence of *query* in *label*, or -1."""
    if case_sensitive:
        return label.find(query)
    return label.lower().find(query.lower())


@lru_cache(maxsize=256)
def _matches_cached(
    items: tuple[Item, ...], query: str, case_sensitive: bool
) -> tuple[Item, ...]:
    return tuple(
        item for item in items if find_match(item.label, query, case_sensitive) >= 0
    )


def matches(
    items: Sequence[Item], query: str, case_sensitive: bool = False
) -> list[Item]:
    """Return the items whose label contains *query*, in their original order.

    An empty query matches everything.
    """
    if query == "":
        return list(items)
    return list(_matches_cached(tuple(items), query, case_sensitive))
