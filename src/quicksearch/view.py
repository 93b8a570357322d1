"""View model handed to renderers.

Built from the controller's state on demand and never stored; a renderer
only ever sees these plain values.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from quicksearch.controller import SelectionController
from quicksearch.items import Item
from quicksearch.matching import find_match


@dataclass(frozen=True)
class VisibleItem:
    item: Item
    index: int
    is_selected: bool
    match_start: int
    match_end: int


@dataclass(frozen=True)
class ScrollInfo:
    start: int
    end: int
    total_matches: int
    total_items: int


@dataclass(frozen=True)
class ViewModel:
    query: str
    label: str
    visible_items: list[VisibleItem] = field(default_factory=list)
    has_match: bool = False
    scrolled: ScrollInfo | None = None


def build_view_model(controller: SelectionController) -> ViewModel:
    config = controller.config
    query = controller.query
    found = controller.matches
    total = len(found)

    begin = controller.start
    end = min(begin + config.limit, total) if config.limit else total

    visible: list[VisibleItem] = []
    for index in range(begin, end):
        item = found[index]
        match_start = max(find_match(item.label, query, config.case_sensitive), 0)
        visible.append(
            VisibleItem(
                item=item,
                index=index,
                is_selected=index == controller.selection,
                match_start=match_start,
                match_end=match_start + len(query),
            )
        )

    scrolled = None
    if config.limit > 0 and total > config.limit:
        scrolled = ScrollInfo(
            start=begin,
            end=end,
            total_matches=total,
            total_items=len(controller.items),
        )

    return ViewModel(
        query=query,
        label=config.label,
        visible_items=visible,
        has_match=bool(visible),
        scrolled=scrolled,
    )
