"""Item type shared by the matcher, the controller and the renderers."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Item:
    """A selectable entry. Only ``label`` takes part in matching."""

    label: str
    value: str | int | float | None = None


# Returned whenever there is nothing to highlight.
EMPTY_ITEM = Item(label="")


def as_items(labels: list[str]) -> list[Item]:
    """Wrap plain strings as items whose value equals their label."""
    return [Item(label=label, value=label) for label in labels]
