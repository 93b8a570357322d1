"""CLI entry point for quicksearch. Uses Click for argument parsing."""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

import click

from quicksearch.config import QuickSearchConfig
from quicksearch.items import Item, as_items
from quicksearch.session import QuickSearchSession
from quicksearch.terminal import ProcessTerminal

EXAMPLE_ITEMS: list[Item] = [
    Item(label="Animal", value=1),
    Item(label="Antilope", value=3),
    Item(label="Animation", value=2),
    Item(label="Animate", value=0),
    Item(label="Arizona", value=4),
    Item(label="Aria", value=5),
    Item(label="Arid", value=6),
]


def load_items(labels: tuple[str, ...], file: str | None) -> list[Item]:
    """Collect items from positional labels and an optional file.

    Blank lines in the file are skipped. With neither source the example
    items are returned.
    """
    collected = list(labels)
    if file is not None:
        text = Path(file).read_text(encoding="utf-8")
        collected.extend(line for line in text.splitlines() if line.strip())
    if not labels and file is None:
        return list(EXAMPLE_ITEMS)
    return as_items(collected)


def _run_picker(items: list[Item], config: QuickSearchConfig) -> Item | None:
    """Run the interactive picker. Frames go to stderr, stdout stays clean."""
    chosen: list[Item] = []
    session: QuickSearchSession

    def on_select(item: Item) -> None:
        chosen.append(item)
        session.stop()

    session = QuickSearchSession(
        items,
        on_select,
        terminal=ProcessTerminal(output=sys.stderr),
        config=config,
        on_cancel=lambda: session.stop(),
    )
    asyncio.run(session.run())
    return chosen[0] if chosen else None


@click.command()
@click.argument("labels", nargs=-1)
@click.option(
    "--file",
    "file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Read one item label per line from a file",
)
@click.option("--case-sensitive", is_flag=True, help="Match case exactly")
@click.option(
    "--limit",
    type=click.IntRange(min=0),
    default=0,
    show_default=True,
    help="Rows shown at once (0 shows all)",
)
@click.option(
    "--allow-unmatched",
    is_flag=True,
    help="Accept characters that leave no matching item",
)
@click.option("--label", default="Query", show_default=True, help="Status prefix")
@click.option(
    "--initial",
    type=click.IntRange(min=0),
    default=0,
    help="Index of the item selected at start",
)
@click.option(
    "--print-value",
    is_flag=True,
    help="Print the item's value instead of its label",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"]),
    default="warning",
    show_default=True,
)
def main(
    labels,
    file,
    case_sensitive,
    limit,
    allow_unmatched,
    label,
    initial,
    print_value,
    log_level,
):
    """Pick one item from a list by typing part of its label."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )

    items = load_items(labels, file)
    config = QuickSearchConfig(
        case_sensitive=case_sensitive,
        limit=limit,
        force_matching_query=not allow_unmatched,
        initial_selection_index=initial,
        label=label,
    )

    item = _run_picker(items, config)
    if item is None:
        sys.exit(1)

    result = item.value if print_value and item.value is not None else item.label
    click.echo(result)


if __name__ == "__main__":
    main()
