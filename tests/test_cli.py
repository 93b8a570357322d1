"""Tests for the quicksearch command line entry point."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
from click.testing import CliRunner

from quicksearch import cli
from quicksearch.config import QuickSearchConfig
from quicksearch.items import Item


class FakePicker:
    """Stands in for the interactive picker and records its inputs."""

    def __init__(self, pick: int | None = 0) -> None:
        self.pick = pick
        self.items: list[Item] = []
        self.config: QuickSearchConfig | None = None

    def __call__(self, items: list[Item], config: QuickSearchConfig) -> Item | None:
        self.items = items
        self.config = config
        return None if self.pick is None else items[self.pick]


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


# ---------------------------------------------------------------------------
# load_items
# ---------------------------------------------------------------------------


class TestLoadItems:
    def test_defaults_to_examples(self) -> None:
        items = cli.load_items((), None)
        assert [i.label for i in items][:2] == ["Animal", "Antilope"]
        assert items[0].value == 1

    def test_labels(self) -> None:
        assert cli.load_items(("x", "y"), None) == [Item("x", "x"), Item("y", "y")]

    def test_file_skips_blank_lines(self, tmp_path: Path) -> None:
        path = tmp_path / "items.txt"
        path.write_text("one\n\n  \ntwo\n", encoding="utf-8")
        items = cli.load_items(("zero",), str(path))
        assert [i.label for i in items] == ["zero", "one", "two"]

    def test_empty_file_gives_no_items(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.txt"
        path.write_text("", encoding="utf-8")
        assert cli.load_items((), str(path)) == []


# ---------------------------------------------------------------------------
# main
# ---------------------------------------------------------------------------


class TestMain:
    def test_help(self, runner: CliRunner) -> None:
        result = runner.invoke(cli.main, ["--help"])
        assert result.exit_code == 0
        assert "--limit" in result.output
        assert "--allow-unmatched" in result.output

    def test_prints_selected_label(
        self, runner: CliRunner, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        picker = FakePicker(pick=1)
        monkeypatch.setattr(cli, "_run_picker", picker)
        result = runner.invoke(cli.main, ["red", "green", "blue"])
        assert result.exit_code == 0
        assert result.output == "green\n"

    def test_options_reach_config(
        self, runner: CliRunner, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        picker = FakePicker()
        monkeypatch.setattr(cli, "_run_picker", picker)
        result = runner.invoke(
            cli.main,
            [
                "--limit", "3",
                "--case-sensitive",
                "--allow-unmatched",
                "--label", "Pick",
                "--initial", "2",
                "a",
            ],
        )
        assert result.exit_code == 0
        config = picker.config
        assert config is not None
        assert config.limit == 3
        assert config.case_sensitive is True
        assert config.force_matching_query is False
        assert config.label == "Pick"
        assert config.initial_selection_index == 2

    def test_print_value(
        self, runner: CliRunner, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(cli, "_run_picker", FakePicker(pick=4))
        result = runner.invoke(cli.main, ["--print-value"])
        assert result.output == "4\n"

    def test_cancel_exits_nonzero(
        self, runner: CliRunner, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(cli, "_run_picker", FakePicker(pick=None))
        result = runner.invoke(cli.main, ["a"])
        assert result.exit_code == 1
        assert result.output == ""

    def test_missing_file(self, runner: CliRunner) -> None:
        result = runner.invoke(cli.main, ["--file", "/nonexistent/items.txt"])
        assert result.exit_code == 2

    def test_negative_limit_rejected(self, runner: CliRunner) -> None:
        result = runner.invoke(cli.main, ["--limit", "-1"])
        assert result.exit_code == 2


# ---------------------------------------------------------------------------
# _run_picker
# ---------------------------------------------------------------------------


class FakeSession:
    """Records how the picker builds its session and selects the first item."""

    created: list[FakeSession] = []

    def __init__(self, items, on_select, terminal=None, config=None, on_cancel=None):
        self.items = items
        self.on_select = on_select
        self.terminal = terminal
        FakeSession.created.append(self)

    async def run(self) -> None:
        self.on_select(self.items[0])

    def stop(self) -> None:
        pass


class TestRunPicker:
    def test_frames_drawn_on_stderr(self, monkeypatch: pytest.MonkeyPatch) -> None:
        FakeSession.created = []
        monkeypatch.setattr(cli, "QuickSearchSession", FakeSession)
        item = cli._run_picker([Item("x", 1.5)], QuickSearchConfig())
        assert item == Item("x", 1.5)
        terminal = FakeSession.created[0].terminal
        assert terminal.output is sys.stderr

    def test_float_value_printed(
        self, runner: CliRunner, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(cli, "_run_picker", lambda items, config: Item("pi", 3.14))
        result = runner.invoke(cli.main, ["--print-value", "pi"])
        assert result.output == "3.14\n"
