"""Tests for quicksearch.session -- the terminal-bound selector."""

from __future__ import annotations

import asyncio

import pytest

from quicksearch.config import QuickSearchConfig
from quicksearch.items import Item, as_items
from quicksearch.render import PlainTheme
from quicksearch.session import QuickSearchSession

from .virtual_terminal import VirtualTerminal

ANIMALS = as_items(
    ["Animal", "Antilope", "Animation", "Animate", "Arizona", "Aria", "Arid"]
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make(
    **options,
) -> tuple[QuickSearchSession, VirtualTerminal, list[Item]]:
    terminal = VirtualTerminal()
    chosen: list[Item] = []
    session = QuickSearchSession(
        ANIMALS,
        chosen.append,
        terminal=terminal,
        config=QuickSearchConfig(**options),
        theme=PlainTheme(),
    )
    return session, terminal, chosen


# ---------------------------------------------------------------------------
# Keyboard focus
# ---------------------------------------------------------------------------


class TestKeyboardFocus:
    def test_acquire_starts_terminal(self) -> None:
        session, terminal, _ = _make()
        session.acquire_keyboard_focus()
        assert session.has_keyboard
        assert terminal.started
        assert terminal.cursor_visible is False

    def test_acquire_is_idempotent(self) -> None:
        session, terminal, _ = _make()
        session.acquire_keyboard_focus()
        session.acquire_keyboard_focus()
        assert terminal.start_count == 1

    def test_release_restores_terminal(self) -> None:
        session, terminal, _ = _make()
        session.acquire_keyboard_focus()
        session.release_keyboard_focus()
        assert not session.has_keyboard
        assert not terminal.started
        assert terminal.cursor_visible is True

    def test_release_without_acquire_is_noop(self) -> None:
        session, terminal, _ = _make()
        session.release_keyboard_focus()
        session.acquire_keyboard_focus()
        session.release_keyboard_focus()
        session.release_keyboard_focus()
        assert (terminal.start_count, terminal.stop_count) == (1, 1)

    def test_context_manager_releases_on_error(self) -> None:
        session, terminal, _ = _make()
        with pytest.raises(RuntimeError):
            with session.keyboard_focus():
                assert terminal.started
                raise RuntimeError("boom")
        assert not terminal.started
        assert terminal.stop_count == 1

    def test_losing_focus_releases_keyboard(self) -> None:
        session, terminal, _ = _make()
        session.acquire_keyboard_focus()
        session.set_focus(False)
        assert session.focused is False
        assert not terminal.started

    def test_gaining_focus_outside_run_does_not_acquire(self) -> None:
        session, terminal, _ = _make(focus=False)
        session.set_focus(True)
        assert session.focused is True
        assert terminal.start_count == 0


# ---------------------------------------------------------------------------
# Input and drawing
# ---------------------------------------------------------------------------


class TestInput:
    def test_typing_redraws(self) -> None:
        session, terminal, _ = _make()
        session.acquire_keyboard_focus()
        terminal.simulate_input("a")
        assert "Query: a" in terminal.output
        assert session.controller.query == "a"

    def test_second_frame_moves_cursor_up(self) -> None:
        session, terminal, _ = _make()
        session.acquire_keyboard_focus()
        terminal.simulate_input("a")
        terminal.clear_buffer()
        terminal.simulate_input("r")
        # previous frame: status line plus seven matches
        assert terminal.output.startswith("\r\x1b[7A\x1b[0J")
        assert terminal.output.endswith("Query: ar\r\n> Arizona\r\n  Aria\r\n  Arid")

    def test_enter_commits(self) -> None:
        session, terminal, chosen = _make()
        session.acquire_keyboard_focus()
        terminal.simulate_input("\x1b[B")
        terminal.simulate_input("\r")
        assert chosen == [ANIMALS[1]]

    def test_ignored_key_does_not_redraw(self) -> None:
        session, terminal, _ = _make()
        session.acquire_keyboard_focus()
        terminal.clear_buffer()
        assert session.handle_input("\x1b[15~") is None
        assert terminal.output == ""

    def test_without_keyboard_nothing_is_drawn(self) -> None:
        session, terminal, _ = _make()
        action = session.handle_input("a")
        assert action is not None and action.kind == "insertChar"
        assert terminal.output == ""

    def test_set_items_redraws_only_with_keyboard(self) -> None:
        session, terminal, _ = _make()
        session.set_items(as_items(["one"]))
        assert terminal.output == ""
        session.acquire_keyboard_focus()
        session.set_items(as_items(["two"]))
        assert "> two" in terminal.output

    def test_render_uses_width(self) -> None:
        session, _, _ = _make()
        lines = session.render(5)
        assert lines[:3] == ["Qu...", "> ...", "  ..."]
        assert len(lines) == 8


# ---------------------------------------------------------------------------
# Run loop
# ---------------------------------------------------------------------------


class TestRun:
    def test_run_until_commit(self) -> None:
        terminal = VirtualTerminal()
        chosen: list[Item] = []

        async def scenario() -> None:
            session: QuickSearchSession

            def on_select(item: Item) -> None:
                chosen.append(item)
                session.stop()

            session = QuickSearchSession(
                ANIMALS, on_select, terminal=terminal, theme=PlainTheme()
            )
            loop = asyncio.get_running_loop()
            loop.call_soon(terminal.simulate_input, "a")
            loop.call_soon(terminal.simulate_input, "r")
            loop.call_soon(terminal.simulate_input, "\r")
            await session.run()
            assert not session.has_keyboard

        asyncio.run(scenario())
        assert chosen == [Item("Arizona", "Arizona")]
        assert (terminal.start_count, terminal.stop_count) == (1, 1)
        assert terminal.cursor_visible is True
        assert terminal.output.endswith("\x1b[0J")

    def test_run_until_cancel(self) -> None:
        terminal = VirtualTerminal()

        async def scenario() -> list[Item]:
            chosen: list[Item] = []
            session: QuickSearchSession
            session = QuickSearchSession(
                ANIMALS,
                chosen.append,
                terminal=terminal,
                on_cancel=lambda: session.stop(),
            )
            asyncio.get_running_loop().call_soon(terminal.simulate_input, "\x1b")
            await session.run()
            return chosen

        assert asyncio.run(scenario()) == []
        assert not terminal.started

    def test_unfocused_run_does_not_take_keyboard(self) -> None:
        session, terminal, _ = _make(focus=False)

        async def scenario() -> None:
            asyncio.get_running_loop().call_soon(session.stop)
            await session.run()

        asyncio.run(scenario())
        assert terminal.start_count == 0
        assert "Query: " in terminal.output

    def test_focus_gained_while_running_acquires(self) -> None:
        session, terminal, _ = _make(focus=False)

        async def scenario() -> None:
            loop = asyncio.get_running_loop()
            loop.call_soon(session.set_focus, True)
            loop.call_soon(session.stop)
            await session.run()

        asyncio.run(scenario())
        assert (terminal.start_count, terminal.stop_count) == (1, 1)

    def test_end_of_input_cancels_and_ends_run(self) -> None:
        terminal = VirtualTerminal()
        cancelled: list[int] = []

        async def scenario() -> None:
            session = QuickSearchSession(
                ANIMALS,
                lambda item: None,
                terminal=terminal,
                theme=PlainTheme(),
                on_cancel=lambda: cancelled.append(1),
            )
            asyncio.get_running_loop().call_soon(terminal.simulate_eof)
            await session.run()

        asyncio.run(scenario())
        assert cancelled == [1]
        assert (terminal.start_count, terminal.stop_count) == (1, 1)
