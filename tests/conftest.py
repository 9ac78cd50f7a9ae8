"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import curses
import os
import sys

import pytest

from tuiser.ui.layout import Layout


class FakeWindow:
    """Stand-in for a curses window that records every drawn cell."""

    def __init__(self, rows: int = 24, cols: int = 80, begin_y: int = 0, begin_x: int = 0) -> None:
        self.rows = rows
        self.cols = cols
        self.begin_y = begin_y
        self.begin_x = begin_x
        self.cells: dict[tuple[int, int], str] = {}
        self.cursor = (0, 0)
        self.keys: list[int] = []
        self.boxed = 0
        self.refreshes = 0
        self.key_timeout: int | None = None
        self.keypad_enabled = False

    # drawing
    def getmaxyx(self) -> tuple[int, int]:
        return self.rows, self.cols

    def addstr(self, row: int, col: int, text: str, attr: int = 0) -> None:
        for offset, ch in enumerate(text):
            self.cells[(row, col + offset)] = ch
        self.cursor = (row, col + len(text))

    def move(self, row: int, col: int) -> None:
        self.cursor = (row, col)

    def clrtoeol(self) -> None:
        row, col = self.cursor
        for key in [k for k in self.cells if k[0] == row and k[1] >= col]:
            del self.cells[key]

    def clrtobot(self) -> None:
        row, col = self.cursor
        for key in [k for k in self.cells if k[0] > row or (k[0] == row and k[1] >= col)]:
            del self.cells[key]

    def box(self) -> None:
        self.boxed += 1

    def refresh(self) -> None:
        self.refreshes += 1

    def clear(self) -> None:
        self.cells.clear()

    # input
    def keypad(self, flag: bool) -> None:
        self.keypad_enabled = flag

    def timeout(self, ms: int) -> None:
        self.key_timeout = ms

    def getch(self) -> int:
        return self.keys.pop(0) if self.keys else curses.ERR

    # inspection helpers
    def row_text(self, row: int) -> str:
        cols = sorted(col for (r, col) in self.cells if r == row)
        if not cols:
            return ""
        return "".join(self.cells.get((row, c), " ") for c in range(cols[0], cols[-1] + 1))

    def cell(self, row: int, col: int) -> str | None:
        return self.cells.get((row, col))


class WindowFactory:
    """Callable matching ``curses.newwin`` that hands out FakeWindows."""

    def __init__(self) -> None:
        self.created: list[FakeWindow] = []

    def __call__(self, rows: int, cols: int, begin_y: int, begin_x: int) -> FakeWindow:
        win = FakeWindow(rows, cols, begin_y, begin_x)
        self.created.append(win)
        return win


@pytest.fixture
def screen() -> FakeWindow:
    return FakeWindow(24, 80)


@pytest.fixture
def layout() -> Layout:
    return Layout.from_size(24, 80)


@pytest.fixture
def window_factory() -> WindowFactory:
    return WindowFactory()


@pytest.fixture
def pty_pair():
    """A pseudo-terminal: (master fd, slave path). Closed after the test."""
    if sys.platform == "win32":
        pytest.skip("pseudo-terminals need a POSIX platform")
    master, slave = os.openpty()
    path = os.ttyname(slave)
    yield master, path
    os.close(master)
    os.close(slave)


@pytest.fixture
def make_screen():
    """Build a FakeWindow of an arbitrary size to stand in for ``stdscr``."""
    return FakeWindow
