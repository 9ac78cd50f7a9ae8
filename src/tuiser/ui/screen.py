"""Small curses drawing helpers shared by the UI components."""

from __future__ import annotations

import curses


def centre_col(width: int, text: str) -> int:
    """Column at which *text* is centred on a line *width* cells wide."""
    return max(0, (width - len(text) + 1) // 2)


def safe_addstr(win, row: int, col: int, text: str, attr: int = curses.A_NORMAL) -> None:
    """Draw *text* clipped to the window.

    Writing into the bottom-right cell advances the cursor off the window
    and makes curses report an error even though the text was drawn, so
    that error is ignored.
    """
    max_y, max_x = win.getmaxyx()
    if row < 0 or row >= max_y or col < 0 or col >= max_x:
        return
    text = text[: max_x - col]
    if not text:
        return
    try:
        win.addstr(row, col, text, attr)
    except curses.error:
        pass


def clear_line(win, row: int) -> None:
    max_y, _ = win.getmaxyx()
    if 0 <= row < max_y:
        win.move(row, 0)
        win.clrtoeol()


def clear_below(win, row: int) -> None:
    """Erase from the start of *row* to the bottom of the window."""
    max_y, _ = win.getmaxyx()
    if 0 <= row < max_y:
        win.move(row, 0)
        win.clrtobot()
