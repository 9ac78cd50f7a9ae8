"""The three editable input fields: device path, baud and send."""

from __future__ import annotations

import curses
from enum import IntEnum
from typing import Callable

from tuiser.ui.keys import is_printable
from tuiser.ui.layout import INPUT_HEIGHT, FieldGeometry
from tuiser.ui.screen import safe_addstr

WindowFactory = Callable[[int, int, int, int], "curses.window"]


class FieldId(IntEnum):
    DEVICE = 0
    BAUD = 1
    SEND = 2


class TextBuffer:
    """Append-only-at-the-end text buffer with a fixed capacity."""

    def __init__(self, capacity: int) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._capacity = capacity
        self._chars: list[str] = []

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def text(self) -> str:
        return "".join(self._chars)

    @property
    def is_full(self) -> bool:
        return len(self._chars) >= self._capacity

    def __len__(self) -> int:
        return len(self._chars)

    def append(self, ch: str) -> bool:
        """Append one character; returns False (and does nothing) when full."""
        if self.is_full:
            return False
        self._chars.append(ch)
        return True

    def pop(self) -> bool:
        """Remove the last character; returns False when already empty."""
        if not self._chars:
            return False
        self._chars.pop()
        return True


class Field:
    """A bordered single-line input bound to its own curses window.

    Keys are read from the focused field's window, so each window carries
    the loop's key timeout.
    """

    def __init__(self, field_id: FieldId, geometry: FieldGeometry, window) -> None:
        self.field_id = field_id
        self.geometry = geometry
        self.window = window
        self.buffer = TextBuffer(geometry.capacity)

    @classmethod
    def create(
        cls,
        field_id: FieldId,
        geometry: FieldGeometry,
        key_timeout_ms: int,
        window_factory: WindowFactory = curses.newwin,
    ) -> Field:
        window = window_factory(INPUT_HEIGHT, geometry.width, geometry.row, geometry.col)
        window.keypad(True)
        window.timeout(key_timeout_ms)
        field = cls(field_id, geometry, window)
        field.draw()
        return field

    @property
    def text(self) -> str:
        return self.buffer.text

    @property
    def cursor_col(self) -> int:
        return self.geometry.text_offset + len(self.buffer)

    def draw(self) -> None:
        self.window.box()
        safe_addstr(self.window, 1, 2, self.geometry.label)
        safe_addstr(self.window, 1, self.geometry.text_offset, self.text)
        self.window.refresh()

    def poll_key(self) -> int:
        """Wait up to the key timeout for one key; ``curses.ERR`` on timeout."""
        self.window.move(1, self.cursor_col)
        return self.window.getch()

    def insert(self, key: int) -> bool:
        """Append the printable character *key*.

        Does nothing when the buffer is full or *key* is a control or
        non-ASCII code.
        """
        if self.buffer.is_full or not is_printable(key):
            return False
        col = self.cursor_col
        self.buffer.append(chr(key))
        safe_addstr(self.window, 1, col, chr(key))
        self.window.refresh()
        return True

    def delete(self) -> bool:
        """Remove the last character; does nothing on an empty buffer."""
        if not self.buffer.pop():
            return False
        self.window.move(1, self.cursor_col)
        self.window.clrtoeol()
        self.window.box()
        self.window.refresh()
        return True
