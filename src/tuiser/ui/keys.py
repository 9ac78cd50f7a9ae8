"""Key bindings and classification of raw curses key codes."""

from __future__ import annotations

import curses
from enum import Enum, auto

HELP_MSG = (
    "Ctrl-WASD to select input, Ctrl-Z to change monitor mode, "
    "Ctrl-X to toggle monitor, Ctrl-C to exit"
)

PRINTABLE_MIN = 0x20
PRINTABLE_MAX = 0x7E


def ctrl(ch: str) -> int:
    """Key code produced by Ctrl + *ch* in raw mode."""
    return ord(ch) & 0x1F


class KeyAction(Enum):
    NONE = auto()
    EXIT = auto()
    TOGGLE_MONITOR = auto()
    CYCLE_MODE = auto()
    FOCUS_DEVICE = auto()
    FOCUS_BAUD = auto()
    FOCUS_SEND = auto()
    DELETE = auto()
    SUBMIT = auto()
    INSERT = auto()


# Ctrl-J is '\n', so the WASD chords stand in for hjkl.
_BINDINGS: dict[int, KeyAction] = {
    ctrl("c"): KeyAction.EXIT,
    ctrl("x"): KeyAction.TOGGLE_MONITOR,
    ctrl("z"): KeyAction.CYCLE_MODE,
    curses.KEY_UP: KeyAction.FOCUS_DEVICE,
    ctrl("w"): KeyAction.FOCUS_DEVICE,
    curses.KEY_RIGHT: KeyAction.FOCUS_DEVICE,
    ctrl("a"): KeyAction.FOCUS_DEVICE,
    curses.KEY_DOWN: KeyAction.FOCUS_SEND,
    ctrl("s"): KeyAction.FOCUS_SEND,
    curses.KEY_LEFT: KeyAction.FOCUS_BAUD,
    ctrl("d"): KeyAction.FOCUS_BAUD,
    curses.KEY_BACKSPACE: KeyAction.DELETE,
    curses.KEY_DC: KeyAction.DELETE,
    curses.KEY_DL: KeyAction.DELETE,
    ctrl("h"): KeyAction.DELETE,
    0x7F: KeyAction.DELETE,
    curses.KEY_ENTER: KeyAction.SUBMIT,
    ord("\n"): KeyAction.SUBMIT,
    ord("\r"): KeyAction.SUBMIT,
}


def is_printable(key: int) -> bool:
    return PRINTABLE_MIN <= key <= PRINTABLE_MAX


def classify(key: int) -> KeyAction:
    """Map a ``getch`` result to the action it triggers.

    ``curses.ERR`` (the poll timed out) and unbound keys yield
    :attr:`KeyAction.NONE`.
    """
    action = _BINDINGS.get(key)
    if action is not None:
        return action
    if is_printable(key):
        return KeyAction.INSERT
    return KeyAction.NONE
