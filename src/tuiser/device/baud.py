"""Supported baud rates and their termios encodings."""

from __future__ import annotations

import termios
from dataclasses import dataclass

from tuiser.exceptions import ArgumentError

BAD_BAUD_MSG = "Bad baudrate; check `man 3 termios` for a full list of baudrates"

DEFAULT_BAUD = 115200

# Rates offered to the operator. Entries whose B* constant the running
# platform does not define are dropped from SUPPORTED_BAUDS.
BAUD_TABLE: tuple[int, ...] = (
    50, 75, 110, 134, 150, 200, 300, 600, 1200, 1800, 2400, 4800, 9600,
    19200, 38400, 57600, 115200, 230400, 460800, 500000, 576000, 921600,
    1000000, 1152000, 1500000, 2000000,
)


@dataclass(frozen=True)
class BaudRate:
    """A numeric baud rate paired with its platform ``termios.B*`` constant."""

    rate: int
    constant: int

    def __str__(self) -> str:
        return str(self.rate)


def _build_supported() -> dict[int, BaudRate]:
    supported: dict[int, BaudRate] = {}
    for rate in BAUD_TABLE:
        constant = getattr(termios, f"B{rate}", None)
        if constant is not None:
            supported[rate] = BaudRate(rate, constant)
    return supported


SUPPORTED_BAUDS: dict[int, BaudRate] = _build_supported()

_BY_CONSTANT: dict[int, BaudRate] = {b.constant: b for b in SUPPORTED_BAUDS.values()}


def lookup_baud(rate: int) -> BaudRate:
    """Return the supported :class:`BaudRate` for *rate*.

    Raises:
        ArgumentError: If *rate* is not in the supported set.
    """
    try:
        return SUPPORTED_BAUDS[rate]
    except KeyError:
        raise ArgumentError(BAD_BAUD_MSG) from None


def baud_from_constant(constant: int) -> BaudRate | None:
    """Map a ``termios.B*`` speed back to its :class:`BaudRate`."""
    return _BY_CONSTANT.get(constant)


def parse_baud(text: str) -> int:
    """Parse a baud entry the way C ``atoi`` does.

    Leading whitespace and an optional sign are accepted, parsing stops at
    the first non-digit, and text with no leading number yields 0.
    """
    stripped = text.lstrip()
    end = 0
    if stripped[:1] in ("+", "-"):
        end = 1
    start_digits = end
    while end < len(stripped) and stripped[end] in "0123456789":
        end += 1
    if end == start_digits:
        return 0
    return int(stripped[:end])
