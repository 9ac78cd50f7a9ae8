"""Display modes and their rendering parameters."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Callable

# Values per grid row in hex/uint/int modes.
GRID_COLUMNS = 16

BAD_MODE_MSG = "Bad mode argument; must be char, graph, hex, uint, or int"


def to_signed(byte: int) -> int:
    """Interpret an unsigned byte as a two's-complement int8."""
    return byte - 0x100 if byte & 0x80 else byte


@dataclass(frozen=True)
class GridFormat:
    """How one grid mode lays out a value.

    ``value_width`` is the printed width of a value; each cell adds one
    separator column. The surface holds :data:`GRID_COLUMNS` cells plus a
    border and one column of padding on each side, minus the trailing
    separator.
    """

    value_width: int
    render: Callable[[int], str]

    @property
    def cell_width(self) -> int:
        return self.value_width + 1

    @property
    def surface_width(self) -> int:
        return GRID_COLUMNS * self.cell_width + 4 - 1


class DisplayMode(StrEnum):
    """How incoming bytes are drawn. Declaration order is the cycle order."""

    CHAR = "char"
    GRAPH = "graph"
    HEX = "hex"
    UINT = "uint"
    INT = "int"

    @property
    def grid(self) -> GridFormat | None:
        """Grid parameters, or ``None`` for the full-screen modes."""
        return _GRID_FORMATS.get(self)

    @property
    def is_grid(self) -> bool:
        return self in _GRID_FORMATS

    def next(self) -> DisplayMode:
        members = list(DisplayMode)
        return members[(members.index(self) + 1) % len(members)]

    @classmethod
    def parse(cls, name: str) -> DisplayMode:
        """Look up a mode by its name.

        Raises:
            ValueError: If *name* is not a mode name.
        """
        try:
            return cls(name)
        except ValueError:
            raise ValueError(BAD_MODE_MSG) from None


_GRID_FORMATS: dict[DisplayMode, GridFormat] = {
    DisplayMode.HEX: GridFormat(2, lambda b: f"{b:2X}"),
    DisplayMode.UINT: GridFormat(3, lambda b: f"{b:3d}"),
    DisplayMode.INT: GridFormat(4, lambda b: f"{to_signed(b):4d}"),
}
