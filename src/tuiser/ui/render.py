"""Live rendering of incoming bytes in the five display modes.

The engine owns the monitoring state: whether monitoring is on, the active
mode, one cursor per mode and the grid surface used by hex/uint/int. The
grid surface only exists while a grid mode is being monitored.
"""

from __future__ import annotations

import curses
import math
from dataclasses import dataclass, field
from typing import Callable

from tuiser.exceptions import DisplayTooSmallError
from tuiser.ui.layout import TERMINAL_TOO_SMALL_MSG, Layout
from tuiser.ui.modes import GRID_COLUMNS, DisplayMode, GridFormat, to_signed
from tuiser.ui.screen import clear_below, safe_addstr
from tuiser.utils.logging import get_logger

logger = get_logger(__name__)

GRAPH_MARKER = "X"
NEWLINE = 0x0A

WindowFactory = Callable[[int, int, int, int], "curses.window"]


def char_token(byte: int) -> str:
    """Text drawn for *byte* in char mode (newlines are handled separately)."""
    if 0x20 <= byte < 0x7F:
        return chr(byte)
    return f"<0x{byte:02X}>"


def round_half_away(value: float) -> int:
    """Round to nearest, ties away from zero (C ``round``)."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def graph_row(byte: int, layout: Layout) -> int:
    """Screen row of the graph marker for *byte*.

    The signed byte range maps linearly onto the data rows, centred on
    the middle row: 0x00 sits on the centre, 0x7F near the top and 0x80
    on the bottom.
    """
    return layout.graph_center - round_half_away(to_signed(byte) / layout.graph_scalar)


@dataclass
class Cursor:
    row: int = 0
    col: int = 0


@dataclass
class MonitorState:
    active: bool = False
    mode: DisplayMode = DisplayMode.CHAR
    cursors: dict[DisplayMode, Cursor] = field(default_factory=dict)
    grid: object | None = None


class RenderEngine:
    """Consumes chunks of device bytes and draws them for the active mode."""

    def __init__(
        self,
        screen,
        layout: Layout,
        mode: DisplayMode = DisplayMode.CHAR,
        window_factory: WindowFactory = curses.newwin,
    ) -> None:
        self._screen = screen
        self._layout = layout
        self._window_factory = window_factory
        self.state = MonitorState(mode=mode)
        self.reset_cursors()

    @property
    def active(self) -> bool:
        return self.state.active

    @property
    def mode(self) -> DisplayMode:
        return self.state.mode

    @property
    def grid(self):
        return self.state.grid

    def cursor(self, mode: DisplayMode | None = None) -> Cursor:
        return self.state.cursors[mode or self.state.mode]

    def origin(self, mode: DisplayMode) -> Cursor:
        if mode is DisplayMode.CHAR:
            return Cursor(self._layout.data_start_row, 0)
        return Cursor(0, 0)

    def reset_cursors(self) -> None:
        self.state.cursors = {mode: self.origin(mode) for mode in DisplayMode}

    def clear_data_region(self) -> None:
        clear_below(self._screen, self._layout.data_start_row)
        self._screen.refresh()

    # --- State transitions ---

    def start(self) -> None:
        """Turn monitoring on with a clean data region and fresh cursors."""
        self.clear_data_region()
        self.reset_cursors()
        self.state.active = True
        logger.info("monitor_started", mode=self.state.mode.value)

    def stop(self, clear: bool = True) -> None:
        """Turn monitoring off and drop the grid surface.

        With ``clear=False`` whatever has been drawn stays on screen, which
        is how an automatic stop (screen full, error) leaves it.
        """
        self.state.active = False
        self.state.grid = None
        self.reset_cursors()
        if clear:
            self.clear_data_region()
        logger.info("monitor_stopped", mode=self.state.mode.value, cleared=clear)

    def toggle(self) -> bool:
        if self.state.active:
            self.stop()
        else:
            self.start()
        return self.state.active

    def set_mode(self, mode: DisplayMode) -> None:
        self.state.mode = mode
        self.state.grid = None
        self.reset_cursors()
        self.clear_data_region()
        logger.info("mode_changed", mode=mode.value)

    def cycle_mode(self) -> DisplayMode:
        self.set_mode(self.state.mode.next())
        return self.state.mode

    def _halt(self, reason: str) -> None:
        # Keep what is on screen; only the live state goes.
        self.state.active = False
        self.state.grid = None
        logger.info("monitor_halted", mode=self.state.mode.value, reason=reason)

    # --- Rendering ---

    def consume(self, data: bytes) -> bool:
        """Draw one chunk of incoming bytes.

        Returns whether monitoring is still active afterwards; it stops on
        its own when the char log or the grid is full.

        Raises:
            DisplayTooSmallError: If the terminal cannot fit the active
                mode. Monitoring is stopped first.
        """
        if not data or not self.state.active:
            return self.state.active

        mode = self.state.mode
        if mode is DisplayMode.CHAR:
            self._render_char(data)
        elif mode is DisplayMode.GRAPH:
            self._render_graph(data)
        else:
            grid = mode.grid
            assert grid is not None
            self._render_grid(data, grid)
        return self.state.active

    def _render_char(self, data: bytes) -> None:
        if not self._layout.has_data_room:
            self._halt("too_small")
            raise DisplayTooSmallError(TERMINAL_TOO_SMALL_MSG)

        cur = self.cursor(DisplayMode.CHAR)
        last_row = self._layout.rows - 1
        cols = self._layout.cols

        for index, byte in enumerate(data):
            if byte == NEWLINE:
                if cur.row >= last_row:
                    self._halt("screen_full")
                    logger.debug("char_log_dropped", count=len(data) - index)
                    break
                self._screen.move(cur.row, cur.col)
                self._screen.clrtoeol()
                cur.row += 1
                cur.col = 0
                continue

            for ch in char_token(byte):
                safe_addstr(self._screen, cur.row, cur.col, ch)
                cur.col += 1
                if cur.col >= cols:
                    cur.row += 1
                    cur.col = 0
                if cur.row >= last_row and cur.col >= cols - 1:
                    break
            if cur.row >= last_row and cur.col >= cols - 1:
                self._halt("screen_full")
                logger.debug("char_log_dropped", count=len(data) - index - 1)
                break

        self._screen.refresh()

    def _render_graph(self, data: bytes) -> None:
        layout = self._layout
        if not layout.has_graph_room:
            self._halt("too_small")
            raise DisplayTooSmallError(TERMINAL_TOO_SMALL_MSG)

        cur = self.cursor(DisplayMode.GRAPH)
        for byte in data:
            if cur.col >= layout.cols - 1:
                cur.col = 0
            for row in range(layout.data_start_row, layout.rows):
                safe_addstr(self._screen, row, cur.col, " ")
            cur.row = graph_row(byte, layout)
            safe_addstr(self._screen, cur.row, cur.col, GRAPH_MARKER)
            cur.col += 1

        self._screen.refresh()

    def _ensure_grid(self, fmt: GridFormat):
        if self.state.grid is not None:
            return self.state.grid

        layout = self._layout
        width = fmt.surface_width
        # Needs a border row above and below at least one value row.
        if layout.cols <= width or layout.data_rows < 3:
            self._halt("too_small")
            raise DisplayTooSmallError(TERMINAL_TOO_SMALL_MSG)

        grid = self._window_factory(
            layout.data_rows,
            width,
            layout.data_start_row,
            (layout.cols - width + 1) // 2,
        )
        grid.box()
        grid.refresh()
        self.state.grid = grid
        logger.debug("grid_created", mode=self.state.mode.value, width=width, rows=layout.data_rows)
        return grid

    def _render_grid(self, data: bytes, fmt: GridFormat) -> None:
        grid = self._ensure_grid(fmt)
        cur = self.cursor()
        value_rows = self._layout.data_rows - 2

        for byte in data:
            if cur.col >= GRID_COLUMNS:
                cur.row += 1
                cur.col = 0
            if cur.row >= value_rows:
                self._halt("grid_full")
                break
            # +1 for the border, +1 for padding
            safe_addstr(grid, cur.row + 1, cur.col * fmt.cell_width + 2, fmt.render(byte))
            cur.col += 1

        grid.refresh()
