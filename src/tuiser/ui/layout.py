"""Screen geometry, computed once from the terminal size at startup."""

from __future__ import annotations

from dataclasses import dataclass

from tuiser.exceptions import DisplayTooSmallError, TerminalTooNarrowError

HELP_ROW = 7
ERROR_ROW = 9
STATUS_ROW = 10
DATA_START_ROW = 12

INPUT_PADDING = 2
INPUT_HEIGHT = 3
DEVICE_ROW = 1
BAUD_ROW = 1
SEND_ROW = 4

DEVICE_LABEL = "Dev. path: "
BAUD_LABEL = "Baud: "
SEND_LABEL = "Send: "

# Graph mode needs at least this many rows below DATA_START_ROW.
MIN_GRAPH_ROWS = 5
TERMINAL_TOO_SMALL_MSG = "Terminal too small, use another mode"


@dataclass(frozen=True)
class FieldGeometry:
    """Placement of one bordered input field."""

    row: int
    col: int
    width: int
    label: str

    @property
    def text_offset(self) -> int:
        """Column of the first text character inside the field window."""
        return len(self.label) + 2

    @property
    def capacity(self) -> int:
        """Characters that fit between the label and the right border."""
        return self.width - self.text_offset - 2


@dataclass(frozen=True)
class Layout:
    rows: int
    cols: int
    data_rows: int
    device: FieldGeometry
    baud: FieldGeometry
    send: FieldGeometry

    data_start_row: int = DATA_START_ROW

    @classmethod
    def from_size(cls, rows: int, cols: int) -> Layout:
        """Compute the layout for a *rows* x *cols* terminal.

        Raises:
            TerminalTooNarrowError: If any field has no room for text.
        """
        # Odd, so values near zero land on one graph row instead of two.
        data_rows = rows - DATA_START_ROW
        data_rows -= (data_rows + 1) & 1

        half = (cols - 3 * INPUT_PADDING) // 2
        device_width = half + (cols + 1) % 2
        baud_width = half
        send_width = cols - 2 * INPUT_PADDING

        layout = cls(
            rows=rows,
            cols=cols,
            data_rows=data_rows,
            device=FieldGeometry(DEVICE_ROW, INPUT_PADDING, device_width, DEVICE_LABEL),
            baud=FieldGeometry(BAUD_ROW, cols - INPUT_PADDING - baud_width, baud_width, BAUD_LABEL),
            send=FieldGeometry(SEND_ROW, INPUT_PADDING, send_width, SEND_LABEL),
        )
        for geometry in (layout.device, layout.baud, layout.send):
            if geometry.capacity <= 0:
                raise TerminalTooNarrowError(
                    "Terminal too narrow to fit the input fields"
                )
        return layout

    @property
    def graph_center(self) -> int:
        return self.data_start_row + self.data_rows // 2

    @property
    def graph_scalar(self) -> float:
        """Signed byte values per graph row.

        Raises:
            DisplayTooSmallError: If there is no room to plot a graph.
        """
        if not self.has_graph_room:
            raise DisplayTooSmallError(TERMINAL_TOO_SMALL_MSG)
        half = (self.data_rows - 1) // 2
        # Rounding to the nearest row leaves the top and bottom rows with
        # half as many values as the interior rows.
        return 0x80 / half

    @property
    def has_graph_room(self) -> bool:
        return self.rows - self.data_start_row >= MIN_GRAPH_ROWS

    @property
    def has_data_room(self) -> bool:
        return self.rows > self.data_start_row
