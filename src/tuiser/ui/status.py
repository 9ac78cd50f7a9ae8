"""Status line, error line and help banner."""

from __future__ import annotations

from tuiser.ui.keys import HELP_MSG
from tuiser.ui.layout import ERROR_ROW, HELP_ROW, STATUS_ROW
from tuiser.ui.modes import DisplayMode
from tuiser.ui.screen import centre_col, clear_line, safe_addstr

OFF_SUFFIX = " (off)"


def format_status(device_name: str, baud: int, mode: DisplayMode, monitoring: bool) -> str:
    text = f"Device: {device_name}, baud: {baud}, monitor mode: {mode.value}"
    if not monitoring:
        text += OFF_SUFFIX
    return text


class StatusReporter:
    """Draws the centred one-line status and the one-line error surface.

    Only one error is visible at a time; showing a new one replaces it.
    """

    def __init__(self, screen, cols: int) -> None:
        self._screen = screen
        self._cols = cols
        self.status_text = ""
        self.error_text: str | None = None

    def show_help(self) -> None:
        if self._cols > len(HELP_MSG):
            safe_addstr(self._screen, HELP_ROW, centre_col(self._cols, HELP_MSG), HELP_MSG)
            self._screen.refresh()

    def show_status(self, device_name: str, baud: int, mode: DisplayMode, monitoring: bool) -> None:
        self.status_text = format_status(device_name, baud, mode, monitoring)
        clear_line(self._screen, STATUS_ROW)
        safe_addstr(self._screen, STATUS_ROW, centre_col(self._cols, self.status_text), self.status_text)
        self._screen.refresh()

    def show_error(self, message: str) -> None:
        self.error_text = message
        clear_line(self._screen, ERROR_ROW)
        safe_addstr(self._screen, ERROR_ROW, centre_col(self._cols, message), message)
        self._screen.refresh()

    def clear_error(self) -> None:
        self.error_text = None
        clear_line(self._screen, ERROR_ROW)
        self._screen.refresh()
