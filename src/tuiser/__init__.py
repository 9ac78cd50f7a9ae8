"""tuiser - interactive curses monitor for a single serial device."""

__version__ = "0.1.0"
