"""Exception hierarchy for tuiser.

Every error except :class:`TerminalTooNarrowError` is recoverable: the
session catches it, shows it on the error line and keeps running.
"""

from __future__ import annotations

import os


class TuiserError(Exception):
    """Base exception for all tuiser errors."""

    def __init__(self, message: str, errno: int | None = None) -> None:
        self.errno = errno
        super().__init__(message)


class ArgumentError(TuiserError):
    """A command-line value or field entry was missing or invalid."""


class DeviceError(TuiserError):
    """Base for failures reported by the serial device."""


class DeviceOpenError(DeviceError):
    """The device path could not be opened or is not a terminal."""


class ConfigurationError(DeviceError):
    """The line configuration (baud, flags) could not be applied."""


class DeviceIOError(DeviceError):
    """A read or write on an open device failed."""


class DisplayTooSmallError(TuiserError):
    """The terminal is too small for the active display mode."""


class TerminalTooNarrowError(TuiserError):
    """The terminal cannot fit the input fields at all; fatal at startup."""


def os_errno(exc: BaseException) -> int | None:
    """Return the first errno found on *exc* or the exceptions behind it.

    pyserial raises ``SerialException`` without an errno from inside its
    ``except termios.error`` blocks, so the code lives on ``__context__``.
    ``termios.error`` only carries it as its first argument.
    """
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        code = getattr(current, "errno", None)
        if code is None and current.args and isinstance(current.args[0], int):
            code = current.args[0]
        if isinstance(code, int):
            return code
        current = current.__cause__ or current.__context__
    return None


def describe_os_error(exc: BaseException) -> str:
    """Return the strerror-style text for an OS-level failure.

    Falls back to the exception text when no errno is found anywhere in
    the chain.
    """
    code = os_errno(exc)
    if code is not None:
        return os.strerror(code)
    text = str(exc)
    return text or type(exc).__name__
