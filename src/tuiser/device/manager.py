"""Serial device ownership: open, configure, read, write, release.

Every failure is non-fatal. The handle is released, the path is kept for
display and a :class:`~tuiser.exceptions.DeviceError` describes what went
wrong so the session can put it on the error line.
"""

from __future__ import annotations

import errno
import os
import termios
from typing import Callable, NoReturn

import serial

from tuiser.config import DEFAULT_READ_CHUNK, DEFAULT_READ_TIMEOUT_S
from tuiser.device.baud import BaudRate, lookup_baud
from tuiser.device.config import LineConfig
from tuiser.exceptions import (
    ConfigurationError,
    DeviceIOError,
    DeviceOpenError,
    describe_os_error,
    os_errno,
)
from tuiser.utils.logging import get_logger

logger = get_logger(__name__)

NO_DEVICE_PLACEHOLDER = "<none>"
DEVICE_FAIL_MSG = "Can't access device: "
BAUD_SET_FAIL_MSG = "Can't set baud: "
NO_DEVICE_MSG = "No device open for I/O"

# Everything the OS, termios or pyserial can raise at us.
_DEVICE_ERRORS = (OSError, termios.error, serial.SerialException, ValueError)

SerialFactory = Callable[..., serial.Serial]


class DeviceManager:
    """Owns the single serial handle and its line configuration.

    Usage:
        with DeviceManager() as dev:
            dev.open("/dev/ttyUSB0")
            dev.set_baud(9600)
            data = dev.read()
    """

    def __init__(
        self,
        config: LineConfig | None = None,
        read_timeout: float = DEFAULT_READ_TIMEOUT_S,
        read_chunk: int = DEFAULT_READ_CHUNK,
        serial_factory: SerialFactory = serial.Serial,
    ) -> None:
        self._config = config or LineConfig()
        self._read_timeout = read_timeout
        self._read_chunk = read_chunk
        self._serial_factory = serial_factory
        self._path: str | None = None
        self._handle: serial.Serial | None = None

    @property
    def path(self) -> str | None:
        return self._path

    @property
    def display_name(self) -> str:
        return self._path if self._path else NO_DEVICE_PLACEHOLDER

    @property
    def config(self) -> LineConfig:
        return self._config

    @property
    def baud(self) -> BaudRate:
        """Active baud, re-derived from the live configuration."""
        return self._config.baud

    @property
    def is_open(self) -> bool:
        return self._handle is not None

    def __enter__(self) -> DeviceManager:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    # --- Lifecycle ---

    def open(self, path: str) -> None:
        """Open *path*, replacing any open device.

        An empty path just clears the device; it is not an error.

        Raises:
            DeviceOpenError: If the path cannot be opened, is not a
                terminal, or rejects the stored line configuration.
        """
        self.close()
        if not path:
            self._path = None
            logger.info("device_cleared")
            return
        self._path = path
        self.reopen()

    def reopen(self) -> None:
        """Reopen the remembered path with the current configuration."""
        self.close()
        if not self._path:
            return

        logger.info("device_opening", path=self._path, baud=self.baud.rate)
        handle = None
        try:
            handle = self._serial_factory(
                port=self._path,
                baudrate=self.baud.rate,
                timeout=self._read_timeout,
                write_timeout=0,
            )
            fd = handle.fileno()
            if not os.isatty(fd):
                raise OSError(errno.ENOTTY, os.strerror(errno.ENOTTY))
            self._config.apply(fd)
            handle.reset_input_buffer()
        except _DEVICE_ERRORS as exc:
            if handle is not None:
                self._release(handle)
            reason = describe_os_error(exc)
            logger.warning("device_open_failed", path=self._path, error=reason)
            raise DeviceOpenError(DEVICE_FAIL_MSG + reason, errno=os_errno(exc)) from exc

        self._handle = handle
        logger.info("device_opened", path=self._path)

    def close(self) -> None:
        """Release the handle if one is open. Safe to call repeatedly."""
        if self._handle is None:
            return
        handle, self._handle = self._handle, None
        self._release(handle)
        logger.info("device_closed", path=self._path)

    def _release(self, handle: serial.Serial) -> None:
        try:
            handle.close()
        except _DEVICE_ERRORS as exc:
            logger.debug("device_close_error", path=self._path, error=str(exc))

    # --- Configuration ---

    def set_baud(self, rate: int) -> None:
        """Switch to *rate*, reopening the device if one is open.

        Raises:
            ArgumentError: If *rate* is not supported; nothing changes.
            ConfigurationError: If the open device rejects the new rate.
                The handle is released but the new rate is kept.
        """
        baud = lookup_baud(rate)
        self._config = self._config.with_baud(baud)
        logger.info("baud_set", baud=baud.rate)

        if not self.is_open:
            return
        try:
            self.reopen()
        except DeviceOpenError as exc:
            reason = describe_os_error(exc.__cause__) if exc.__cause__ else str(exc)
            raise ConfigurationError(BAUD_SET_FAIL_MSG + reason, errno=exc.errno) from exc

    def flush_input(self) -> None:
        """Discard input that arrived but has not been read."""
        if self._handle is None:
            return
        try:
            self._handle.reset_input_buffer()
        except _DEVICE_ERRORS as exc:
            self._fail("flush", exc)

    # --- I/O ---

    def read(self) -> bytes:
        """Read up to one chunk, waiting at most the read timeout.

        Returns ``b""`` when nothing arrived; that is not end of stream.

        Raises:
            DeviceIOError: If no device is open or the read failed.
        """
        if self._handle is None:
            raise DeviceIOError(NO_DEVICE_MSG)
        try:
            data = self._handle.read(self._read_chunk)
        except _DEVICE_ERRORS as exc:
            self._fail("read", exc)
        if data:
            logger.debug("device_read", count=len(data))
        return bytes(data)

    def write(self, data: bytes) -> int:
        """Write *data* once, best effort. Returns the count written.

        Raises:
            DeviceIOError: If no device is open or the write failed.
        """
        if self._handle is None:
            raise DeviceIOError(NO_DEVICE_MSG)
        try:
            written = self._handle.write(data)
        except _DEVICE_ERRORS as exc:
            self._fail("write", exc)
        logger.debug("device_write", requested=len(data), written=written)
        return written if written is not None else len(data)

    def _fail(self, operation: str, exc: BaseException) -> NoReturn:
        reason = describe_os_error(exc)
        logger.warning("device_io_failed", path=self._path, operation=operation, error=reason)
        self.close()
        raise DeviceIOError(DEVICE_FAIL_MSG + reason, errno=os_errno(exc)) from exc
