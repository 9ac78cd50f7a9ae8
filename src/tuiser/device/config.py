"""Serial line configuration."""

from __future__ import annotations

import dataclasses
import termios
from dataclasses import dataclass, field

from tuiser.device.baud import DEFAULT_BAUD, SUPPORTED_BAUDS, BaudRate, baud_from_constant

# termios attribute list indices
IFLAG, OFLAG, CFLAG, LFLAG, ISPEED, OSPEED, CC = range(7)


def _default_baud() -> BaudRate:
    return SUPPORTED_BAUDS[DEFAULT_BAUD]


@dataclass(frozen=True)
class LineConfig:
    """Raw 8-bit line discipline: no echo, no translation, breaks ignored.

    ``input_speed`` and ``output_speed`` hold ``termios.B*`` constants, as
    ``cfgetispeed``/``cfgetospeed`` would report them.
    """

    input_flags: int = termios.IGNBRK | termios.IGNPAR
    control_flags: int = termios.CS8 | termios.CREAD | termios.CLOCAL
    input_speed: int = field(default_factory=lambda: _default_baud().constant)
    output_speed: int = field(default_factory=lambda: _default_baud().constant)

    @property
    def baud(self) -> BaudRate:
        """The active baud, derived from the output speed each time."""
        found = baud_from_constant(self.output_speed)
        return found if found is not None else _default_baud()

    def with_baud(self, baud: BaudRate) -> LineConfig:
        return dataclasses.replace(self, input_speed=baud.constant, output_speed=baud.constant)

    def to_attributes(self, current: list) -> list:
        """Merge this configuration into a ``tcgetattr`` attribute list."""
        attrs = list(current)
        attrs[IFLAG] = self.input_flags
        attrs[OFLAG] = 0
        attrs[CFLAG] = self.control_flags
        attrs[LFLAG] = 0
        attrs[ISPEED] = self.input_speed
        attrs[OSPEED] = self.output_speed
        return attrs

    def apply(self, fd: int) -> None:
        """Apply the configuration to an open terminal file descriptor.

        Raises:
            termios.error: If the descriptor is not a terminal or the
                driver rejects the settings.
        """
        attrs = self.to_attributes(termios.tcgetattr(fd))
        termios.tcsetattr(fd, termios.TCSANOW, attrs)
