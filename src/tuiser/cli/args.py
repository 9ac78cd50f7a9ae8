"""Scanning of the session flags (-b, -d, -m, -r, -n).

These are not handed to click as options because a bad or incomplete flag
must be reported on the error line without aborting startup. The scan keeps
the order of the command line so later flags act on the state left by
earlier ones.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Sequence


class ArgKind(StrEnum):
    DEVICE = "device"
    BAUD = "baud"
    MODE = "mode"
    READ = "read"
    NO_READ = "no_read"
    BAD = "bad"
    MISSING = "missing"


@dataclass(frozen=True)
class StartupArg:
    kind: ArgKind
    value: str | None = None


_VALUE_FLAGS: dict[str, ArgKind] = {
    "-b": ArgKind.BAUD,
    "--baud": ArgKind.BAUD,
    "-d": ArgKind.DEVICE,
    "--device": ArgKind.DEVICE,
    "-m": ArgKind.MODE,
    "--mode": ArgKind.MODE,
}

_SWITCH_FLAGS: dict[str, ArgKind] = {
    "-r": ArgKind.READ,
    "--read": ArgKind.READ,
    "-n": ArgKind.NO_READ,
    "--no-read": ArgKind.NO_READ,
}


def parse_startup_args(argv: Sequence[str]) -> list[StartupArg]:
    """Turn raw arguments into an ordered list of startup actions.

    A value flag consumes the next argument whatever it looks like. A value
    flag at the very end yields a ``MISSING`` entry naming it; anything
    unrecognised yields a ``BAD`` entry.
    """
    result: list[StartupArg] = []
    pending: ArgKind | None = None

    for arg in argv:
        if pending is not None:
            result.append(StartupArg(pending, arg))
            pending = None
        elif arg in _VALUE_FLAGS:
            pending = _VALUE_FLAGS[arg]
        elif arg in _SWITCH_FLAGS:
            result.append(StartupArg(_SWITCH_FLAGS[arg]))
        else:
            result.append(StartupArg(ArgKind.BAD, arg))

    if pending is not None:
        result.append(StartupArg(ArgKind.MISSING, argv[-1]))
    return result
