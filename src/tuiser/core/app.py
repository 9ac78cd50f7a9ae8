"""Terminal bootstrap and the main polling loop."""

from __future__ import annotations

import curses
from typing import Sequence

from tuiser.cli.args import StartupArg
from tuiser.config import AppConfig
from tuiser.core.session import Session
from tuiser.device.manager import DeviceManager
from tuiser.ui.fields import Field, FieldId, WindowFactory
from tuiser.ui.layout import Layout
from tuiser.ui.render import RenderEngine
from tuiser.ui.status import StatusReporter
from tuiser.utils.logging import get_logger

logger = get_logger(__name__)


def build_session(
    stdscr,
    config: AppConfig,
    window_factory: WindowFactory = curses.newwin,
    device: DeviceManager | None = None,
) -> Session:
    """Lay out the screen and wire up every component of a session.

    Raises:
        TerminalTooNarrowError: If the input fields cannot fit.
    """
    rows, cols = stdscr.getmaxyx()
    layout = Layout.from_size(rows, cols)
    logger.info("layout_computed", rows=rows, cols=cols, data_rows=layout.data_rows)
    stdscr.refresh()

    fields = {
        field_id: Field.create(field_id, geometry, config.key_timeout_ms, window_factory)
        for field_id, geometry in (
            (FieldId.DEVICE, layout.device),
            (FieldId.BAUD, layout.baud),
            (FieldId.SEND, layout.send),
        )
    }
    if device is None:
        device = DeviceManager(read_timeout=config.read_timeout, read_chunk=config.read_chunk)
    status = StatusReporter(stdscr, cols)
    engine = RenderEngine(stdscr, layout, window_factory=window_factory)
    status.show_help()
    return Session(device, fields, engine, status)


def run(stdscr, config: AppConfig, startup: Sequence[StartupArg]) -> None:
    """Body of the curses session; ``curses.wrapper`` restores the terminal."""
    curses.raw()
    curses.noecho()
    stdscr.timeout(config.key_timeout_ms)
    stdscr.clear()

    session = build_session(stdscr, config)
    try:
        session.apply_startup(startup)
        while session.step():
            pass
    finally:
        session.close()
        logger.info("session_closed")


def main(config: AppConfig, startup: Sequence[StartupArg]) -> None:
    curses.wrapper(run, config, startup)
