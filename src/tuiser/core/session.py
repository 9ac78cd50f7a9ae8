"""The interactive session: one object owning all mutable state.

Each :meth:`Session.step` handles at most one key event and then at most
one device read, so keyboard latency stays bounded by one key timeout plus
one read timeout no matter how busy the device is.
"""

from __future__ import annotations

import curses
from typing import Iterable

from tuiser.cli.args import ArgKind, StartupArg
from tuiser.device.baud import parse_baud
from tuiser.device.manager import DeviceManager
from tuiser.exceptions import ArgumentError, TuiserError
from tuiser.ui.fields import Field, FieldId
from tuiser.ui.keys import KeyAction, classify
from tuiser.ui.modes import DisplayMode
from tuiser.ui.render import RenderEngine
from tuiser.ui.status import StatusReporter
from tuiser.utils.logging import get_logger

logger = get_logger(__name__)

_FOCUS_ACTIONS: dict[KeyAction, FieldId] = {
    KeyAction.FOCUS_DEVICE: FieldId.DEVICE,
    KeyAction.FOCUS_BAUD: FieldId.BAUD,
    KeyAction.FOCUS_SEND: FieldId.SEND,
}


class Session:
    """Routes keys to fields and controls, and pumps device data to the screen."""

    def __init__(
        self,
        device: DeviceManager,
        fields: dict[FieldId, Field],
        engine: RenderEngine,
        status: StatusReporter,
    ) -> None:
        self.device = device
        self.fields = fields
        self.engine = engine
        self.status = status
        self.focus = FieldId.DEVICE
        self.running = True

    @property
    def focused(self) -> Field:
        return self.fields[self.focus]

    @property
    def monitoring(self) -> bool:
        return self.engine.active

    # --- Reporting ---

    def refresh_status(self) -> None:
        self.status.show_status(
            self.device.display_name,
            self.device.baud.rate,
            self.engine.mode,
            self.engine.active,
        )

    def report(self, exc: TuiserError) -> None:
        logger.warning("session_error", error=str(exc), kind=type(exc).__name__)
        self.status.show_error(str(exc))

    # --- Main loop pieces ---

    def step(self) -> bool:
        """Run one loop iteration. Returns False once exit was requested."""
        key = self.focused.poll_key()
        if key != curses.ERR:
            self.handle_key(key)
        if not self.running:
            return False
        self.poll_device()
        return True

    def handle_key(self, key: int) -> None:
        action = classify(key)

        if action is KeyAction.EXIT:
            logger.info("exit_requested")
            self.running = False
        elif action is KeyAction.TOGGLE_MONITOR:
            self.toggle_monitor()
        elif action is KeyAction.CYCLE_MODE:
            self.engine.cycle_mode()
            self.refresh_status()
        elif action in _FOCUS_ACTIONS:
            self.focus = _FOCUS_ACTIONS[action]
        elif action is KeyAction.DELETE:
            self.focused.delete()
        elif action is KeyAction.SUBMIT:
            self.submit(self.focus)
        elif action is KeyAction.INSERT:
            self.focused.insert(key)

    def toggle_monitor(self) -> None:
        if self.engine.toggle():
            try:
                self.device.flush_input()
            except TuiserError as exc:
                self.engine.stop(clear=False)
                self.report(exc)
        self.refresh_status()

    def poll_device(self) -> None:
        """Read and draw one chunk if monitoring."""
        if not self.engine.active:
            return
        try:
            data = self.device.read()
            if data:
                self.engine.consume(data)
        except TuiserError as exc:
            if self.engine.active:
                self.engine.stop(clear=False)
            self.report(exc)
            self.refresh_status()
            return
        if not self.engine.active:
            self.refresh_status()

    # --- Field actions ---

    def submit(self, field_id: FieldId) -> None:
        """Act on the whole text of a field. The text stays in the field."""
        self.status.clear_error()
        text = self.fields[field_id].text
        logger.debug("field_submitted", field=field_id.name.lower(), length=len(text))

        try:
            if field_id is FieldId.DEVICE:
                self.device.open(text)
            elif field_id is FieldId.BAUD:
                if not text:
                    return
                self.device.set_baud(parse_baud(text))
            else:
                self.send(text)
        except TuiserError as exc:
            self.report(exc)
        finally:
            self.refresh_status()

    def send(self, text: str) -> None:
        try:
            self.device.write(text.encode("ascii"))
        except TuiserError:
            if self.engine.active:
                self.engine.stop(clear=False)
            raise

    # --- Startup ---

    def apply_startup(self, args: Iterable[StartupArg]) -> None:
        """Apply parsed command-line arguments in order.

        Problems are shown on the error line; none of them stop startup.
        """
        for arg in args:
            try:
                self._apply_arg(arg)
            except TuiserError as exc:
                self.report(exc)
        self.refresh_status()

    def _apply_arg(self, arg: StartupArg) -> None:
        if arg.kind is ArgKind.DEVICE:
            self.device.open(arg.value or "")
        elif arg.kind is ArgKind.BAUD:
            self.device.set_baud(parse_baud(arg.value or ""))
        elif arg.kind is ArgKind.MODE:
            try:
                mode = DisplayMode.parse(arg.value or "")
            except ValueError as exc:
                raise ArgumentError(str(exc)) from None
            self.engine.set_mode(mode)
        elif arg.kind is ArgKind.READ:
            if not self.engine.active:
                self.engine.start()
        elif arg.kind is ArgKind.NO_READ:
            if self.engine.active:
                self.engine.stop()
        elif arg.kind is ArgKind.BAD:
            raise ArgumentError(f"Bad argument {arg.value}")
        elif arg.kind is ArgKind.MISSING:
            raise ArgumentError(f"Missing value for {arg.value}")

    def close(self) -> None:
        self.device.close()
