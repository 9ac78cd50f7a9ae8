"""curses user interface: fields, status line and live data rendering."""

from tuiser.ui.fields import Field, FieldId, TextBuffer
from tuiser.ui.layout import Layout
from tuiser.ui.modes import DisplayMode
from tuiser.ui.render import RenderEngine
from tuiser.ui.status import StatusReporter

__all__ = [
    "DisplayMode",
    "Field",
    "FieldId",
    "Layout",
    "RenderEngine",
    "StatusReporter",
    "TextBuffer",
]
