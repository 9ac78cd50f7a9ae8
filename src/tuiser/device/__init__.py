"""Serial device layer."""

from tuiser.device.baud import SUPPORTED_BAUDS, BaudRate, lookup_baud, parse_baud
from tuiser.device.config import LineConfig
from tuiser.device.manager import NO_DEVICE_PLACEHOLDER, DeviceManager

__all__ = [
    "NO_DEVICE_PLACEHOLDER",
    "SUPPORTED_BAUDS",
    "BaudRate",
    "DeviceManager",
    "LineConfig",
    "lookup_baud",
    "parse_baud",
]
