"""Session state and the main loop."""

from tuiser.core.session import Session

__all__ = ["Session"]
