"""Runtime settings resolution.

Search order for each setting:
    1. Explicit value passed by the caller (command-line option)
    2. ``TUISER_*`` environment variable
    3. Built-in default
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, Field

ENV_PREFIX = "TUISER_"

# Key wait per loop iteration; also bounds input latency.
DEFAULT_KEY_TIMEOUT_MS = 50

# Device read wait; kept well under the key wait so a silent device
# cannot stall the keyboard.
DEFAULT_READ_TIMEOUT_S = 0.01

DEFAULT_READ_CHUNK = 63


class AppConfig(BaseModel):
    """Settings for one tuiser session."""

    key_timeout_ms: int = Field(default=DEFAULT_KEY_TIMEOUT_MS, gt=0)
    read_timeout: float = Field(default=DEFAULT_READ_TIMEOUT_S, ge=0.0)
    read_chunk: int = Field(default=DEFAULT_READ_CHUNK, gt=0)
    log_file: Path | None = None
    log_level: str = "INFO"
    json_logs: bool = False

    @classmethod
    def resolve(
        cls,
        log_file: Path | str | None = None,
        debug: bool = False,
        json_logs: bool | None = None,
    ) -> AppConfig:
        """Build a config from explicit values, then the environment."""
        values: dict[str, object] = {}

        env_log_file = os.environ.get(f"{ENV_PREFIX}LOG_FILE")
        if log_file is not None:
            values["log_file"] = Path(log_file)
        elif env_log_file:
            values["log_file"] = Path(env_log_file)

        if debug:
            values["log_level"] = "DEBUG"
        elif os.environ.get(f"{ENV_PREFIX}LOG_LEVEL"):
            values["log_level"] = os.environ[f"{ENV_PREFIX}LOG_LEVEL"].upper()

        if json_logs is not None:
            values["json_logs"] = json_logs
        elif os.environ.get(f"{ENV_PREFIX}JSON_LOGS"):
            values["json_logs"] = os.environ[f"{ENV_PREFIX}JSON_LOGS"].lower() in ("1", "true", "yes")

        for key, env_name in (
            ("key_timeout_ms", "KEY_TIMEOUT_MS"),
            ("read_timeout", "READ_TIMEOUT"),
            ("read_chunk", "READ_CHUNK"),
        ):
            raw = os.environ.get(f"{ENV_PREFIX}{env_name}")
            if raw:
                values[key] = raw

        return cls.model_validate(values)
