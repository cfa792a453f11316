"""Library-wide settings for utilkit.

Settings are a typed pydantic model. They can be built directly, loaded from
``UTILKIT_*`` environment variables, or installed process-wide with
``set_settings`` so helpers pick them up without extra arguments.
"""

from __future__ import annotations

import os
from typing import Literal, Optional

from pydantic import BaseModel, ValidationError, field_validator

from utilkit.core.exceptions import SettingsError

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]

# Process-wide settings; built lazily from the environment on first access
_SETTINGS: Optional["UtilkitSettings"] = None


class UtilkitSettings(BaseModel):
    """Runtime switches for utilkit.

    UTILKIT_LOG_LEVEL: DEBUG | INFO | WARNING | ERROR (default: INFO)
    UTILKIT_STRICT_HOMOGENEOUS: "true" | "false" (default: "true")
    """

    log_level: LogLevel = "INFO"
    strict_homogeneous: bool = True  # Type-check fields before list conversion

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @classmethod
    def from_env(cls) -> "UtilkitSettings":
        values = {}
        level = _env_value("UTILKIT_LOG_LEVEL")
        if level is not None:
            values["log_level"] = level
        strict = _env_value("UTILKIT_STRICT_HOMOGENEOUS")
        if strict is not None:
            values["strict_homogeneous"] = strict
        try:
            return cls(**values)
        except ValidationError as exc:
            raise SettingsError(
                reason="Invalid UTILKIT_* environment settings",
                details={err["loc"][0]: err["msg"] for err in exc.errors()},
            ) from exc


def _env_value(name: str) -> Optional[str]:
    val = os.getenv(name)
    return val if val not in (None, "") else None


def set_settings(settings: Optional[UtilkitSettings]) -> None:
    """Install process-wide settings; ``None`` re-reads the environment on next access."""
    global _SETTINGS
    _SETTINGS = settings


def get_settings() -> UtilkitSettings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = UtilkitSettings.from_env()
    return _SETTINGS
