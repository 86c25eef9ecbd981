"""
Configuration for searchable.

Process-wide defaults come from the environment (optionally a project
.env file). Per-instance debounce behaviour is described by DebounceConfig.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

from .env import load_env

DEFAULT_DEBOUNCE_MS = 100
DEFAULT_LOG_LEVEL = "WARNING"

ENV_DEBOUNCE_MS = "SEARCHABLE_DEBOUNCE_MS"
ENV_LOG_LEVEL = "SEARCHABLE_LOG_LEVEL"
ENV_LOG_DIR = "SEARCHABLE_LOG_DIR"


def _parse_duration(value: Union[int, float, str], source: str) -> float:
    try:
        duration = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{source} must be a number of milliseconds, got {value!r}") from None
    if duration < 0:
        raise ValueError(f"{source} must not be negative, got {value!r}")
    return duration


def read_log_settings() -> Tuple[str, Optional[Path]]:
    """
    Log level and directory from the environment.

    Reads only the log variables; the debounce default is parsed on demand.
    """
    load_env()
    log_level = (os.getenv(ENV_LOG_LEVEL) or DEFAULT_LOG_LEVEL).strip().upper()
    raw_dir = os.getenv(ENV_LOG_DIR)
    log_dir = Path(raw_dir) if raw_dir else None
    return log_level, log_dir


@dataclass(frozen=True)
class Settings:
    """Process-wide defaults read from the environment."""

    debounce_ms: float = DEFAULT_DEBOUNCE_MS
    log_level: str = DEFAULT_LOG_LEVEL
    log_dir: Optional[Path] = None

    @classmethod
    def from_env(cls) -> "Settings":
        log_level, log_dir = read_log_settings()
        raw_ms = os.getenv(ENV_DEBOUNCE_MS)
        debounce_ms = DEFAULT_DEBOUNCE_MS if raw_ms in (None, "") else _parse_duration(raw_ms, ENV_DEBOUNCE_MS)
        return cls(debounce_ms=debounce_ms, log_level=log_level, log_dir=log_dir)


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the cached settings, reading the environment on first use."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def reset_settings():
    """Forget cached settings (useful for testing)."""
    global _settings
    _settings = None


class DebounceConfig:
    """
    Tri-state debounce configuration.

    DISABLED: recompute synchronously on every query change.
    EXPLICIT: coalesce with the given duration.
    DEFAULT:  coalesce with Settings.debounce_ms.
    """

    DISABLED = "disabled"
    EXPLICIT = "explicit"
    DEFAULT = "default"

    __slots__ = ("mode", "duration_ms")

    def __init__(self, mode: str, duration_ms: Optional[float] = None):
        if mode not in (self.DISABLED, self.EXPLICIT, self.DEFAULT):
            raise ValueError(f"Unknown debounce mode: {mode!r}")
        if mode == self.EXPLICIT:
            if duration_ms is None:
                raise ValueError("Explicit debounce requires a duration")
            duration_ms = _parse_duration(duration_ms, "debounce duration")
        elif duration_ms is not None:
            raise ValueError(f"Debounce mode {mode!r} does not take a duration")
        self.mode = mode
        self.duration_ms = duration_ms

    @classmethod
    def disabled(cls) -> "DebounceConfig":
        return cls(cls.DISABLED)

    @classmethod
    def enabled(cls, duration_ms: float) -> "DebounceConfig":
        return cls(cls.EXPLICIT, duration_ms)

    @classmethod
    def default(cls) -> "DebounceConfig":
        return cls(cls.DEFAULT)

    @classmethod
    def coerce(
        cls,
        value: Union["DebounceConfig", bool, int, float, None],
        duration_ms: Optional[float] = None,
    ) -> "DebounceConfig":
        """
        Build a config from the loose forms accepted by Searchable.

        True  -> enabled (with duration_ms if given, else the default)
        False / None -> disabled
        number -> enabled with that many milliseconds
        """
        if isinstance(value, DebounceConfig):
            return value
        if value is None or value is False:
            if duration_ms is not None:
                raise ValueError("A debounce duration was given but debouncing is disabled")
            return cls.disabled()
        if value is True:
            return cls.default() if duration_ms is None else cls.enabled(duration_ms)
        if isinstance(value, (int, float)):
            return cls.enabled(value)
        raise ValueError(f"Unsupported debounce setting: {value!r}")

    @property
    def is_enabled(self) -> bool:
        return self.mode != self.DISABLED

    def resolve_duration(self, settings: Optional[Settings] = None) -> Optional[float]:
        """Milliseconds to wait, or None when debouncing is disabled."""
        if self.mode == self.DISABLED:
            return None
        if self.mode == self.EXPLICIT:
            return self.duration_ms
        return (settings or get_settings()).debounce_ms

    def __eq__(self, other):
        if not isinstance(other, DebounceConfig):
            return NotImplemented
        return (self.mode, self.duration_ms) == (other.mode, other.duration_ms)

    def __hash__(self):
        return hash((self.mode, self.duration_ms))

    def __repr__(self):
        if self.mode == self.EXPLICIT:
            return f"DebounceConfig.enabled({self.duration_ms:g})"
        return f"DebounceConfig.{self.mode}()"
