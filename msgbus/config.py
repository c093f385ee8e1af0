"""Settings read from the environment (call load_dotenv() in entry points first)."""

import logging
import os
from dataclasses import dataclass

DEFAULT_LOG_LEVEL = "INFO"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class Settings:
    """Runtime knobs for publishers and logging."""

    log_level: int = logging.INFO
    isolate_errors: bool = False


def _parse_level(raw: str | None) -> int:
    name = (raw or DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(name)
    if isinstance(level, int):
        return level
    return logging.getLevelName(DEFAULT_LOG_LEVEL)


def _parse_bool(raw: str | None, default: bool) -> bool:
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    return default


def load_settings() -> Settings:
    """Build Settings from MSGBUS_* env vars; malformed values fall back to defaults."""
    return Settings(
        log_level=_parse_level(os.environ.get("MSGBUS_LOG_LEVEL")),
        isolate_errors=_parse_bool(os.environ.get("MSGBUS_ISOLATE_ERRORS"), False),
    )
