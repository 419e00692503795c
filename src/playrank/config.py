"""Environment-driven defaults for the playrank CLI."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass


logger = logging.getLogger(__name__)

_TOP_K_ENV = "PLAYRANK_TOP_K"
_LOG_LEVEL_ENV = "PLAYRANK_LOG_LEVEL"
_OUTPUT_FORMAT_ENV = "PLAYRANK_OUTPUT_FORMAT"

_TOP_K_DEFAULT = 10
_LOG_LEVEL_DEFAULT = "INFO"
_OUTPUT_FORMAT_DEFAULT = "csv"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
OUTPUT_FORMATS = ("csv", "json")


@dataclass(frozen=True)
class Settings:
    top_k: int = _TOP_K_DEFAULT
    log_level: str = _LOG_LEVEL_DEFAULT
    output_format: str = _OUTPUT_FORMAT_DEFAULT


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None and value < min_value:
        logger.warning("%s=%d is below %d; using default %d", name, value, min_value, default)
        return default
    return value


def _env_choice(name: str, default: str, choices: tuple[str, ...], *, upper: bool = False) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().upper() if upper else raw.strip().lower()
    if value not in choices:
        logger.warning("Invalid value for %s: %s; using default %s", name, raw, default)
        return default
    return value


def load_settings() -> Settings:
    """Read settings from the environment, falling back to defaults."""

    return Settings(
        top_k=_env_int(_TOP_K_ENV, _TOP_K_DEFAULT, min_value=0),
        log_level=_env_choice(_LOG_LEVEL_ENV, _LOG_LEVEL_DEFAULT, LOG_LEVELS, upper=True),
        output_format=_env_choice(_OUTPUT_FORMAT_ENV, _OUTPUT_FORMAT_DEFAULT, OUTPUT_FORMATS),
    )
