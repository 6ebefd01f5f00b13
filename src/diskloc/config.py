from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


def _clean_env(value: str | None) -> str | None:
    if value is None:
        return None
    if "${" in value:
        return None
    value = value.strip()
    return value or None


def _env_bool(name: str, default: bool = False) -> bool:
    value = _clean_env(os.getenv(name))
    if value is None:
        return default
    return value.lower() in {"1", "true", "yes", "y", "on"}


def _env_log_level(name: str, default: int = logging.INFO) -> int:
    value = _clean_env(os.getenv(name))
    if value is None:
        return default
    level = logging.getLevelName(value.upper())
    return level if isinstance(level, int) else default


@dataclass(frozen=True)
class Settings:
    log_level: int = logging.INFO
    log_file: Path | None = None
    strict_paths: bool = False
    enforce_sharing: bool = True


def load_settings(*, dotenv_path: str | Path | None = None) -> Settings:
    if dotenv_path is not None:
        load_dotenv(dotenv_path, override=False)

    raw_log_file = _clean_env(os.getenv("DISKLOC_LOG_FILE"))
    return Settings(
        log_level=_env_log_level("DISKLOC_LOG_LEVEL"),
        log_file=Path(raw_log_file).expanduser() if raw_log_file else None,
        strict_paths=_env_bool("DISKLOC_STRICT_PATHS", default=False),
        enforce_sharing=_env_bool("DISKLOC_ENFORCE_SHARING", default=True),
    )


__all__ = ["Settings", "load_settings"]
