from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler

from diskloc.config import Settings, load_settings

PACKAGE_LOGGER = "diskloc"
_HANDLER_MARKER = "_diskloc_handler"
_DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _mark(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _HANDLER_MARKER, True)
    return handler


def configure_diskloc_logging(
    settings: Settings | None = None,
    *,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
) -> logging.Logger:
    """Apply ``settings.log_level`` and ``settings.log_file`` to the package logger.

    Only the ``diskloc`` logger is touched, so the host application's own
    logging stays as it is. Handlers installed by an earlier call are
    replaced, which makes repeated calls safe. Without ``settings`` they are
    read from the environment.
    """
    settings = settings or load_settings()
    package_logger = logging.getLogger(PACKAGE_LOGGER)

    for handler in list(package_logger.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            package_logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(_DEFAULT_LOG_FORMAT)
    if settings.log_file is not None:
        try:
            settings.log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                settings.log_file,
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            )
        except OSError as exc:
            sys.stderr.write(f"Failed to open diskloc log file at {settings.log_file}: {exc}\n")
        else:
            file_handler.setFormatter(formatter)
            package_logger.addHandler(_mark(file_handler))

    package_logger.setLevel(settings.log_level)
    return package_logger


__all__ = ["PACKAGE_LOGGER", "configure_diskloc_logging"]
