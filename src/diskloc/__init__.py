from diskloc.errors import (
    ErrorKind,
    InvalidOpenModeError,
    PathResolutionError,
    SharingViolationError,
    classify_error,
)
from diskloc.config import Settings, load_settings
from diskloc.host_io import FileAccess, FileMode, FileShare
from diskloc.logging_utils import configure_diskloc_logging
from diskloc.storage import FileLocator, LocalFileLocator, locator_for_file

__all__ = [
    "ErrorKind",
    "FileAccess",
    "FileLocator",
    "FileMode",
    "FileShare",
    "InvalidOpenModeError",
    "LocalFileLocator",
    "PathResolutionError",
    "SharingViolationError",
    "Settings",
    "classify_error",
    "configure_diskloc_logging",
    "load_settings",
    "locator_for_file",
]
