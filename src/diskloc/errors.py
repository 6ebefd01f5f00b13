from __future__ import annotations

import errno
from typing import Literal

ErrorKind = Literal[
    "not_found",
    "access_denied",
    "malformed_path",
    "invalid_argument",
    "io",
]

_MALFORMED_PATH_ERRNOS = frozenset({errno.ENAMETOOLONG, errno.EINVAL})


class SharingViolationError(PermissionError):
    """Another opener holds the file under an incompatible sharing policy."""


class PathResolutionError(ValueError):
    pass


class InvalidOpenModeError(ValueError):
    pass


def classify_error(exc: BaseException) -> ErrorKind:
    if isinstance(exc, FileNotFoundError):
        return "not_found"
    if isinstance(exc, PermissionError):
        return "access_denied"
    if isinstance(exc, InvalidOpenModeError):
        return "invalid_argument"
    if isinstance(exc, ValueError):
        return "malformed_path"
    if isinstance(exc, OSError) and exc.errno in _MALFORMED_PATH_ERRNOS:
        return "malformed_path"
    return "io"


__all__ = [
    "ErrorKind",
    "InvalidOpenModeError",
    "PathResolutionError",
    "SharingViolationError",
    "classify_error",
]
