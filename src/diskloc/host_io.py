from __future__ import annotations

import enum
import logging
import os
from typing import BinaryIO, cast

from diskloc.errors import InvalidOpenModeError, SharingViolationError

if os.name == "posix":
    import fcntl
else:  # pragma: no cover - sharing is enforced by the host on Windows
    fcntl = None

logger = logging.getLogger(__name__)


class FileMode(enum.Enum):
    CREATE_NEW = "create_new"
    CREATE = "create"
    OPEN = "open"
    OPEN_OR_CREATE = "open_or_create"
    TRUNCATE = "truncate"
    APPEND = "append"


class FileAccess(enum.Flag):
    READ = 1
    WRITE = 2
    READ_WRITE = READ | WRITE


class FileShare(enum.Flag):
    NONE = 0
    READ = 1
    WRITE = 2
    READ_WRITE = READ | WRITE
    DELETE = 4


_MODE_FLAGS = {
    FileMode.CREATE_NEW: os.O_CREAT | os.O_EXCL,
    FileMode.CREATE: os.O_CREAT | os.O_TRUNC,
    FileMode.OPEN: 0,
    FileMode.OPEN_OR_CREATE: os.O_CREAT,
    FileMode.TRUNCATE: os.O_TRUNC,
    FileMode.APPEND: os.O_CREAT,
}

_WRITING_MODES = frozenset({FileMode.CREATE_NEW, FileMode.CREATE, FileMode.TRUNCATE, FileMode.APPEND})


def _validate(mode: FileMode, access: FileAccess) -> None:
    if mode in _WRITING_MODES and not access & FileAccess.WRITE:
        raise InvalidOpenModeError(f"FileMode.{mode.name} requires write access, got FileAccess.{access.name}")
    if mode is FileMode.APPEND and access & FileAccess.READ:
        raise InvalidOpenModeError("FileMode.APPEND cannot be combined with read access")


def _access_flags(access: FileAccess) -> tuple[int, str]:
    if access == FileAccess.READ_WRITE:
        return os.O_RDWR, "r+b"
    if access == FileAccess.WRITE:
        return os.O_WRONLY, "wb"
    return os.O_RDONLY, "rb"


def _lock_operation(access: FileAccess, share: FileShare) -> int:
    exclusive = not share & FileShare.READ or (
        bool(access & FileAccess.WRITE) and not share & FileShare.WRITE
    )
    return (fcntl.LOCK_EX if exclusive else fcntl.LOCK_SH) | fcntl.LOCK_NB


def open_host_stream(
    path: str,
    mode: FileMode,
    access: FileAccess,
    share: FileShare,
    *,
    enforce_sharing: bool = True,
) -> BinaryIO:
    """Open ``path`` on the host filesystem and hand ownership to the caller.

    Host failures (missing file, permissions, bad names) propagate as the
    native exceptions. On POSIX the share policy is applied with a
    non-blocking advisory lock; a conflicting holder raises
    :class:`SharingViolationError` straight away.
    """
    _validate(mode, access)
    access_flags, fmode = _access_flags(access)
    flags = access_flags | _MODE_FLAGS[mode] | getattr(os, "O_BINARY", 0)

    fd = os.open(path, flags, 0o666)
    try:
        if enforce_sharing and fcntl is not None:
            try:
                fcntl.flock(fd, _lock_operation(access, share))
            except BlockingIOError as exc:
                logger.warning("Sharing violation opening %s (%s, %s)", path, access.name, share.name)
                raise SharingViolationError(exc.errno, "Sharing violation", path) from exc
        stream = os.fdopen(fd, fmode)
    except BaseException:
        os.close(fd)
        raise

    if mode is FileMode.APPEND:
        stream.seek(0, os.SEEK_END)
    logger.debug("Opened %s mode=%s access=%s share=%s", path, mode.name, access.name, share.name)
    return cast(BinaryIO, stream)


__all__ = ["FileAccess", "FileMode", "FileShare", "open_host_stream"]
