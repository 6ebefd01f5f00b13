from __future__ import annotations

import logging
import os
from abc import abstractmethod
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import BinaryIO, Protocol

from diskloc import pathing
from diskloc.config import Settings
from diskloc.host_io import FileAccess, FileMode, FileShare, open_host_stream

logger = logging.getLogger(__name__)


class FileLocator(Protocol):
    """Resolves and opens references relative to a root in some backing store.

    Implementations subclass this explicitly and provide every abstract
    operation on their own; the convenience openers and
    :meth:`make_relative_path` are shared and only call into that contract.
    """

    @abstractmethod
    def exists(self, name: str) -> bool:
        ...

    @abstractmethod
    def open(self, name: str, mode: FileMode, access: FileAccess, share: FileShare) -> BinaryIO:
        ...

    @abstractmethod
    def get_relative_locator(self, path: str) -> FileLocator:
        ...

    @abstractmethod
    def get_full_path(self, path: str) -> str:
        ...

    @abstractmethod
    def get_directory_from_path(self, path: str) -> str:
        ...

    @abstractmethod
    def get_file_from_path(self, path: str) -> str:
        ...

    @abstractmethod
    def get_last_write_time_utc(self, path: str) -> datetime:
        ...

    @abstractmethod
    def has_common_root(self, other: FileLocator) -> bool:
        ...

    @abstractmethod
    def resolve_relative_path(self, path: str) -> str:
        ...

    def open_existing(self, name: str) -> BinaryIO:
        return self.open(name, FileMode.OPEN, FileAccess.READ, FileShare.READ)

    def open_or_create(self, name: str) -> BinaryIO:
        return self.open(name, FileMode.OPEN_OR_CREATE, FileAccess.READ_WRITE, FileShare.NONE)

    def make_relative_path(self, other: FileLocator, path: str) -> str | None:
        """Reference to ``path`` under ``other``, relative to this locator's root.

        Returns ``None`` when the two locators share no common root, since no
        relative reference can link them.
        """
        if not self.has_common_root(other):
            return None
        return pathing.make_relative_path(other.get_full_path(path), self.get_full_path(""))


@dataclass(frozen=True)
class LocalFileLocator(FileLocator):
    base_directory: str
    strict: bool = False
    enforce_sharing: bool = True

    def _host_path(self, name: str) -> str:
        if not name:
            return self.base_directory
        return os.path.join(self.base_directory, name)

    def exists(self, name: str) -> bool:
        return os.path.isfile(self._host_path(name))

    def open(self, name: str, mode: FileMode, access: FileAccess, share: FileShare) -> BinaryIO:
        return open_host_stream(
            self._host_path(name),
            mode,
            access,
            share,
            enforce_sharing=self.enforce_sharing,
        )

    def get_relative_locator(self, path: str) -> LocalFileLocator:
        derived = replace(self, base_directory=self._host_path(path))
        logger.debug("Derived locator %s from %s", derived.base_directory, self.base_directory)
        return derived

    def get_full_path(self, path: str) -> str:
        combined = self._host_path(path)
        if not combined:
            return os.getcwd()
        return os.path.abspath(combined)

    def get_directory_from_path(self, path: str) -> str:
        return pathing.get_directory_from_path(path)

    def get_file_from_path(self, path: str) -> str:
        return pathing.get_file_from_path(path)

    def get_last_write_time_utc(self, path: str) -> datetime:
        return datetime.fromtimestamp(os.stat(self._host_path(path)).st_mtime, tz=timezone.utc)

    def has_common_root(self, other: FileLocator) -> bool:
        if not isinstance(other, LocalFileLocator):
            return False

        # Drive letters decide when both roots carry one. Without them the
        # roots are assumed to share a volume, which is only an approximation.
        ours = pathing.drive_letter(self.base_directory)
        theirs = pathing.drive_letter(other.base_directory)
        if ours is not None and theirs is not None:
            return ours == theirs
        return True

    def resolve_relative_path(self, path: str) -> str:
        return pathing.resolve_relative_path(self.base_directory, path, strict=self.strict)


def locator_for_file(file_path: str | os.PathLike[str], *, settings: Settings | None = None) -> LocalFileLocator:
    """Locator rooted at the directory holding ``file_path``."""
    settings = settings or Settings()
    return LocalFileLocator(
        pathing.get_directory_from_path(os.fspath(file_path)),
        strict=settings.strict_paths,
        enforce_sharing=settings.enforce_sharing,
    )


__all__ = ["FileLocator", "LocalFileLocator", "locator_for_file"]
