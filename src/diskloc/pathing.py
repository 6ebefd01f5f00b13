from __future__ import annotations

import logging
import os
import re

from diskloc.errors import PathResolutionError

logger = logging.getLogger(__name__)

_BACKSLASH_STYLE_SPLIT = re.compile(r"[\\/]")


def has_drive(path: str) -> bool:
    return len(path) >= 2 and path[1] == ":" and path[0].isalpha()


def drive_letter(path: str) -> str | None:
    if not has_drive(path):
        return None
    return path[0].upper()


def _backslash_style(path: str, native: str) -> bool:
    if native == "\\" or has_drive(path) or path.startswith("\\\\"):
        return True
    return "\\" in path and "/" not in path


def separators(path: str, native: str = os.sep) -> tuple[str, ...]:
    """Separators a path string is split on, preferred separator first.

    Backslash-style strings (drive letters, UNC prefixes, or only
    backslashes) also accept forward slashes, the way Windows does. Anything
    else is split on ``/`` alone so POSIX names containing a backslash stay
    intact.
    """
    if _backslash_style(path, native):
        return ("\\", "/")
    return ("/",)


def separator_for(path: str, native: str = os.sep) -> str:
    return separators(path, native)[0]


def _segments(path: str, native: str) -> list[str]:
    if _backslash_style(path, native):
        parts = _BACKSLASH_STYLE_SPLIT.split(path)
    else:
        parts = path.split("/")
    return [part for part in parts if part]


def is_rooted(path: str, native: str = os.sep) -> bool:
    if has_drive(path):
        return True
    return bool(path) and path[0] in separators(path, native)


def split_root(path: str, native: str = os.sep) -> tuple[str, str]:
    """Split ``path`` into its root prefix and the remainder.

    Roots look like ``C:\\``, ``C:``, ``\\\\`` (UNC), ``\\`` or ``/``;
    relative paths have an empty root.
    """
    seps = separators(path, native)
    sep = seps[0]
    drive = ""
    rest = path
    if has_drive(path):
        drive, rest = path[:2], path[2:]

    stripped = rest.lstrip("".join(seps))
    lead = len(rest) - len(stripped)
    if lead == 0:
        return drive, rest
    if not drive and lead >= 2 and sep == "\\":
        return sep * 2, stripped
    return drive + sep, stripped


def combine(base: str, path: str, native: str = os.sep) -> str:
    """Textual equivalent of a host path join, rooted ``path`` wins."""
    if not base:
        return path
    if not path:
        return base
    if is_rooted(path, native):
        return path
    if base.endswith(separators(base, native)) or (has_drive(base) and len(base) == 2):
        return base + path
    return base + separator_for(base, native) + path


def resolve_relative_path(
    base: str,
    path: str,
    *,
    native: str = os.sep,
    strict: bool = False,
) -> str:
    """Combine ``base`` with ``path`` and collapse ``.`` and ``..`` segments.

    Each side is split in its own separator convention and the result is
    joined in the convention of ``base`` (or of ``path`` when it is rooted),
    so ``..\\parent.vhd`` resolves cleanly against a POSIX directory. Nothing
    is looked up on disk.

    A ``..`` with nothing left to remove is kept when the path has no root,
    so relative bases such as ``../images`` keep pointing at the same place.
    Above a root it is dropped, or raises :class:`PathResolutionError` when
    ``strict`` is set.
    """
    if not base or is_rooted(path, native):
        anchor, tail = path, []
    else:
        anchor, tail = base, _segments(path, native)

    root, rest = split_root(anchor, native)
    sep = separator_for(anchor, native)

    resolved: list[str] = []
    for segment in _segments(rest, native) + tail:
        if segment == ".":
            continue
        if segment == "..":
            if resolved and resolved[-1] != "..":
                resolved.pop()
                continue
            if not root:
                resolved.append(segment)
                continue
            if strict:
                raise PathResolutionError(f"Path escapes above its root: {combine(base, path, native)!r}")
            logger.debug("Dropping '..' above root while resolving %r against %r", path, base)
            continue
        resolved.append(segment)

    merged = root + sep.join(resolved)
    if not merged:
        return "."
    if resolved and path.endswith(separators(path, native)):
        merged += sep
    return merged


def get_file_from_path(path: str, native: str = os.sep) -> str:
    idx = max(path.rfind(sep) for sep in separators(path, native))
    if idx >= 0:
        return path[idx + 1 :]
    if has_drive(path):
        return path[2:]
    return path


def get_directory_from_path(path: str, native: str = os.sep) -> str:
    """Everything before the final segment, without a trailing separator.

    The root itself keeps its separator (``C:\\file`` -> ``C:\\``), so a file
    directly under a root does not recombine by joining with a separator:
    ``/x.img`` splits into ``/`` and ``x.img``.
    """
    seps = separators(path, native)
    root, rest = split_root(path, native)
    idx = max(rest.rfind(sep) for sep in seps)
    if idx < 0:
        return root
    return root + rest[:idx].rstrip("".join(seps))


def make_relative_path(path: str, base_dir: str, *, native: str = os.sep) -> str:
    """Relative reference that leads from ``base_dir`` to ``path``.

    Both arguments should already be fully resolved. Segments compare
    case-insensitively when either side is backslash-style. When the roots
    differ no relative form exists and ``path`` is returned unchanged.
    """
    sep = separator_for(base_dir or path, native)
    fold = "\\" in (separator_for(path, native), separator_for(base_dir, native))

    def key(value: str) -> str:
        return value.casefold() if fold else value

    path_root, path_rest = split_root(path, native)
    base_root, base_rest = split_root(base_dir, native)
    if key(path_root.replace("/", "\\")) != key(base_root.replace("/", "\\")):
        return path

    path_parts = _segments(path_rest, native)
    base_parts = _segments(base_rest, native)
    common = 0
    while (
        common < len(path_parts)
        and common < len(base_parts)
        and key(path_parts[common]) == key(base_parts[common])
    ):
        common += 1

    relative = [".."] * (len(base_parts) - common) + path_parts[common:]
    return sep.join(relative) or "."


__all__ = [
    "combine",
    "drive_letter",
    "get_directory_from_path",
    "get_file_from_path",
    "has_drive",
    "is_rooted",
    "make_relative_path",
    "resolve_relative_path",
    "separator_for",
    "separators",
    "split_root",
]
