"""Filename decomposition, literal matching and directory helpers.

Matching is a literal substring or suffix comparison with no glob or
regex semantics.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from landsat_clip.core.constants import DATASET_SEPARATOR

_SEPARATORS = ("/", "\\")


@dataclass(frozen=True, slots=True)
class PathParts:
    """Components of a filename.

    Attributes:
        directory: Everything before the last separator (empty if none).
        basename: Filename with extension.
        stem: Basename without extension.
        extension: Extension including the leading dot (empty if none).
    """

    directory: str = ""
    basename: str = ""
    stem: str = ""
    extension: str = ""


def split_path(path: str) -> PathParts:
    """Split *path* on its last ``/`` or ``\\`` and its basename on the last dot."""
    slash = max(path.rfind(sep) for sep in _SEPARATORS)
    if slash < 0:
        directory, basename = "", path
    else:
        directory, basename = path[:slash], path[slash + 1 :]

    dot = basename.rfind(".")
    if dot < 0:
        stem, extension = basename, ""
    else:
        stem, extension = basename[:dot], basename[dot:]

    return PathParts(directory=directory, basename=basename, stem=stem, extension=extension)


def matches_pattern(name: str, pattern: str) -> bool:
    """True if *pattern* is empty or occurs literally in *name*."""
    return not pattern or pattern in name


def has_suffix(name: str, suffix: str) -> bool:
    return name.endswith(suffix)


def split_by_commas(text: str) -> list[str]:
    """Split on commas, dropping empty tokens.

    Order and duplicates are preserved; tokens are not trimmed.
    """
    return [token for token in text.split(DATASET_SEPARATOR) if token]


def join_dir(directory: str, name: str) -> str:
    """Join with ``/`` unless *directory* already ends with one."""
    if directory.endswith("/"):
        return directory + name
    return f"{directory}/{name}"


def directory_exists(path: str) -> bool:
    return bool(path) and os.path.isdir(path)


def list_directory(path: str) -> list[str]:
    """Entry names of *path*, sorted lexicographically.

    Raises:
        OSError: If the directory cannot be listed.
    """
    return sorted(os.listdir(path))
