"""Shared utilities for modgraph."""

from __future__ import annotations

import posixpath
from pathlib import Path, PurePosixPath


def normalize_path(value: str | Path) -> str:
    """Normalize a path string to POSIX form.

    Examples:
        >>> normalize_path("src\\\\engine\\\\x.ts")
        'src/engine/x.ts'
        >>> normalize_path("./src/./a/../b.ts")
        'src/b.ts'
    """
    path_str = value.as_posix() if isinstance(value, Path) else str(value)
    path_str = path_str.replace("\\", "/")
    if not path_str:
        return ""
    return posixpath.normpath(path_str)


def to_module_id(file_path: str | Path, root: str | Path | None = None) -> str | None:
    """Convert a file path to a project-root-relative module id.

    Absolute paths are made relative to ``root``. Returns None when the path
    escapes the root or normalizes to nothing.

    Examples:
        >>> to_module_id("/repo/src/a.ts", "/repo")
        'src/a.ts'
        >>> to_module_id("src/a.ts")
        'src/a.ts'
        >>> to_module_id("/elsewhere/a.ts", "/repo") is None
        True
    """
    normalized = normalize_path(file_path)

    if PurePosixPath(normalized).is_absolute():
        if root is None:
            return None
        root_normalized = normalize_path(root)
        normalized = posixpath.relpath(normalized, root_normalized)

    if normalized in {"", "."} or normalized == ".." or normalized.startswith("../"):
        return None

    return normalized
