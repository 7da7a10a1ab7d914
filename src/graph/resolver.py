"""Relative import specifier resolution."""

from __future__ import annotations

import posixpath
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Container

SOURCE_EXTENSIONS = (".ts", ".tsx", ".mts", ".cts", ".js", ".jsx", ".mjs", ".cjs")

# ESM-style TypeScript imports name the emitted file: './x.js' means 'x.ts'.
_JS_TO_TS_EXTENSIONS = {
    ".js": (".ts", ".tsx"),
    ".jsx": (".tsx",),
    ".mjs": (".mts",),
    ".cjs": (".cts",),
}


def is_relative_specifier(specifier: str) -> bool:
    """Return True for specifiers that start with './' or '../'."""
    return specifier.startswith(("./", "../"))


def _candidates(base: str) -> list[str]:
    if base == ".":
        return [f"index{ext}" for ext in SOURCE_EXTENSIONS]

    candidates = [base]
    candidates.extend(f"{base}{ext}" for ext in SOURCE_EXTENSIONS)
    candidates.extend(f"{base}/index{ext}" for ext in SOURCE_EXTENSIONS)

    stem, ext = posixpath.splitext(base)
    for ts_ext in _JS_TO_TS_EXTENSIONS.get(ext, ()):
        candidates.append(f"{stem}{ts_ext}")

    return candidates


def resolve_specifier(
    from_module: str,
    specifier: str,
    known_modules: Container[str],
) -> str | None:
    """Resolve a relative specifier from ``from_module`` to a known module id.

    Args:
        from_module: Root-relative POSIX module id of the importing file
        specifier: Import specifier as written in source
        known_modules: Module ids present in the scanned file set

    Returns:
        The resolved module id, or None for bare specifiers, specifiers that
        escape the project root, and targets outside the file set.
    """
    if not is_relative_specifier(specifier):
        return None

    joined = posixpath.join(posixpath.dirname(from_module), specifier)
    base = posixpath.normpath(joined)
    if base == ".." or base.startswith("../"):
        return None

    for candidate in _candidates(base):
        if candidate in known_modules:
            return candidate

    return None


__all__ = ["SOURCE_EXTENSIONS", "is_relative_specifier", "resolve_specifier"]
