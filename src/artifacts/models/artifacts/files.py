"""Parsed source file models.

These records are the engine's input: one per source file, carrying the
import and export statements extracted by the parsing layer.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

ImportKind = Literal[
    "static-import",
    "export-from",
    "type-only-import",
    "dynamic-import",
]

DeclarationKind = Literal[
    "value",
    "function",
    "class",
    "abstract-class",
    "interface",
    "type-alias",
    "const",
    "let",
    "var",
    "enum",
    "namespace",
    "re-export",
]

# Imported-name marker for namespace imports, `export *` and dynamic import().
NAMESPACE_IMPORT = "*"


class ImportRecord(BaseModel):
    """A single import-like statement of a source file.

    An ``export-from`` record with no names stands for ``export * from``;
    side-effect imports (``import './x'``) are static imports with no names.
    """

    specifier: str
    kind: ImportKind = "static-import"
    names: list[str] = Field(
        default_factory=list,
        description="Imported names ('default', '*' for the whole namespace)",
    )


class ExportRecord(BaseModel):
    """A symbol exported by a source file."""

    name: str
    declaration_kind: DeclarationKind = "value"


class FileRecord(BaseModel):
    """Import/export statements of one parsed source file."""

    path: str
    imports: list[ImportRecord] = Field(default_factory=list)
    exports: list[ExportRecord] = Field(default_factory=list)


__all__ = [
    "NAMESPACE_IMPORT",
    "DeclarationKind",
    "ExportRecord",
    "FileRecord",
    "ImportKind",
    "ImportRecord",
]
