"""Tree-sitter based import/export extraction for TypeScript and JavaScript."""

from __future__ import annotations

from typing import TYPE_CHECKING

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

from artifacts.models.artifacts.files import (
    NAMESPACE_IMPORT,
    ExportRecord,
    FileRecord,
    ImportRecord,
)
from logconfig import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from pathlib import Path

    from artifacts.models.artifacts.files import DeclarationKind

logger = get_logger("parse.typescript")

# .ts cannot hold JSX; every other extension is parsed with the TSX grammar,
# which also accepts plain JavaScript.
_TYPESCRIPT_SUFFIXES = (".ts", ".mts", ".cts")

_PARSERS: dict[str, Parser] = {}

_DECLARATION_KINDS: dict[str, DeclarationKind] = {
    "function_declaration": "function",
    "generator_function_declaration": "function",
    "function_signature": "function",
    "class_declaration": "class",
    "abstract_class_declaration": "abstract-class",
    "interface_declaration": "interface",
    "type_alias_declaration": "type-alias",
    "enum_declaration": "enum",
    "internal_module": "namespace",
    "module": "namespace",
}

# `export default <expression>` where the expression is itself a declaration.
_DEFAULT_VALUE_KINDS: dict[str, DeclarationKind] = {
    "class": "class",
    "function_expression": "function",
    "function": "function",
    "generator_function": "function",
    "arrow_function": "function",
}


def _get_parser(grammar: str) -> Parser:
    """Return a cached parser for the 'typescript' or 'tsx' grammar."""
    parser = _PARSERS.get(grammar)
    if parser is None:
        if grammar == "tsx":
            lang = Language(tree_sitter_typescript.language_tsx())
        else:
            lang = Language(tree_sitter_typescript.language_typescript())
        parser = Parser(lang)
        _PARSERS[grammar] = parser

    return parser


def _grammar_for(relative_path: str) -> str:
    return "typescript" if relative_path.endswith(_TYPESCRIPT_SUFFIXES) else "tsx"


def _text(node: Node | None) -> str | None:
    if node is None or node.text is None:
        return None
    return node.text.decode("utf8")


def _string_value(node: Node | None) -> str | None:
    """Return the contents of a string literal node without its quotes."""
    if node is None or node.type not in ("string", "template_string"):
        return None
    text = _text(node)
    if text is None or len(text) < 2:
        return None
    if node.type == "template_string" and "${" in text:
        return None
    return text[1:-1]


def _has_keyword(node: Node, keyword: str) -> bool:
    return any(child.type == keyword for child in node.children)


def _import_clause_names(clause: Node) -> list[str]:
    names: list[str] = []
    for child in clause.named_children:
        if child.type == "identifier":
            names.append("default")
        elif child.type == "namespace_import":
            names.append(NAMESPACE_IMPORT)
        elif child.type == "named_imports":
            for spec in child.named_children:
                if spec.type != "import_specifier":
                    continue
                name = _text(spec.child_by_field_name("name"))
                if name:
                    names.append(name)
    return names


def _handle_import_statement(node: Node, imports: list[ImportRecord]) -> None:
    source = _string_value(node.child_by_field_name("source"))
    names: list[str] = []
    kind = "type-only-import" if _has_keyword(node, "type") else "static-import"

    for child in node.named_children:
        if child.type == "import_clause":
            names = _import_clause_names(child)
        elif child.type == "import_require_clause":
            # import x = require('./y')
            source = _string_value(child.child_by_field_name("source"))
            names = [NAMESPACE_IMPORT]

    if source is None:
        return

    imports.append(ImportRecord(specifier=source, kind=kind, names=names))


def _declaration_names(node: Node) -> list[tuple[str, DeclarationKind]]:
    """Return the (name, kind) pairs declared by an exported declaration."""
    if node.type == "ambient_declaration":
        found: list[tuple[str, DeclarationKind]] = []
        for child in node.named_children:
            found.extend(_declaration_names(child))
        return found

    if node.type in ("lexical_declaration", "variable_declaration"):
        keyword = node.children[0].type if node.children else "var"
        kind: DeclarationKind = "var"
        if keyword == "const":
            kind = "const"
        elif keyword == "let":
            kind = "let"
        found = []
        for declarator in node.named_children:
            if declarator.type != "variable_declarator":
                continue
            name_node = declarator.child_by_field_name("name")
            if name_node is not None and name_node.type == "identifier":
                found.append((_text(name_node) or "", kind))
            elif name_node is not None:
                # destructuring: export const { a, b } = obj
                found.extend(
                    (ident, kind) for ident in _pattern_identifiers(name_node)
                )
        return [(name, k) for name, k in found if name]

    decl_kind = _DECLARATION_KINDS.get(node.type)
    if decl_kind is None:
        return []

    name = _text(node.child_by_field_name("name"))
    if not name:
        return []
    return [(name, decl_kind)]


def _pattern_identifiers(node: Node) -> list[str]:
    if node.type in ("identifier", "shorthand_property_identifier_pattern"):
        text = _text(node)
        return [text] if text else []
    if node.type == "pair_pattern":
        return _pattern_identifiers(node.child_by_field_name("value") or node)
    names: list[str] = []
    for child in node.named_children:
        names.extend(_pattern_identifiers(child))
    return names


def _top_level_declarations(root: Node) -> dict[str, DeclarationKind]:
    """Map each name declared at the top level of a file to its kind."""
    found: dict[str, DeclarationKind] = {}
    for child in root.named_children:
        declaration = child
        if child.type == "export_statement":
            declaration = child.child_by_field_name("declaration")
            if declaration is None:
                continue
        for name, kind in _declaration_names(declaration):
            found.setdefault(name, kind)
    return found


def _handle_export_clause(
    clause: Node,
    source: str | None,
    kind: str,
    imports: list[ImportRecord],
    exports: list[ExportRecord],
    local_kinds: Mapping[str, DeclarationKind],
) -> None:
    """Record an export clause; local names take the kind of their declaration."""
    imported: list[str] = []
    for spec in clause.named_children:
        if spec.type != "export_specifier":
            continue
        name = _text(spec.child_by_field_name("name"))
        if not name:
            continue
        alias = _text(spec.child_by_field_name("alias"))
        imported.append(name)
        if source is not None:
            decl_kind: DeclarationKind = "re-export"
        else:
            decl_kind = local_kinds.get(name, "value")
        exports.append(ExportRecord(name=alias or name, declaration_kind=decl_kind))

    if source is not None:
        imports.append(ImportRecord(specifier=source, kind=kind, names=imported))


def _handle_export_statement(
    node: Node,
    imports: list[ImportRecord],
    exports: list[ExportRecord],
    local_kinds: Mapping[str, DeclarationKind],
) -> None:
    source = _string_value(node.child_by_field_name("source"))
    is_default = _has_keyword(node, "default")
    kind = "type-only-import" if _has_keyword(node, "type") else "export-from"

    declaration = node.child_by_field_name("declaration")
    if declaration is not None:
        declared = _declaration_names(declaration)
        if is_default:
            decl_kind = declared[0][1] if declared else "value"
            exports.append(ExportRecord(name="default", declaration_kind=decl_kind))
        else:
            exports.extend(
                ExportRecord(name=name, declaration_kind=decl_kind)
                for name, decl_kind in declared
            )
        return

    for child in node.named_children:
        if child.type == "export_clause":
            _handle_export_clause(child, source, kind, imports, exports, local_kinds)
            return
        if child.type == "namespace_export":
            # export * as ns from './x'
            alias = next(
                (
                    value
                    for value in (
                        _text(c) if c.type == "identifier" else _string_value(c)
                        for c in child.named_children
                    )
                    if value
                ),
                None,
            )
            if source is not None:
                imports.append(
                    ImportRecord(
                        specifier=source, kind=kind, names=[NAMESPACE_IMPORT]
                    )
                )
            if alias:
                exports.append(ExportRecord(name=alias, declaration_kind="re-export"))
            return

    if source is not None and _has_keyword(node, "*"):
        # export * from './x'
        imports.append(ImportRecord(specifier=source, kind=kind, names=[]))
        return

    if is_default or _has_keyword(node, "="):
        value = node.child_by_field_name("value")
        if value is None:
            value_kind: DeclarationKind = "value"
        elif value.type == "identifier":
            # export default Foo / export = Foo
            value_kind = local_kinds.get(_text(value) or "", "value")
        else:
            value_kind = _DEFAULT_VALUE_KINDS.get(value.type, "value")
        exports.append(ExportRecord(name="default", declaration_kind=value_kind))


def _dynamic_import_specifier(node: Node) -> tuple[str, str] | None:
    """Return (specifier, kind) for import('./x') and require('./x') calls."""
    function = node.child_by_field_name("function")
    if function is None:
        return None

    if function.type == "import":
        kind = "dynamic-import"
    elif function.type == "identifier" and _text(function) == "require":
        kind = "static-import"
    else:
        return None

    arguments = node.child_by_field_name("arguments")
    if arguments is None or not arguments.named_children:
        return None

    specifier = _string_value(arguments.named_children[0])
    if specifier is None:
        return None
    return specifier, kind


def _traverse_node(
    node: Node,
    imports: list[ImportRecord],
    exports: list[ExportRecord],
    local_kinds: Mapping[str, DeclarationKind],
) -> None:
    # Exports nested in a namespace body belong to the namespace, not the file.
    stack: list[tuple[Node, bool]] = [(node, False)]
    while stack:
        current, in_namespace = stack.pop()

        if current.type == "import_statement":
            _handle_import_statement(current, imports)
            continue

        if current.type == "export_statement" and not in_namespace:
            _handle_export_statement(current, imports, exports, local_kinds)

        if current.type == "call_expression":
            found = _dynamic_import_specifier(current)
            if found is not None:
                specifier, kind = found
                imports.append(
                    ImportRecord(
                        specifier=specifier, kind=kind, names=[NAMESPACE_IMPORT]
                    )
                )

        nested = in_namespace or current.type in ("internal_module", "module")
        stack.extend((child, nested) for child in reversed(current.children))


def extract_file_record_from_source(source: str, relative_path: str) -> FileRecord:
    """Extract the imports and exports of a source text.

    Statements are reported in source order. Syntax errors do not abort
    extraction; tree-sitter recovers and whatever parsed is kept.
    """
    parser = _get_parser(_grammar_for(relative_path))
    tree = parser.parse(source.encode("utf8"))

    imports: list[ImportRecord] = []
    exports: list[ExportRecord] = []
    local_kinds = _top_level_declarations(tree.root_node)
    _traverse_node(tree.root_node, imports, exports, local_kinds)

    if tree.root_node.has_error:
        logger.debug("Syntax errors in %s; partial extraction", relative_path)

    return FileRecord(path=relative_path, imports=imports, exports=exports)


def extract_file_record(file_path: Path, relative_path: str) -> FileRecord | None:
    """Extract the imports and exports of a file on disk.

    Returns:
        The file record, or None when the file cannot be read.
    """
    try:
        source = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Skipping unreadable file %s: %s", relative_path, exc)
        return None

    return extract_file_record_from_source(source, relative_path)


def extract_file_records(files: Iterable[Path], root: Path) -> list[FileRecord]:
    records: list[FileRecord] = []
    for file_path in files:
        relative_path = file_path.relative_to(root).as_posix()
        record = extract_file_record(file_path, relative_path)
        if record is not None:
            records.append(record)
    return records


__all__ = [
    "extract_file_record",
    "extract_file_record_from_source",
    "extract_file_records",
]
