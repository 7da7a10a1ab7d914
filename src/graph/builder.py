"""Module graph construction from parsed file records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from graph.resolver import resolve_specifier
from logconfig import get_logger
from utils import to_module_id

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from pathlib import Path

    from artifacts.models.artifacts.files import ExportRecord, FileRecord, ImportKind

logger = get_logger("graph.builder")

TYPE_DECLARATION_KINDS = frozenset({"interface", "class", "abstract-class"})
ABSTRACT_DECLARATION_KINDS = frozenset({"interface", "abstract-class"})


@dataclass(frozen=True, order=True)
class ResolvedImport:
    """An import statement whose specifier resolved to a module index."""

    target: int
    kind: ImportKind
    names: tuple[str, ...] = ()


@dataclass(frozen=True)
class ModuleGraph:
    """Immutable directed module graph in arena form.

    Modules are stored once, sorted by id, and referenced everywhere else by
    their integer index. ``successors`` and ``predecessors`` hold distinct
    sorted neighbor indices; ``edge_kinds`` keeps every kind seen per pair.
    """

    modules: tuple[str, ...]
    index: Mapping[str, int]
    successors: tuple[tuple[int, ...], ...]
    predecessors: tuple[tuple[int, ...], ...]
    edge_kinds: Mapping[tuple[int, int], frozenset[str]]
    imports: tuple[tuple[ResolvedImport, ...], ...]
    exports: tuple[tuple[ExportRecord, ...], ...]

    def __len__(self) -> int:
        return len(self.modules)

    @property
    def edge_count(self) -> int:
        return len(self.edge_kinds)

    def fan_in(self, node: int) -> int:
        return len(self.predecessors[node])

    def fan_out(self, node: int) -> int:
        return len(self.successors[node])

    def edges(self) -> list[tuple[str, str]]:
        """Return distinct (source, target) module pairs sorted by index."""
        return [
            (self.modules[source], self.modules[target])
            for source, targets in enumerate(self.successors)
            for target in targets
        ]

    def adjacency(self) -> dict[str, list[str]]:
        return {
            module: [self.modules[target] for target in self.successors[node]]
            for node, module in enumerate(self.modules)
        }

    def kinds_of(self, source: int, target: int) -> list[str]:
        return sorted(self.edge_kinds.get((source, target), frozenset()))

    def export_stats(self, node: int) -> tuple[int, int]:
        """Return (type declarations, abstract declarations) exported by a module."""
        kinds = [record.declaration_kind for record in self.exports[node]]
        type_decls = sum(1 for kind in kinds if kind in TYPE_DECLARATION_KINDS)
        abstract_decls = sum(1 for kind in kinds if kind in ABSTRACT_DECLARATION_KINDS)
        return type_decls, abstract_decls


def _group_records(
    files: Iterable[FileRecord],
    root: str | Path | None,
) -> dict[str, list[FileRecord]]:
    grouped: dict[str, list[FileRecord]] = {}
    for record in files:
        module_id = to_module_id(record.path, root)
        if module_id is None:
            logger.debug("Skipping file outside project root: %s", record.path)
            continue
        grouped.setdefault(module_id, []).append(record)
    return grouped


def _merge_exports(records: list[FileRecord]) -> tuple[ExportRecord, ...]:
    unique: dict[tuple[str, str], ExportRecord] = {}
    for record in records:
        for export in record.exports:
            unique.setdefault((export.name, export.declaration_kind), export)
    return tuple(unique[key] for key in sorted(unique))


def build_module_graph(
    files: Iterable[FileRecord],
    root: str | Path | None = None,
) -> ModuleGraph:
    """Build a directed module graph from parsed file records.

    Every file becomes a module, even when it has no edges. Relative
    specifiers are resolved against the file set; bare specifiers and
    unresolvable relative ones are skipped. The result does not depend on
    the order of ``files``.

    Args:
        files: Parsed per-file import/export records
        root: Project root used to relativize absolute file paths

    Returns:
        The immutable module graph.
    """
    grouped = _group_records(files, root)
    modules = tuple(sorted(grouped))
    index = {module: node for node, module in enumerate(modules)}

    successor_sets: list[set[int]] = [set() for _ in modules]
    predecessor_sets: list[set[int]] = [set() for _ in modules]
    edge_kinds: dict[tuple[int, int], set[str]] = {}
    imports: list[tuple[ResolvedImport, ...]] = []
    exports: list[tuple[ExportRecord, ...]] = []

    for node, module in enumerate(modules):
        records = grouped[module]
        resolved_imports: set[ResolvedImport] = set()

        for record in records:
            for imp in record.imports:
                target_module = resolve_specifier(module, imp.specifier, index)
                if target_module is None:
                    logger.debug(
                        "Unresolved specifier %r in %s (%s)",
                        imp.specifier,
                        module,
                        imp.kind,
                    )
                    continue

                target = index[target_module]
                resolved_imports.add(
                    ResolvedImport(
                        target=target,
                        kind=imp.kind,
                        names=tuple(sorted(set(imp.names))),
                    )
                )
                successor_sets[node].add(target)
                predecessor_sets[target].add(node)
                edge_kinds.setdefault((node, target), set()).add(imp.kind)

        imports.append(tuple(sorted(resolved_imports)))
        exports.append(_merge_exports(records))

    return ModuleGraph(
        modules=modules,
        index=index,
        successors=tuple(tuple(sorted(targets)) for targets in successor_sets),
        predecessors=tuple(tuple(sorted(sources)) for sources in predecessor_sets),
        edge_kinds={
            pair: frozenset(kinds) for pair, kinds in sorted(edge_kinds.items())
        },
        imports=tuple(imports),
        exports=tuple(exports),
    )


__all__ = [
    "ABSTRACT_DECLARATION_KINDS",
    "TYPE_DECLARATION_KINDS",
    "ModuleGraph",
    "ResolvedImport",
    "build_module_graph",
]
