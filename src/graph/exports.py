"""Export liveness: dead and test-only exports."""

from __future__ import annotations

from collections import defaultdict
from typing import TYPE_CHECKING, Literal

from artifacts.models.artifacts.files import NAMESPACE_IMPORT

if TYPE_CHECKING:
    from collections.abc import Sequence

    from graph.builder import ModuleGraph

DEFAULT_EXPORT = "default"

ExportFindingKind = Literal["dead-export", "test-only-export"]


def is_test_module(module: str, test_file_suffixes: Sequence[str]) -> bool:
    return module.endswith(tuple(test_file_suffixes))


def _star_reexport_targets(graph: ModuleGraph) -> list[list[int]]:
    """Targets of ``export * from`` statements (export-from with no names)."""
    targets: list[list[int]] = []
    for node, imports in enumerate(graph.imports):
        targets.append(
            [
                imp.target
                for imp in imports
                if imp.kind == "export-from" and not imp.names and imp.target != node
            ]
        )
    return targets


def collect_importers(graph: ModuleGraph) -> dict[int, dict[str, set[int]]]:
    """Map module -> requested name -> importing modules.

    Requests for names a module does not declare itself follow its
    ``export * from`` statements, keeping the original importers, so a symbol
    consumed through a barrel counts as used at its declaration.
    """
    declared = [{record.name for record in exports} for exports in graph.exports]
    star_targets = _star_reexport_targets(graph)
    usage: dict[int, dict[str, set[int]]] = defaultdict(lambda: defaultdict(set))

    pending: list[tuple[int, str, frozenset[int], frozenset[int]]] = []
    for importer, imports in enumerate(graph.imports):
        for imp in imports:
            if imp.target == importer:
                continue
            for name in imp.names:
                pending.append(
                    (imp.target, name, frozenset({importer}), frozenset())
                )

    while pending:
        node, name, importers, visited = pending.pop()
        external = importers - {node}
        if not external:
            continue
        usage[node][name].update(external)

        forwards = name == NAMESPACE_IMPORT or (
            name != DEFAULT_EXPORT and name not in declared[node]
        )
        if not forwards:
            continue
        for target in star_targets[node]:
            if target in visited:
                continue
            pending.append((target, name, external, visited | {node}))

    return usage


def find_dead_exports(
    graph: ModuleGraph,
    test_file_suffixes: Sequence[str],
) -> list[tuple[ExportFindingKind, str, str]]:
    """Classify exported symbols as dead or test-only.

    Exports of test modules are not analyzed. A module importing its own
    export does not count as a usage.

    Returns:
        (kind, module, name) triples sorted by module then name.
    """
    usage = collect_importers(graph)
    findings: list[tuple[ExportFindingKind, str, str]] = []

    for node, module in enumerate(graph.modules):
        if is_test_module(module, test_file_suffixes):
            continue

        requested = usage.get(node, {})
        namespace_importers = requested.get(NAMESPACE_IMPORT, set())
        for record in graph.exports[node]:
            importers = requested.get(record.name, set()) | namespace_importers
            if not importers:
                findings.append(("dead-export", module, record.name))
            elif all(
                is_test_module(graph.modules[importer], test_file_suffixes)
                for importer in importers
            ):
                findings.append(("test-only-export", module, record.name))

    findings.sort(key=lambda finding: (finding[1], finding[2], finding[0]))
    return findings


__all__ = ["collect_importers", "find_dead_exports", "is_test_module"]
