"""Summary builders for artifact generation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from artifacts.models.artifacts.coupling import CouplingReport
from artifacts.models.artifacts.dependencies import (
    DeadExportFinding,
    DependencyCycle,
    DepsSummary,
    EdgeCut,
    ExportStats,
    FanStat,
)
from graph.algos import compute_edge_cuts, find_cycles
from graph.coupling import classify_hotspots
from graph.exports import find_dead_exports

if TYPE_CHECKING:
    from artifacts.models.artifacts.dependencies import LayerViolation
    from graph.builder import ModuleGraph
    from rules.config import CouplingConfig, DependenciesConfig


def compute_fan_stats(
    graph: ModuleGraph,
    top_n: int = 10,
) -> tuple[list[FanStat], list[FanStat]]:
    """Compute the top fan-in and fan-out lists of a module graph.

    Only modules with a nonzero count are listed, sorted by descending count
    then module path.
    """

    def top(counts: list[tuple[str, int]]) -> list[FanStat]:
        ranked = sorted(
            ((module, count) for module, count in counts if count > 0),
            key=lambda item: (-item[1], item[0]),
        )
        return [FanStat(module=module, count=count) for module, count in ranked[:top_n]]

    fan_in = top(
        [(module, graph.fan_in(node)) for node, module in enumerate(graph.modules)]
    )
    fan_out = top(
        [(module, graph.fan_out(node)) for node, module in enumerate(graph.modules)]
    )
    return fan_in, fan_out


def compute_layer_violations(
    graph: ModuleGraph,
    config: DependenciesConfig,
) -> list[LayerViolation]:
    """Compute layer violations from the distinct edges of a module graph."""
    from artifacts.models.artifacts.dependencies import LayerViolation
    from rules.layers import assign_layers, build_allowed_deps, is_violation

    if not config.layers_enabled:
        return []

    layers = assign_layers(graph.modules, config)
    allowed_deps = build_allowed_deps(config)
    violations: list[LayerViolation] = []

    for source_module, target_module in graph.edges():
        from_layer = layers.get(source_module)
        to_layer = layers.get(target_module)

        if from_layer is None or to_layer is None:
            continue

        if is_violation(from_layer, to_layer, allowed_deps):
            violations.append(
                LayerViolation(
                    from_module=source_module,
                    to_module=target_module,
                    from_layer=from_layer,
                    to_layer=to_layer,
                )
            )

    violations.sort(key=lambda v: (v.from_module, v.to_module))
    return violations


def build_deps_summary(
    graph: ModuleGraph,
    config: DependenciesConfig | None = None,
) -> DepsSummary:
    """Run the dependency detectors over a graph snapshot."""
    if config is None:
        from rules.config import DependenciesConfig

        config = DependenciesConfig()

    cycles = find_cycles(graph, max_cycles_per_scc=config.max_cycles_per_scc)
    fan_in, fan_out = compute_fan_stats(graph, top_n=config.top_n)
    cuts = compute_edge_cuts(cycles, graph)
    dead_exports = find_dead_exports(graph, config.test_file_suffixes)

    export_stats: dict[str, ExportStats] = {}
    for node, module in enumerate(graph.modules):
        type_decls, abstract_decls = graph.export_stats(node)
        export_stats[module] = ExportStats(total=type_decls, abstract=abstract_decls)

    return DepsSummary(
        node_count=len(graph),
        edge_count=graph.edge_count,
        cycles=[DependencyCycle(path=path) for path in cycles],
        fan_in=fan_in,
        fan_out=fan_out,
        cuts=[
            EdgeCut(from_module=source, to_module=target, score=score)
            for source, target, score in cuts
        ],
        layer_violations=compute_layer_violations(graph, config),
        dead_exports=[
            DeadExportFinding(kind=kind, module=module, name=name)
            for kind, module, name in dead_exports
        ],
        adjacency=graph.adjacency(),
        export_stats=export_stats,
    )


def build_coupling_report(
    graph: ModuleGraph,
    config: CouplingConfig | None = None,
) -> CouplingReport:
    return CouplingReport(
        module_count=len(graph),
        hotspots=classify_hotspots(graph, config),
    )
