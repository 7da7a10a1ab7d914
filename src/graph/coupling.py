"""Coupling metrics and hotspot classification.

Metrics per module (Robert C. Martin's package metrics applied to files):

- fan-in (Ca): distinct modules importing the module
- fan-out (Ce): distinct modules the module imports
- instability I = Ce / (Ca + Ce), 0 for isolated modules
- abstractness A = abstract declarations / type declarations, where type
  declarations are exported interfaces and (abstract) classes
- distance D = |A + I - 1| from the main sequence

Everything here is a pure function of the graph snapshot.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from artifacts.models.artifacts.coupling import CouplingHotspot, CouplingMetrics

if TYPE_CHECKING:
    from artifacts.models.artifacts.coupling import CouplingSignal
    from graph.builder import ModuleGraph
    from rules.config import CouplingConfig

SIGNAL_WEIGHT = 10


def compute_module_metrics(graph: ModuleGraph, node: int) -> CouplingMetrics:
    fan_in = graph.fan_in(node)
    fan_out = graph.fan_out(node)
    total = fan_in + fan_out
    instability = fan_out / total if total else 0.0

    type_decls, abstract_decls = graph.export_stats(node)
    abstractness = abstract_decls / type_decls if type_decls else 0.0

    return CouplingMetrics(
        fan_in=fan_in,
        fan_out=fan_out,
        instability=instability,
        abstractness=abstractness,
        distance=abs(abstractness + instability - 1),
    )


def compute_coupling_metrics(graph: ModuleGraph) -> dict[str, CouplingMetrics]:
    """Compute metrics for every module, isolated ones included."""
    return {
        module: compute_module_metrics(graph, node)
        for node, module in enumerate(graph.modules)
    }


def god_module_threshold(module_count: int, config: CouplingConfig) -> int:
    return max(
        config.god_module_min, math.ceil(module_count * config.god_module_ratio)
    )


def rigid_module_threshold(module_count: int, config: CouplingConfig) -> int:
    return max(
        config.rigid_module_min, math.ceil(module_count * config.rigid_module_ratio)
    )


def _is_bidirectional(graph: ModuleGraph, node: int) -> bool:
    return any(
        target != node and node in graph.successors[target]
        for target in graph.successors[node]
    )


def classify_signals(
    graph: ModuleGraph,
    node: int,
    metrics: CouplingMetrics,
    config: CouplingConfig,
) -> list[CouplingSignal]:
    """Return the sorted hotspot signals raised by one module."""
    module_count = len(graph)
    signals: list[CouplingSignal] = []

    god_threshold = god_module_threshold(module_count, config)
    if metrics.fan_in > god_threshold or metrics.fan_out > god_threshold:
        signals.append("god-module")

    if (
        metrics.instability > config.unstable_instability
        and metrics.fan_out > config.unstable_min_fan_out
    ):
        signals.append("unstable-module")

    coupling = metrics.fan_in + metrics.fan_out
    if (
        metrics.distance > config.distance_threshold
        and coupling >= config.off_main_sequence_min_coupling
    ):
        signals.append("off-main-sequence")

    if (
        metrics.fan_in > rigid_module_threshold(module_count, config)
        and metrics.instability < config.rigid_instability
    ):
        signals.append("rigid-module")

    if _is_bidirectional(graph, node):
        signals.append("bidirectional-coupling")

    return sorted(signals)


def classify_hotspots(
    graph: ModuleGraph,
    config: CouplingConfig | None = None,
) -> list[CouplingHotspot]:
    """Classify coupling hotspots and rank them.

    Isolated modules (no fan-in and no fan-out) are never reported; other
    modules are reported when at least one signal fires.

    Returns:
        Hotspots sorted by descending score, then ascending module path.
    """
    if config is None:
        from rules.config import CouplingConfig

        config = CouplingConfig()

    hotspots: list[CouplingHotspot] = []
    for node, module in enumerate(graph.modules):
        if graph.fan_in(node) == 0 and graph.fan_out(node) == 0:
            continue

        metrics = compute_module_metrics(graph, node)
        signals = classify_signals(graph, node, metrics, config)
        if not signals:
            continue

        hotspots.append(
            CouplingHotspot(
                module=module,
                metrics=metrics,
                signals=signals,
                score=metrics.fan_in + metrics.fan_out + SIGNAL_WEIGHT * len(signals),
            )
        )

    hotspots.sort(key=lambda hotspot: (-hotspot.score, hotspot.module))
    return hotspots


__all__ = [
    "SIGNAL_WEIGHT",
    "classify_hotspots",
    "classify_signals",
    "compute_coupling_metrics",
    "compute_module_metrics",
    "god_module_threshold",
    "rigid_module_threshold",
]
