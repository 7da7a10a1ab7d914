from __future__ import annotations

import pytest

from artifacts import analyze_coupling
from artifacts.models.artifacts.coupling import CouplingHotspot
from artifacts.models.artifacts.files import ExportRecord, FileRecord, ImportRecord
from graph.builder import ModuleGraph, build_module_graph
from graph.coupling import (
    classify_hotspots,
    compute_coupling_metrics,
    god_module_threshold,
)
from rules.config import CouplingConfig


def _graph(
    edges: dict[str, list[str]],
    exports: dict[str, list[tuple[str, str]]] | None = None,
) -> ModuleGraph:
    modules = set(edges)
    for targets in edges.values():
        modules.update(targets)
    exports = exports or {}
    return build_module_graph(
        [
            FileRecord(
                path=f"{module}.ts",
                imports=[
                    ImportRecord(specifier=f"./{target}", names=["x"])
                    for target in edges.get(module, [])
                ],
                exports=[
                    ExportRecord(name=name, declaration_kind=kind)
                    for name, kind in exports.get(module, [])
                ],
            )
            for module in sorted(modules)
        ]
    )


def _hotspot(graph: ModuleGraph, module: str) -> CouplingHotspot | None:
    return next(
        (hotspot for hotspot in classify_hotspots(graph) if hotspot.module == module),
        None,
    )


def test_isolated_module_has_zero_instability_and_is_not_a_hotspot() -> None:
    graph = _graph({"alone": []})

    metrics = compute_coupling_metrics(graph)["alone.ts"]

    assert metrics.instability == 0.0
    assert metrics.distance == 1.0
    assert classify_hotspots(graph) == []


def test_module_with_only_fan_out_is_fully_unstable() -> None:
    targets = [f"dep{i}" for i in range(6)]
    graph = _graph({"leaf": targets})

    hotspot = _hotspot(graph, "leaf.ts")

    assert hotspot is not None
    assert hotspot.metrics.instability == 1.0
    assert hotspot.signals == ["unstable-module"]
    assert hotspot.score == 6 + 10


def test_fan_out_of_five_is_not_unstable() -> None:
    graph = _graph({"leaf": [f"dep{i}" for i in range(5)]})

    assert _hotspot(graph, "leaf.ts") is None


def test_concrete_stable_module_lands_in_zone_of_pain() -> None:
    edges = {f"user{i}": ["pain"] for i in range(9)}
    edges["pain"] = ["base"]
    graph = _graph(edges)

    hotspot = _hotspot(graph, "pain.ts")

    assert hotspot is not None
    assert hotspot.metrics.instability == pytest.approx(0.1)
    assert hotspot.metrics.distance == pytest.approx(0.9)
    assert "off-main-sequence" in hotspot.signals


def test_abstract_unstable_module_lands_in_zone_of_uselessness() -> None:
    graph = _graph(
        {"consumer": ["useless"], "useless": [f"dep{i}" for i in range(9)]},
        exports={
            "useless": [("Port", "interface"), ("BaseAdapter", "abstract-class")]
        },
    )

    hotspot = _hotspot(graph, "useless.ts")

    assert hotspot is not None
    assert hotspot.metrics.abstractness == 1.0
    assert hotspot.metrics.distance == pytest.approx(0.9)
    assert hotspot.signals == ["off-main-sequence", "unstable-module"]


def test_god_module_threshold_scales_with_module_count() -> None:
    config = CouplingConfig()

    assert god_module_threshold(50, config) == 10
    assert god_module_threshold(200, config) == 20


def test_god_module_uses_dynamic_threshold() -> None:
    edges: dict[str, list[str]] = {f"m{i:03d}": [] for i in range(198)}
    for i in range(21):
        edges[f"m{i:03d}"] = ["hub"]
    for i in range(21, 36):
        edges[f"m{i:03d}"] = ["other"]
    graph = _graph(edges)

    assert len(graph) == 200
    hub = _hotspot(graph, "hub.ts")
    other = _hotspot(graph, "other.ts")

    assert hub is not None
    assert "god-module" in hub.signals
    assert other is not None
    assert "god-module" not in other.signals


def test_hub_with_balanced_fan_is_a_god_module_with_half_instability() -> None:
    edges = {f"in{i}": ["hub"] for i in range(11)}
    edges["hub"] = [f"out{i}" for i in range(11)]
    graph = _graph(edges)

    hotspot = _hotspot(graph, "hub.ts")

    assert hotspot is not None
    assert hotspot.metrics.fan_in == 11
    assert hotspot.metrics.fan_out == 11
    assert hotspot.metrics.instability == 0.5
    assert hotspot.signals == ["god-module"]
    assert hotspot.score == 22 + 10


def test_heavily_depended_on_stable_module_is_rigid() -> None:
    graph = _graph({f"user{i}": ["core"] for i in range(11)})

    hotspot = _hotspot(graph, "core.ts")

    assert hotspot is not None
    assert hotspot.signals == ["god-module", "off-main-sequence", "rigid-module"]
    assert hotspot.metrics.fan_in == 11
    assert hotspot.metrics.fan_out == 0
    assert hotspot.metrics.instability == 0.0


def test_mutual_imports_are_bidirectional_and_ties_sort_by_module() -> None:
    graph = _graph({"b": ["a"], "a": ["b"]})

    hotspots = classify_hotspots(graph)

    assert [(h.module, h.signals, h.score) for h in hotspots] == [
        ("a.ts", ["bidirectional-coupling"], 12),
        ("b.ts", ["bidirectional-coupling"], 12),
    ]


def test_hotspots_sort_by_descending_score() -> None:
    edges = {f"user{i}": ["core"] for i in range(11)}
    edges["b"] = ["a"]
    edges["a"] = ["b"]
    graph = _graph(edges)

    scores = [hotspot.score for hotspot in classify_hotspots(graph)]

    assert scores == sorted(scores, reverse=True)
    assert classify_hotspots(graph)[0].module == "core.ts"


def test_thresholds_are_configurable() -> None:
    graph = _graph({"leaf": ["dep0", "dep1"]})
    config = CouplingConfig(unstable_min_fan_out=1, distance_threshold=1.0)

    hotspots = classify_hotspots(graph, config)

    assert [(h.module, h.signals) for h in hotspots] == [
        ("leaf.ts", ["unstable-module"])
    ]


def test_empty_input_produces_empty_report() -> None:
    report = analyze_coupling([])

    assert report.module_count == 0
    assert report.hotspots == []


def test_analyze_coupling_accepts_a_prebuilt_graph() -> None:
    graph = _graph({"b": ["a"], "a": ["b"]})

    from_graph = analyze_coupling(graph)
    from_files = analyze_coupling(
        [
            FileRecord(path="/repo/a.ts", imports=[ImportRecord(specifier="./b")]),
            FileRecord(path="/repo/b.ts", imports=[ImportRecord(specifier="./a")]),
        ],
        root="/repo",
    )

    assert from_graph == from_files


def test_report_is_independent_of_input_order() -> None:
    files = [
        FileRecord(
            path=f"src/{name}.ts",
            imports=[ImportRecord(specifier=f"./{t}", names=["x"]) for t in targets],
            exports=[ExportRecord(name=name, declaration_kind="interface")],
        )
        for name, targets in (
            ("a", ["b", "c", "d", "e", "f", "g"]),
            ("b", ["a"]),
            ("c", ["d"]),
            ("d", []),
            ("e", ["d"]),
            ("f", []),
            ("g", ["a"]),
        )
    ]

    forward = analyze_coupling(files)
    backward = analyze_coupling(list(reversed(files)))

    assert forward.hotspots
    assert forward == backward
    assert compute_coupling_metrics(build_module_graph(files)) == (
        compute_coupling_metrics(build_module_graph(list(reversed(files))))
    )
