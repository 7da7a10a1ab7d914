from __future__ import annotations

from artifacts import analyze_dependencies
from artifacts.models.artifacts.files import ExportRecord, FileRecord, ImportRecord
from artifacts.summaries import compute_fan_stats
from graph.builder import build_module_graph
from rules.config import DependenciesConfig


def _file(path: str, *targets: str, exports: list[str] | None = None) -> FileRecord:
    return FileRecord(
        path=path,
        imports=[ImportRecord(specifier=target, names=["x"]) for target in targets],
        exports=[ExportRecord(name=name) for name in exports or []],
    )


def test_empty_input_produces_empty_summary() -> None:
    summary = analyze_dependencies([])

    assert summary.node_count == 0
    assert summary.edge_count == 0
    assert summary.cycles == []
    assert summary.fan_in == []
    assert summary.fan_out == []
    assert summary.cuts == []
    assert summary.layer_violations == []
    assert summary.dead_exports == []
    assert summary.adjacency == {}


def test_summary_relativizes_absolute_paths_against_root() -> None:
    summary = analyze_dependencies(
        [
            _file("/virtual/deps/a.ts", "./b"),
            _file("/virtual/deps/b.ts", "./a", exports=["x"]),
        ],
        root="/virtual",
    )

    assert summary.adjacency == {
        "deps/a.ts": ["deps/b.ts"],
        "deps/b.ts": ["deps/a.ts"],
    }
    assert [cycle.path for cycle in summary.cycles] == [["deps/a.ts", "deps/b.ts"]]
    assert summary.dead_exports == []


def test_summary_is_independent_of_input_order() -> None:
    files = [
        _file("src/a.ts", "./b", "./c", exports=["a"]),
        _file("src/b.ts", "./c", exports=["b"]),
        _file("src/c.ts", "./a", exports=["c", "unused"]),
    ]

    assert analyze_dependencies(files) == analyze_dependencies(list(reversed(files)))


def test_fan_stats_skip_zero_counts_and_truncate() -> None:
    graph = build_module_graph(
        [
            _file("hub.ts"),
            _file("a.ts", "./hub", "./b"),
            _file("b.ts", "./hub"),
            _file("c.ts", "./hub"),
            _file("lonely.ts"),
        ]
    )

    fan_in, fan_out = compute_fan_stats(graph, top_n=2)

    assert [(s.module, s.count) for s in fan_in] == [("hub.ts", 3), ("b.ts", 1)]
    assert [(s.module, s.count) for s in fan_out] == [("a.ts", 2), ("b.ts", 1)]


def test_summary_honors_configured_top_n_and_cycle_cap() -> None:
    files = [
        _file(f"k/m{i}.ts", *(f"./m{j}" for j in range(5) if j != i)) for i in range(5)
    ]
    config = DependenciesConfig(top_n=3, max_cycles_per_scc=7)

    summary = analyze_dependencies(files, config=config)

    assert len(summary.fan_in) == 3
    assert len(summary.cycles) == 7
    assert summary.cuts
    assert all(cut.reason == "breaks cycle" for cut in summary.cuts)
