from __future__ import annotations

from artifacts.models.artifacts.files import FileRecord, ImportRecord
from graph.algos import (
    canonicalize_cycle,
    compute_edge_cuts,
    find_cycles,
    strongly_connected_components,
)
from graph.builder import build_module_graph


def _file(path: str, *targets: str) -> FileRecord:
    return FileRecord(
        path=path,
        imports=[ImportRecord(specifier=target, names=["x"]) for target in targets],
    )


def _complete_graph(prefix: str, size: int) -> list[FileRecord]:
    names = [f"{prefix}/m{i}.ts" for i in range(size)]
    return [
        _file(name, *(f"./m{j}" for j in range(size) if j != i))
        for i, name in enumerate(names)
    ]


def test_triangle_yields_one_cycle_with_one_cut() -> None:
    graph = build_module_graph(
        [_file("a.ts", "./b"), _file("b.ts", "./c"), _file("c.ts", "./a")]
    )

    cycles = find_cycles(graph)

    assert cycles == [["a.ts", "b.ts", "c.ts"]]
    assert compute_edge_cuts(cycles, graph) == [("a.ts", "b.ts", 1)]


def test_self_import_is_a_single_module_cycle_without_cut() -> None:
    graph = build_module_graph([_file("a.ts", "./a"), _file("b.ts", "./a")])

    cycles = find_cycles(graph)

    assert cycles == [["a.ts"]]
    assert compute_edge_cuts(cycles, graph) == []


def test_acyclic_and_empty_graphs_have_no_cycles() -> None:
    chain = build_module_graph([_file("a.ts", "./b"), _file("b.ts", "./c"), _file("c.ts")])
    empty = build_module_graph([])

    assert find_cycles(chain) == []
    assert find_cycles(empty) == []
    assert compute_edge_cuts([], empty) == []


def test_canonical_key_ignores_rotation_and_direction() -> None:
    forward, key = canonicalize_cycle(["b.ts", "c.ts", "a.ts"])
    _, rotated_key = canonicalize_cycle(["a.ts", "b.ts", "c.ts"])
    _, reversed_key = canonicalize_cycle(["c.ts", "b.ts", "a.ts"])

    assert forward == ["a.ts", "b.ts", "c.ts"]
    assert key == rotated_key == reversed_key == "a.ts->b.ts->c.ts"


def test_circuits_over_the_same_modules_count_once() -> None:
    graph = build_module_graph(
        [
            _file("a.ts", "./b", "./c"),
            _file("b.ts", "./a", "./c"),
            _file("c.ts", "./a", "./b"),
        ]
    )

    cycles = find_cycles(graph)

    assert sorted(cycles) == [
        ["a.ts", "b.ts"],
        ["a.ts", "b.ts", "c.ts"],
        ["a.ts", "c.ts"],
        ["b.ts", "c.ts"],
    ]


def test_complete_graph_of_four_has_one_cycle_per_module_set() -> None:
    graph = build_module_graph(_complete_graph("k", 4))

    cycles = find_cycles(graph)

    # 6 pairs, 4 triples and the full set
    assert len(cycles) == 11
    assert len({frozenset(cycle) for cycle in cycles}) == 11


def test_converging_paths_produce_two_cycles_sharing_the_back_edge() -> None:
    graph = build_module_graph(
        [
            _file("a.ts", "./b", "./c"),
            _file("b.ts", "./d"),
            _file("c.ts", "./d"),
            _file("d.ts", "./a"),
        ]
    )

    cycles = find_cycles(graph)

    assert sorted(cycles) == [
        ["a.ts", "b.ts", "d.ts"],
        ["a.ts", "c.ts", "d.ts"],
    ]
    assert compute_edge_cuts(cycles, graph) == [("d.ts", "a.ts", 2)]


def test_overlapping_two_cycles_are_both_reported() -> None:
    graph = build_module_graph(
        [_file("a.ts", "./b"), _file("b.ts", "./a", "./c"), _file("c.ts", "./b")]
    )

    assert sorted(find_cycles(graph)) == [["a.ts", "b.ts"], ["b.ts", "c.ts"]]


def test_strongly_connected_components_include_singletons() -> None:
    graph = build_module_graph(
        [_file("a.ts", "./b"), _file("b.ts", "./a"), _file("c.ts", "./a")]
    )

    assert strongly_connected_components(graph.successors) == [[0, 1], [2]]


def test_dense_component_is_bounded_by_the_cycle_cap() -> None:
    graph = build_module_graph(_complete_graph("k", 6))

    cycles = find_cycles(graph)
    capped = find_cycles(graph, max_cycles_per_scc=20)

    # 57 module sets of size two or more
    assert len(cycles) == 57
    assert len({frozenset(cycle) for cycle in cycles}) == 57
    assert len(capped) == 20
    assert len(find_cycles(graph, max_cycles_per_scc=100)) <= 100


def test_cycle_cap_applies_per_component() -> None:
    graph = build_module_graph(_complete_graph("k", 6) + _complete_graph("j", 6))

    assert len(find_cycles(graph)) == 114
    assert len(find_cycles(graph, max_cycles_per_scc=5)) == 10


def test_deep_chain_does_not_hit_recursion_limit() -> None:
    size = 5000
    files = [_file(f"m{i}.ts", f"./m{i + 1}") for i in range(size - 1)]
    files.append(_file(f"m{size - 1}.ts", "./m0"))

    graph = build_module_graph(files)

    assert len(strongly_connected_components(graph.successors)) == 1
    assert len(find_cycles(graph)) == 1


def test_cycles_do_not_depend_on_input_order() -> None:
    files = [
        _file("a.ts", "./b", "./c"),
        _file("b.ts", "./c", "./a"),
        _file("c.ts", "./a"),
        _file("d.ts", "./d"),
    ]

    forward = build_module_graph(files)
    backward = build_module_graph(list(reversed(files)))

    assert find_cycles(forward) == find_cycles(backward)
    assert compute_edge_cuts(find_cycles(forward), forward) == compute_edge_cuts(
        find_cycles(backward), backward
    )
