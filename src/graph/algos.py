"""Graph algorithms for modgraph: SCCs, elementary cycles and cycle cuts."""

from __future__ import annotations

from collections import Counter, defaultdict
from typing import TYPE_CHECKING

from logconfig import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from graph.builder import ModuleGraph

logger = get_logger("graph.algos")

DEFAULT_MAX_CYCLES_PER_SCC = 100


class _TarjanState:
    """Mutable state container for Tarjan's SCC algorithm."""

    def __init__(self) -> None:
        self.index = 0
        self.indices: dict[int, int] = {}
        self.low_link: dict[int, int] = {}
        self.on_stack: set[int] = set()
        self.stack: list[int] = []
        self.sccs: list[list[int]] = []

    def visit(self, node: int) -> None:
        self.indices[node] = self.index
        self.low_link[node] = self.index
        self.index += 1
        self.stack.append(node)
        self.on_stack.add(node)


def _extract_scc(state: _TarjanState, root: int) -> list[int]:
    """Extract a strongly connected component from the stack."""
    scc: list[int] = []
    while state.stack:
        w = state.stack.pop()
        state.on_stack.remove(w)
        scc.append(w)
        if w == root:
            break
    if root not in scc:
        msg = (
            f"Tarjan algorithm invariant violated: root node {root!r} "
            "not found in stack during SCC extraction."
        )
        raise RuntimeError(msg)
    return scc


def _strongconnect(
    root: int, successors: Sequence[Sequence[int]], state: _TarjanState
) -> None:
    """Process a node in Tarjan's algorithm with an explicit work stack.

    Deep import chains would exceed the interpreter recursion limit, so the
    DFS keeps (node, next neighbor position) frames instead of recursing.
    """
    state.visit(root)
    work: list[tuple[int, int]] = [(root, 0)]

    while work:
        node, position = work[-1]
        neighbors = successors[node]

        if position < len(neighbors):
            work[-1] = (node, position + 1)
            neighbor = neighbors[position]
            if neighbor not in state.indices:
                state.visit(neighbor)
                work.append((neighbor, 0))
            elif neighbor in state.on_stack:
                state.low_link[node] = min(
                    state.low_link[node], state.indices[neighbor]
                )
            continue

        work.pop()
        if state.low_link[node] == state.indices[node]:
            state.sccs.append(_extract_scc(state, node))
        if work:
            parent = work[-1][0]
            state.low_link[parent] = min(state.low_link[parent], state.low_link[node])


def strongly_connected_components(
    successors: Sequence[Sequence[int]],
) -> list[list[int]]:
    """Find all strongly connected components of an index graph.

    Args:
        successors: Neighbor indices per node

    Returns:
        Every SCC (singletons included) as a sorted index list, ordered by
        smallest member.
    """
    state = _TarjanState()

    for node in range(len(successors)):
        if node not in state.indices:
            _strongconnect(node, successors, state)

    return sorted(sorted(scc) for scc in state.sccs)


def _unblock(node: int, blocked: set[int], blocked_by: dict[int, set[int]]) -> None:
    pending = {node}
    while pending:
        current = pending.pop()
        if current in blocked:
            blocked.remove(current)
            pending.update(blocked_by[current])
            blocked_by[current].clear()


def _components_within(
    nodes: set[int], successors: Sequence[Sequence[int]]
) -> list[list[int]]:
    """SCCs of the subgraph induced by ``nodes``, in original indices."""
    ordered = sorted(nodes)
    local = {node: position for position, node in enumerate(ordered)}
    induced = [[local[n] for n in successors[node] if n in local] for node in ordered]
    return [
        [ordered[position] for position in scc]
        for scc in strongly_connected_components(induced)
    ]


def _has_cycle(component: list[int], successors: Sequence[Sequence[int]]) -> bool:
    return len(component) > 1 or component[0] in successors[component[0]]


def iter_elementary_cycles(
    members: Sequence[int],
    successors: Sequence[Sequence[int]],
) -> Iterator[list[int]]:
    """Yield elementary cycles within a component using Johnson's algorithm.

    Each cycle is reported once, starting at its smallest index. Every search
    is confined to the component of its start node within the nodes not yet
    used as a start. The generator is lazy: callers stop the enumeration by
    no longer consuming it, which keeps dense components from exploding.
    """
    remaining = set(members)

    while remaining:
        components = [
            component
            for component in _components_within(remaining, successors)
            if _has_cycle(component, successors)
        ]
        if not components:
            return

        # components come sorted by smallest member
        component = components[0]
        start = component[0]
        allowed = set(component)

        def neighbors(node: int, allowed: set[int] = allowed) -> list[int]:
            return [n for n in successors[node] if n in allowed]

        blocked = {start}
        blocked_by: dict[int, set[int]] = defaultdict(set)
        closed: set[int] = set()
        path = [start]
        stack = [(start, neighbors(start)[::-1])]

        while stack:
            node, pending = stack[-1]
            if pending:
                following = pending.pop()
                if following == start:
                    yield list(path)
                    closed.update(path)
                elif following not in blocked:
                    path.append(following)
                    stack.append((following, neighbors(following)[::-1]))
                    closed.discard(following)
                    blocked.add(following)
                    continue

            if not pending:
                if node in closed:
                    _unblock(node, blocked, blocked_by)
                else:
                    for neighbor in neighbors(node):
                        blocked_by[neighbor].add(node)
                stack.pop()
                path.pop()

        remaining = {node for node in remaining if node > start}


def canonicalize_cycle(path: Sequence[str]) -> tuple[list[str], str]:
    """Rotate a cycle to start at its smallest module and compute its dedup key.

    The key is the cycle's module set, sorted and joined. It ignores rotation
    and direction, and circuits that visit the same modules in a different
    order share it; the first one discovered is kept.
    """
    return _rotate_to_min(list(path)), "->".join(sorted(path))


def _rotate_to_min(path: list[str]) -> list[str]:
    if not path:
        return []
    start = path.index(min(path))
    return path[start:] + path[:start]


def find_cycles(
    graph: ModuleGraph,
    *,
    max_cycles_per_scc: int = DEFAULT_MAX_CYCLES_PER_SCC,
) -> list[list[str]]:
    """Find deduplicated dependency cycles of a module graph.

    Args:
        graph: Module graph to analyze
        max_cycles_per_scc: Cap on distinct cycles recorded per component

    Returns:
        Cycles as module paths (closing module not repeated). Components are
        ordered by smallest module; cycles within one keep discovery order.
    """
    cycles: list[list[str]] = []
    seen: set[str] = set()

    for scc in strongly_connected_components(graph.successors):
        if len(scc) == 1:
            node = scc[0]
            if node in graph.successors[node]:
                cycles.append([graph.modules[node]])
            continue

        recorded = 0
        for cycle in iter_elementary_cycles(scc, graph.successors):
            path, key = canonicalize_cycle([graph.modules[n] for n in cycle])
            if key in seen:
                continue
            seen.add(key)
            cycles.append(path)
            recorded += 1
            if recorded >= max_cycles_per_scc:
                logger.debug(
                    "Cycle cap of %d reached for component of %d modules starting at %s",
                    max_cycles_per_scc,
                    len(scc),
                    graph.modules[scc[0]],
                )
                break

    return cycles


def _cycle_edges(path: Sequence[str]) -> list[tuple[str, str]]:
    return [(path[i], path[(i + 1) % len(path)]) for i in range(len(path))]


def compute_edge_cuts(
    cycles: Sequence[Sequence[str]],
    graph: ModuleGraph,
) -> list[tuple[str, str, int]]:
    """Pick, per cycle, the edge whose removal breaks the most recorded cycles.

    Ties prefer the edge leaving the module with the larger fan-out, then the
    lexicographically smaller edge.

    Returns:
        Distinct (source, target, score) triples, score being the number of
        recorded cycles the edge participates in, sorted by descending score.
    """
    participation: Counter[tuple[str, str]] = Counter()
    for path in cycles:
        if len(path) > 1:
            participation.update(set(_cycle_edges(path)))

    def rank(edge: tuple[str, str]) -> tuple[int, int, str, str]:
        fan_out = graph.fan_out(graph.index[edge[0]])
        return (-participation[edge], -fan_out, edge[0], edge[1])

    cuts: dict[tuple[str, str], int] = {}
    for path in cycles:
        if len(path) < 2:
            continue
        best = min(_cycle_edges(path), key=rank)
        cuts.setdefault(best, participation[best])

    return sorted(
        ((source, target, score) for (source, target), score in cuts.items()),
        key=lambda cut: (-cut[2], cut[0], cut[1]),
    )


__all__ = [
    "DEFAULT_MAX_CYCLES_PER_SCC",
    "canonicalize_cycle",
    "compute_edge_cuts",
    "find_cycles",
    "iter_elementary_cycles",
    "strongly_connected_components",
]
