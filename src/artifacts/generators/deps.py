"""Dependency graph generator for modgraph artifacts."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from artifacts.summaries.builders import build_deps_summary
from artifacts.utils import _write_json
from contract.artifacts import DEPS_EDGELIST, DEPS_SUMMARY_JSON
from logconfig import get_logger

if TYPE_CHECKING:
    from pathlib import Path

    from graph.builder import ModuleGraph
    from rules.config import DependenciesConfig

logger = get_logger("artifacts.deps")


def _format_edgelist(graph: ModuleGraph) -> str:
    """Render one ``a -> b [kind,kind]`` line per distinct edge, sorted."""
    lines = []
    for source, target in sorted(graph.edge_kinds):
        kinds = ",".join(graph.kinds_of(source, target))
        lines.append(f"{graph.modules[source]} -> {graph.modules[target]} [{kinds}]")
    lines.sort()
    return "".join(f"{line}\n" for line in lines)


class DepsGenerator:
    """Generator for dependency graph artifacts."""

    @property
    def name(self) -> str:
        """Generator name for logging and identification."""
        return "deps"

    def generate(
        self,
        graph: ModuleGraph,
        out_dir: Path,
        **kwargs: Any,
    ) -> dict[str, Any]:
        """Generate deps.edgelist and deps_summary.json from a module graph."""
        config: DependenciesConfig | None = kwargs.get("config")

        out_dir.mkdir(parents=True, exist_ok=True)

        (out_dir / DEPS_EDGELIST).write_text(
            _format_edgelist(graph), encoding="utf-8"
        )

        summary = build_deps_summary(graph, config)
        _write_json(out_dir / DEPS_SUMMARY_JSON, summary)

        logger.info(
            "deps: %d modules, %d edges, %d cycles, %d dead exports, "
            "%d layer violations",
            summary.node_count,
            summary.edge_count,
            len(summary.cycles),
            len(summary.dead_exports),
            len(summary.layer_violations),
        )
        return summary.model_dump()


__all__ = [
    "DEPS_EDGELIST",
    "DEPS_SUMMARY_JSON",
    "DepsGenerator",
    "_format_edgelist",
]
