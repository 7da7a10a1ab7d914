"""Artifact generation and analysis entry points."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from artifacts.models.artifacts.coupling import CouplingReport
    from artifacts.models.artifacts.dependencies import DepsSummary
    from artifacts.models.artifacts.files import FileRecord
    from graph.builder import ModuleGraph
    from rules.config import CouplingConfig, DependenciesConfig, ModGraphConfig


def generate_all_artifacts(
    *,
    root: Path,
    out_dir: Path | None = None,
    config: ModGraphConfig | None = None,
) -> dict[str, object]:
    """Generate artifacts via lazy import to avoid package import cycles."""
    from artifacts.write import generate_all_artifacts as _generate_all_artifacts

    return _generate_all_artifacts(root=root, out_dir=out_dir, config=config)


def analyze_dependencies(
    files: Iterable[FileRecord],
    *,
    root: str | Path | None = None,
    config: DependenciesConfig | None = None,
) -> DepsSummary:
    """Build the module graph of parsed files and run the dependency detectors.

    Paths of ``files`` may be absolute (relativized against ``root``) or
    already relative to the project root.
    """
    from artifacts.summaries.builders import build_deps_summary
    from graph.builder import build_module_graph

    return build_deps_summary(build_module_graph(files, root=root), config)


def analyze_coupling(
    files_or_graph: Iterable[FileRecord] | ModuleGraph,
    *,
    root: str | Path | None = None,
    config: CouplingConfig | None = None,
) -> CouplingReport:
    """Compute coupling hotspots from parsed files or an existing graph."""
    from artifacts.summaries.builders import build_coupling_report
    from graph.builder import ModuleGraph, build_module_graph

    if isinstance(files_or_graph, ModuleGraph):
        graph = files_or_graph
    else:
        graph = build_module_graph(files_or_graph, root=root)
    return build_coupling_report(graph, config)


__all__ = ["analyze_coupling", "analyze_dependencies", "generate_all_artifacts"]
