from __future__ import annotations

from typing import TYPE_CHECKING

from artifacts.generators import CouplingGenerator, DepsGenerator
from artifacts.models.artifacts.coupling import CouplingReport
from artifacts.models.artifacts.dependencies import DepsSummary
from artifacts.utils import _load_module_graph
from contract.artifacts import COUPLING_JSON, DEPS_EDGELIST, DEPS_SUMMARY_JSON
from logconfig import get_logger
from rules.config import load_config, resolve_output_dir

if TYPE_CHECKING:
    from pathlib import Path

    from rules.config import ModGraphConfig

logger = get_logger("artifacts.write")


def generate_all_artifacts(
    *,
    root: Path,
    out_dir: Path | None = None,
    config: ModGraphConfig | None = None,
) -> dict[str, object]:
    """Generate the dependency and coupling artifacts for a repository.

    Args:
        root: Root directory of the repository to analyze
        out_dir: Optional output directory for generated artifacts
        config: Optional configuration; loaded from modgraph.toml when omitted

    Returns:
        Dictionary with counts and list of generated artifact paths.
    """
    if config is None:
        config = load_config(root)

    if out_dir is None:
        out_dir = resolve_output_dir(root, config.output_dir)

    graph = _load_module_graph(root, out_dir, config)
    logger.debug("Built module graph: %d modules", len(graph))

    deps_gen = DepsGenerator()
    deps_summary = DepsSummary(
        **deps_gen.generate(graph, out_dir, config=config.dependencies)
    )

    coupling_gen = CouplingGenerator()
    coupling_report = CouplingReport(
        **coupling_gen.generate(graph, out_dir, config=config.coupling)
    )

    artifacts_list = [DEPS_EDGELIST, DEPS_SUMMARY_JSON, COUPLING_JSON]

    return {
        "node_count": deps_summary.node_count,
        "edge_count": deps_summary.edge_count,
        "cycle_count": len(deps_summary.cycles),
        "dead_export_count": len(deps_summary.dead_exports),
        "layer_violation_count": len(deps_summary.layer_violations),
        "hotspot_count": len(coupling_report.hotspots),
        "artifacts": [str(out_dir / name) for name in artifacts_list],
    }
