"""Coupling hotspot generator for modgraph artifacts."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from artifacts.summaries.builders import build_coupling_report
from artifacts.utils import _write_json
from contract.artifacts import COUPLING_JSON
from logconfig import get_logger

if TYPE_CHECKING:
    from pathlib import Path

    from graph.builder import ModuleGraph
    from rules.config import CouplingConfig

logger = get_logger("artifacts.coupling")


class CouplingGenerator:
    """Generator for the coupling.json artifact."""

    @property
    def name(self) -> str:
        return "coupling"

    def generate(
        self,
        graph: ModuleGraph,
        out_dir: Path,
        **kwargs: Any,
    ) -> dict[str, Any]:
        config: CouplingConfig | None = kwargs.get("config")

        out_dir.mkdir(parents=True, exist_ok=True)

        report = build_coupling_report(graph, config)
        _write_json(out_dir / COUPLING_JSON, report)

        logger.info(
            "coupling: %d hotspots across %d modules",
            len(report.hotspots),
            report.module_count,
        )
        return report.model_dump()


__all__ = ["COUPLING_JSON", "CouplingGenerator"]
