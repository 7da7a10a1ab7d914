"""Summary helpers for modgraph artifacts."""

from artifacts.summaries.builders import (
    build_coupling_report,
    build_deps_summary,
    compute_fan_stats,
    compute_layer_violations,
)

__all__ = [
    "build_coupling_report",
    "build_deps_summary",
    "compute_fan_stats",
    "compute_layer_violations",
]
