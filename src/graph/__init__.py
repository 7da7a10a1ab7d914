"""Module graph construction and graph-derived analyses."""

from graph.algos import compute_edge_cuts, find_cycles, strongly_connected_components
from graph.builder import ModuleGraph, ResolvedImport, build_module_graph
from graph.coupling import classify_hotspots, compute_coupling_metrics
from graph.exports import find_dead_exports, is_test_module
from graph.resolver import is_relative_specifier, resolve_specifier

__all__ = [
    "ModuleGraph",
    "ResolvedImport",
    "build_module_graph",
    "classify_hotspots",
    "compute_coupling_metrics",
    "compute_edge_cuts",
    "find_cycles",
    "find_dead_exports",
    "is_relative_specifier",
    "is_test_module",
    "resolve_specifier",
    "strongly_connected_components",
]
