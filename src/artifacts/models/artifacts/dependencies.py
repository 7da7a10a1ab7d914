"""Dependency models for module relationships.

This module contains models for representing the module graph summary:
cycles, fan statistics, cycle-breaking cuts, layer violations and dead
exports.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


def _artifact_schema_version() -> int:
    from contract.artifacts import ARTIFACT_SCHEMA_VERSION

    return ARTIFACT_SCHEMA_VERSION


DeadExportKind = Literal["dead-export", "test-only-export"]


class DependencyCycle(BaseModel):
    """A closed path of modules; the first module is not repeated at the end."""

    path: list[str]


class FanStat(BaseModel):
    module: str
    count: int


class EdgeCut(BaseModel):
    """An edge whose removal breaks one or more cycles."""

    from_module: str
    to_module: str
    score: int
    reason: str = "breaks cycle"


class LayerViolation(BaseModel):
    """A dependency that violates layer rules."""

    kind: Literal["layer-violation"] = "layer-violation"
    from_module: str
    to_module: str
    from_layer: str
    to_layer: str


class DeadExportFinding(BaseModel):
    kind: DeadExportKind
    module: str
    name: str


class ExportStats(BaseModel):
    total: int = 0
    abstract: int = 0


class DepsSummary(BaseModel):
    """Summary of dependency graph analysis."""

    schema_version: int = Field(default_factory=_artifact_schema_version)
    node_count: int
    edge_count: int
    cycles: list[DependencyCycle] = Field(default_factory=list)
    fan_in: list[FanStat] = Field(default_factory=list)
    fan_out: list[FanStat] = Field(default_factory=list)
    cuts: list[EdgeCut] = Field(default_factory=list)
    layer_violations: list[LayerViolation] = Field(default_factory=list)
    dead_exports: list[DeadExportFinding] = Field(default_factory=list)
    adjacency: dict[str, list[str]] = Field(default_factory=dict)
    export_stats: dict[str, ExportStats] = Field(default_factory=dict)


__all__ = [
    "DeadExportFinding",
    "DeadExportKind",
    "DependencyCycle",
    "DepsSummary",
    "EdgeCut",
    "ExportStats",
    "FanStat",
    "LayerViolation",
]
