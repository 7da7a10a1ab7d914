"""Coupling metric models.

Per-module metrics follow the package-metrics model: afferent coupling
(fan-in), efferent coupling (fan-out), instability, abstractness and
distance from the main sequence.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


def _artifact_schema_version() -> int:
    from contract.artifacts import ARTIFACT_SCHEMA_VERSION

    return ARTIFACT_SCHEMA_VERSION


CouplingSignal = Literal[
    "bidirectional-coupling",
    "god-module",
    "off-main-sequence",
    "rigid-module",
    "unstable-module",
]


class CouplingMetrics(BaseModel):
    fan_in: int
    fan_out: int
    instability: float
    abstractness: float
    distance: float


class CouplingHotspot(BaseModel):
    """A module flagged by at least one coupling signal."""

    module: str
    metrics: CouplingMetrics
    signals: list[CouplingSignal] = Field(default_factory=list)
    score: int = 0


class CouplingReport(BaseModel):
    schema_version: int = Field(default_factory=_artifact_schema_version)
    module_count: int
    hotspots: list[CouplingHotspot] = Field(default_factory=list)


__all__ = [
    "CouplingHotspot",
    "CouplingMetrics",
    "CouplingReport",
    "CouplingSignal",
]
