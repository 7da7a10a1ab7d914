"""Artifact contract definitions.

This module defines the stable filenames and formats of the artifacts that
modgraph writes for report-formatting layers.
"""

from __future__ import annotations

from dataclasses import dataclass

# Artifact schema version shared by every JSON artifact.
ARTIFACT_SCHEMA_VERSION = 1

# Artifact filename constants (stable contract identifiers).
DEPS_EDGELIST = "deps.edgelist"
DEPS_SUMMARY_JSON = "deps_summary.json"
COUPLING_JSON = "coupling.json"


@dataclass(frozen=True)
class ArtifactSpec:
    """Specification for a contract artifact."""

    filename: str
    format: str
    required_fields_note: str


ARTIFACT_SPECS: dict[str, ArtifactSpec] = {
    "deps_edgelist": ArtifactSpec(
        filename=DEPS_EDGELIST,
        format="edgelist",
        required_fields_note="Dependency edges 'source -> target [kinds]'.",
    ),
    "deps_summary": ArtifactSpec(
        filename=DEPS_SUMMARY_JSON,
        format="json",
        required_fields_note="DepsSummary fields required by contract.",
    ),
    "coupling": ArtifactSpec(
        filename=COUPLING_JSON,
        format="json",
        required_fields_note="CouplingReport fields required by contract.",
    ),
}
