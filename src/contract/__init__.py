"""Stable artifact contract surface for modgraph.

Treat these exports as the authoritative boundary between the analysis
engine and the report-formatting layers that read its artifacts.
"""

from contract.artifacts import (
    ARTIFACT_SCHEMA_VERSION,
    ARTIFACT_SPECS,
    COUPLING_JSON,
    DEPS_EDGELIST,
    DEPS_SUMMARY_JSON,
    ArtifactSpec,
)


def __getattr__(name: str) -> object:
    if name in {"CouplingReport", "DepsSummary"}:
        from contract.models import CouplingReport, DepsSummary

        return {
            "CouplingReport": CouplingReport,
            "DepsSummary": DepsSummary,
        }[name]

    if name in {"ValidationMessage", "ValidationResult", "validate_artifacts"}:
        from contract.validation import (
            ValidationMessage,
            ValidationResult,
            validate_artifacts,
        )

        return {
            "ValidationMessage": ValidationMessage,
            "ValidationResult": ValidationResult,
            "validate_artifacts": validate_artifacts,
        }[name]

    msg = f"module 'contract' has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "ARTIFACT_SCHEMA_VERSION",
    "ARTIFACT_SPECS",
    "COUPLING_JSON",
    "DEPS_EDGELIST",
    "DEPS_SUMMARY_JSON",
    "ArtifactSpec",
    "CouplingReport",
    "DepsSummary",
    "ValidationMessage",
    "ValidationResult",
    "validate_artifacts",
]
