"""Artifact models exposed at the contract boundary."""

from artifacts.models.artifacts.coupling import CouplingReport
from artifacts.models.artifacts.dependencies import DepsSummary

__all__ = ["CouplingReport", "DepsSummary"]
