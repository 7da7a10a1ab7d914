"""Artifact generators for modgraph."""

from artifacts.generators.coupling import CouplingGenerator
from artifacts.generators.deps import DepsGenerator

__all__ = [
    "CouplingGenerator",
    "DepsGenerator",
]
