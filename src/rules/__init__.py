"""Rule definitions for modgraph."""

from rules.config import (
    ConfigError,
    CouplingConfig,
    DependenciesConfig,
    ModGraphConfig,
    load_config,
)
from rules.layers import assign_layers, build_allowed_deps, classify_layer, is_violation

__all__ = [
    "ConfigError",
    "CouplingConfig",
    "DependenciesConfig",
    "ModGraphConfig",
    "assign_layers",
    "build_allowed_deps",
    "classify_layer",
    "is_violation",
    "load_config",
]
