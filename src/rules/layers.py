"""Layer classification and violation detection."""

from __future__ import annotations

from fnmatch import fnmatch
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from rules.config import DependenciesConfig


def classify_layer(path: str, config: DependenciesConfig) -> str | None:
    """Classify a module path into an architectural layer.

    Uses first-match-wins semantics: the first layer definition whose
    glob pattern matches the path determines the layer.
    """
    for layer_def in config.layers:
        if fnmatch(path, layer_def.glob):
            return layer_def.name
    return None


def assign_layers(
    modules: Iterable[str], config: DependenciesConfig
) -> dict[str, str]:
    """Map every classifiable module to its layer; unmatched modules are absent."""
    assignments: dict[str, str] = {}
    for module in modules:
        layer = classify_layer(module, config)
        if layer is not None:
            assignments[module] = layer
    return assignments


def build_allowed_deps(config: DependenciesConfig) -> dict[str, set[str]]:
    """Build a mapping of layer -> set of allowed dependency layers."""
    allowed: dict[str, set[str]] = {layer.name: set() for layer in config.layers}
    for from_layer, to_layers in config.allowed_dependencies.items():
        allowed[from_layer] = set(to_layers)
    return allowed


def is_violation(
    from_layer: str | None,
    to_layer: str | None,
    allowed_deps: dict[str, set[str]],
) -> bool:
    """Check if a dependency from one layer to another is a violation."""
    if from_layer is None or to_layer is None:
        return False

    if from_layer == to_layer:
        return False

    return to_layer not in allowed_deps.get(from_layer, set())
