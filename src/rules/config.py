from __future__ import annotations

from typing import TYPE_CHECKING

import tomllib
from pydantic import BaseModel, ConfigDict, Field, model_validator

if TYPE_CHECKING:
    from pathlib import Path

CONFIG_FILENAME = "modgraph.toml"

_TEST_MARKERS = (".spec", ".test")
_TEST_EXTENSIONS = (".ts", ".tsx", ".mts", ".cts", ".js", ".jsx", ".mjs", ".cjs")

DEFAULT_TEST_FILE_SUFFIXES = tuple(
    f"{marker}{ext}" for marker in _TEST_MARKERS for ext in _TEST_EXTENSIONS
)


class _StrictModel(BaseModel):
    model_config = ConfigDict(extra="forbid")


class LayerDef(_StrictModel):
    """Definition of a single architectural layer."""

    name: str = Field(min_length=1, description="Layer name (e.g., 'adapters')")
    glob: str = Field(
        min_length=1, description="Glob pattern for modules belonging to this layer"
    )


class DependenciesConfig(_StrictModel):
    """Configuration for the dependency graph detectors."""

    layers: list[LayerDef] = Field(
        default_factory=list,
        description="Layer definitions (first match wins)",
    )
    allowed_dependencies: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Layer name -> layer names it may depend on",
    )
    top_n: int = Field(
        default=10, ge=1, description="Length of the fan-in/fan-out top lists"
    )
    max_cycles_per_scc: int = Field(
        default=100,
        ge=1,
        description="Cycle enumeration cap per strongly connected component",
    )
    test_file_suffixes: list[str] = Field(
        default_factory=lambda: list(DEFAULT_TEST_FILE_SUFFIXES),
        description="Filename suffixes that mark a module as a test file",
    )

    @model_validator(mode="after")
    def validate_layer_names(self) -> DependenciesConfig:
        """Reject duplicate layers and rules that name undefined layers."""
        names = [layer.name for layer in self.layers]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            msg = f"Duplicate layer names: {', '.join(duplicates)}"
            raise ValueError(msg)

        known = set(names)
        for from_layer, to_layers in self.allowed_dependencies.items():
            unknown = sorted(
                {from_layer, *to_layers} - known,
            )
            if unknown:
                msg = (
                    f"allowed_dependencies[{from_layer!r}] references unknown "
                    f"layer(s): {', '.join(unknown)}"
                )
                raise ValueError(msg)

        return self

    @property
    def layers_enabled(self) -> bool:
        return bool(self.layers)


class CouplingConfig(_StrictModel):
    """Calibration constants for coupling hotspot signals."""

    god_module_min: int = Field(default=10, ge=0)
    god_module_ratio: float = Field(default=0.1, ge=0)
    unstable_instability: float = Field(default=0.8, ge=0, le=1)
    unstable_min_fan_out: int = Field(default=5, ge=0)
    distance_threshold: float = Field(default=0.7, ge=0, le=1)
    off_main_sequence_min_coupling: int = Field(default=1, ge=1)
    rigid_module_min: int = Field(default=10, ge=0)
    rigid_module_ratio: float = Field(default=0.15, ge=0)
    rigid_instability: float = Field(default=0.2, ge=0, le=1)


class ModGraphConfig(_StrictModel):
    """Configuration for modgraph analysis and artifact generation."""

    output_dir: str = Field(
        default=".modgraph",
        description="Output directory for generated artifacts",
    )
    include: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to include (empty = all sources)",
    )
    exclude: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to exclude",
    )
    nested_gitignore: bool = Field(
        default=False,
        description=(
            "Enable nested .gitignore composition (default: false for root-only)"
        ),
    )
    dependencies: DependenciesConfig = Field(
        default_factory=DependenciesConfig,
        description="Dependency graph, layer and dead-export settings",
    )
    coupling: CouplingConfig = Field(
        default_factory=CouplingConfig,
        description="Coupling hotspot thresholds",
    )


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def resolve_output_dir(root: Path, output_dir: str) -> Path:
    """Resolve a config-provided output_dir safely within the repo root.

    The config output_dir must be a non-empty relative path that remains
    within the repository root after resolution. Absolute paths and paths
    that escape the root are rejected.
    """
    from pathlib import Path as PathCls

    if not output_dir:
        msg = "output_dir must be a non-empty relative path"
        raise ConfigError(msg)

    if output_dir.startswith("~"):
        msg = "output_dir must be a relative path within the repo root"
        raise ConfigError(msg)

    output_path = PathCls(output_dir)
    if output_path.is_absolute():
        msg = "output_dir must be a relative path within the repo root"
        raise ConfigError(msg)

    try:
        resolved_root = root.resolve()
        resolved_output = (resolved_root / output_path).resolve()
    except OSError as exc:
        msg = f"Failed to resolve output_dir '{output_dir}': {exc}"
        raise ConfigError(msg) from exc

    try:
        resolved_output.relative_to(resolved_root)
    except ValueError as exc:
        msg = f"output_dir '{output_dir}' escapes the repository root"
        raise ConfigError(msg) from exc

    return resolved_output


def load_config(root: Path) -> ModGraphConfig:
    """Load configuration from modgraph.toml if it exists."""
    from pathlib import Path as PathCls

    config_path = PathCls(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return ModGraphConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return ModGraphConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e
