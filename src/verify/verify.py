"""Determinism verification for modgraph artifacts.

The analysis is a pure function of the scanned sources, so regenerating the
artifacts for an unchanged tree must reproduce them byte for byte.
"""

from __future__ import annotations

import filecmp
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

import orjson

from artifacts.write import generate_all_artifacts
from contract.artifacts import ARTIFACT_SPECS
from logconfig import get_logger

if TYPE_CHECKING:
    from rules.config import ModGraphConfig


logger = get_logger("verify")

_JSON_ARTIFACTS = frozenset(
    spec.filename for spec in ARTIFACT_SPECS.values() if spec.format == "json"
)


@dataclass(frozen=True)
class DeterminismResult:
    ok: bool
    mismatches: tuple[str, ...] = field(default_factory=tuple)
    missing: tuple[str, ...] = field(default_factory=tuple)
    extra: tuple[str, ...] = field(default_factory=tuple)
    # "<artifact>:<top-level field>" for JSON artifacts whose content drifted.
    changed_fields: tuple[str, ...] = field(default_factory=tuple)


def _list_relative_files(root: Path) -> set[Path]:
    return {path.relative_to(root) for path in root.rglob("*") if path.is_file()}


def _changed_json_fields(original: Path, regenerated: Path) -> list[str]:
    """Name the top-level fields that differ between two JSON artifacts."""
    try:
        before = orjson.loads(original.read_bytes())
        after = orjson.loads(regenerated.read_bytes())
    except orjson.JSONDecodeError:
        return []
    if not isinstance(before, dict) or not isinstance(after, dict):
        return []

    return sorted(
        key
        for key in set(before) | set(after)
        if before.get(key) != after.get(key)
    )


def verify_determinism(
    *,
    root: Path,
    artifacts_dir: Path,
    config: ModGraphConfig | None = None,
) -> DeterminismResult:
    """Verify that modgraph artifacts are deterministic.

    Regenerates the artifacts into a temporary directory and compares them
    byte-for-byte against ``artifacts_dir``. File sets are compared on
    relative paths. For mismatching JSON artifacts the differing top-level
    fields are reported as well, so a drifting ``cycles`` list is
    distinguishable from a drifting ``hotspots`` list.

    Raises:
        FileNotFoundError: If artifacts_dir does not exist.
        NotADirectoryError: If artifacts_dir is not a directory.
    """
    if not artifacts_dir.exists():
        msg = f"Artifacts directory does not exist: {artifacts_dir}"
        raise FileNotFoundError(msg)
    if not artifacts_dir.is_dir():
        msg = f"Artifacts path is not a directory: {artifacts_dir}"
        raise NotADirectoryError(msg)

    with tempfile.TemporaryDirectory() as temp_dir:
        temp_path = Path(temp_dir)
        if config is None:
            generate_all_artifacts(root=root, out_dir=temp_path)
        else:
            generate_all_artifacts(root=root, out_dir=temp_path, config=config)

        original_files = _list_relative_files(artifacts_dir)
        regenerated_files = _list_relative_files(temp_path)

        missing = sorted(str(path) for path in original_files - regenerated_files)
        extra = sorted(str(path) for path in regenerated_files - original_files)

        mismatches: list[str] = []
        changed_fields: list[str] = []
        for path in sorted(original_files & regenerated_files):
            original_path = artifacts_dir / path
            regenerated_path = temp_path / path
            if filecmp.cmp(original_path, regenerated_path, shallow=False):
                continue
            mismatches.append(str(path))
            if path.name in _JSON_ARTIFACTS:
                changed_fields.extend(
                    f"{path}:{key}"
                    for key in _changed_json_fields(original_path, regenerated_path)
                )

    ok = not missing and not extra and not mismatches
    if not ok:
        logger.info(
            "Determinism check failed: %d mismatched, %d missing, %d extra",
            len(mismatches),
            len(missing),
            len(extra),
        )

    return DeterminismResult(
        ok=ok,
        mismatches=tuple(mismatches),
        missing=tuple(missing),
        extra=tuple(extra),
        changed_fields=tuple(changed_fields),
    )
