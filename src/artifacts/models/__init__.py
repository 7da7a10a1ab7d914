"""Model namespace for modgraph records and artifact schemas."""

from artifacts.models.artifacts.coupling import (
    CouplingHotspot,
    CouplingMetrics,
    CouplingReport,
)
from artifacts.models.artifacts.dependencies import (
    DeadExportFinding,
    DependencyCycle,
    DepsSummary,
    EdgeCut,
    FanStat,
    LayerViolation,
)
from artifacts.models.artifacts.files import ExportRecord, FileRecord, ImportRecord

__all__ = [
    "CouplingHotspot",
    "CouplingMetrics",
    "CouplingReport",
    "DeadExportFinding",
    "DependencyCycle",
    "DepsSummary",
    "EdgeCut",
    "ExportRecord",
    "FanStat",
    "FileRecord",
    "ImportRecord",
    "LayerViolation",
]
