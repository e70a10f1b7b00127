"""
GenoFlow Engine - pedigree consistency and layout engine

Validates affectation statuses against an inheritance mode and routes the
connector lines of a pedigree diagram
"""

from .models import (
    Gender,
    Status,
    Severity,
    InheritanceMode,
    Individual,
    ParentRoles,
    Pedigree
)

from .ancestry import (
    ancestors_of,
    ancestor_individuals
)

from .genetics import InheritanceRule

from .validator import (
    ValidationIssue,
    ValidationReport,
    LogicValidator,
    validate,
    validate_pedigree
)

from .layout import (
    LayoutConfig,
    ConnectorKind,
    Connector,
    CoupleGroup,
    group_couples,
    compute_links
)

from .statistics import (
    AnalysisReport,
    PedigreeAnalyzer,
    analyze_pedigree
)

from .editor import (
    EditError,
    PlacementConfig,
    PedigreeEditor
)

from .snapshot import (
    SnapshotError,
    load_snapshot,
    save_snapshot,
    parse_snapshot,
    sample_pedigree
)

from .config import (
    EngineConfig,
    load_config
)

from .visualizer import (
    GridConfig,
    PedigreeVisualizer
)


__version__ = "1.0.0"
__all__ = [
    # Models
    "Gender",
    "Status",
    "Severity",
    "InheritanceMode",
    "Individual",
    "ParentRoles",
    "Pedigree",

    # Ancestry
    "ancestors_of",
    "ancestor_individuals",

    # Validation
    "InheritanceRule",
    "ValidationIssue",
    "ValidationReport",
    "LogicValidator",
    "validate",
    "validate_pedigree",

    # Layout
    "LayoutConfig",
    "ConnectorKind",
    "Connector",
    "CoupleGroup",
    "group_couples",
    "compute_links",

    # Statistics
    "AnalysisReport",
    "PedigreeAnalyzer",
    "analyze_pedigree",

    # Editing / snapshots
    "EditError",
    "PlacementConfig",
    "PedigreeEditor",
    "SnapshotError",
    "load_snapshot",
    "save_snapshot",
    "parse_snapshot",
    "sample_pedigree",

    # Config
    "EngineConfig",
    "load_config",

    # Visualizer
    "GridConfig",
    "PedigreeVisualizer",
]
