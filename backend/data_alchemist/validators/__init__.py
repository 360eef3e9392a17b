"""Dataset Validator — deterministic validation layer for client, worker and task records.

Usage:
    from data_alchemist.validators import validate

    defects = validate(clients, workers, tasks)
    report = ValidationReport.build(defects)
    if not report.can_export:
        # Show report.defects to the user
"""

from data_alchemist.validators.engine import ValidationEngine, validate
from data_alchemist.validators.models import (
    Defect,
    DefectKind,
    EntityKind,
    Severity,
    ValidationReport,
)

__all__ = [
    "ValidationEngine",
    "validate",
    "ValidationReport",
    "Defect",
    "DefectKind",
    "EntityKind",
    "Severity",
]
