"""Validation models — defect kinds, severity levels, and report structure.

All validation is deterministic: same input → same output, no randomness, no I/O.
"""

from collections import defaultdict
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Severity(str, Enum):
    """Defect severity levels, most severe first."""

    ERROR = "error"      # Blocks export
    WARNING = "warning"  # Feasibility concern, advisory
    INFO = "info"        # Informational


class EntityKind(str, Enum):
    """Which collection a defect concerns."""

    CLIENTS = "clients"
    WORKERS = "workers"
    TASKS = "tasks"
    SYSTEM = "system"


class DefectKind(str, Enum):
    """Fixed taxonomy of defect kinds, one per check in the validator chain."""

    MISSING_REQUIRED_FIELD = "missing_required_field"
    DUPLICATE_ID = "duplicate_id"
    MALFORMED_LIST = "malformed_list"
    OUT_OF_RANGE = "out_of_range"
    BROKEN_JSON = "broken_json"
    UNKNOWN_REFERENCE = "unknown_reference"
    CIRCULAR_CORUN = "circular_corun"            # Reserved until rule definitions exist
    OVERLOADED_WORKER = "overloaded_worker"
    PHASE_SATURATION = "phase_saturation"
    SKILL_COVERAGE = "skill_coverage"
    MAX_CONCURRENCY = "max_concurrency"
    CONFLICTING_RULES = "conflicting_rules"      # Reserved until rule definitions exist
    CHECK_FAILED = "check_failed"


class Defect(BaseModel):
    """A single data-quality or feasibility finding. Immutable."""

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    id: str
    type: DefectKind
    entity: EntityKind
    entity_id: str
    field: str
    message: str
    severity: Severity


SEVERITY_ORDER = [Severity.ERROR, Severity.WARNING, Severity.INFO]


class ValidationReport(BaseModel):
    """Complete validation report — engine output plus summary for the presentation layer."""

    can_export: bool = Field(description="True if no error-severity defects exist")
    summary: dict = Field(
        description="Count of defects by severity",
        default_factory=lambda: {"error": 0, "warning": 0, "info": 0},
    )
    defects: list[Defect] = Field(default_factory=list)
    verdict: str = Field(default="", description="Human-readable verdict")
    sequence: Optional[int] = Field(default=None, description="Caller sequence number that produced this report")

    @classmethod
    def build(cls, defects: list[Defect], sequence: Optional[int] = None) -> "ValidationReport":
        """Build a report from engine output. Defect order is preserved."""
        summary = {s.value: 0 for s in SEVERITY_ORDER}
        for defect in defects:
            summary[Severity(defect.severity).value] += 1

        can_export = summary["error"] == 0

        if not defects:
            verdict = "PASS — No issues found. Data is ready for export."
        elif can_export:
            verdict = (
                f"PASS — Export allowed with {summary['warning']} warning(s) "
                f"and {summary['info']} note(s) to review."
            )
        else:
            verdict = f"FAIL — {summary['error']} error(s) must be resolved before export."

        return cls(
            can_export=can_export,
            summary=summary,
            defects=list(defects),
            verdict=verdict,
            sequence=sequence,
        )

    def for_entity(self, entity: str, entity_id: str) -> list[Defect]:
        """Defects attached to a single record, in engine order."""
        entity = EntityKind(entity).value
        return [d for d in self.defects if d.entity == entity and d.entity_id == entity_id]

    def by_entity(self) -> dict[str, list[Defect]]:
        """Group defects by entity kind, preserving engine order within each group."""
        grouped: dict[str, list[Defect]] = defaultdict(list)
        for defect in self.defects:
            grouped[defect.entity].append(defect)
        return dict(grouped)
