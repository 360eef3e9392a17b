"""Validation Engine — orchestrates all validators and produces the defect list.

This is the main entry point for dataset validation. It runs every registered
validator, in a fixed order, against a snapshot of the three record collections.

Usage:
    engine = ValidationEngine()
    defects = engine.validate(clients, workers, tasks)
    report = engine.report(clients, workers, tasks)
    if not report.can_export:
        # Surface report.defects to the user
"""

import time
from collections import Counter
from typing import Any, Iterable, Optional

import structlog

from data_alchemist.validators.base import BaseValidator, Dataset
from data_alchemist.validators.models import Defect, DefectKind, EntityKind, Severity, ValidationReport
from data_alchemist.validators.reference_data import SYSTEM_ENTITY_ID

# Import all validators
from data_alchemist.validators.schema_validator import (
    RequiredFieldValidator,
    DuplicateIdValidator,
    MalformedListValidator,
    OutOfRangeValidator,
    BrokenJsonValidator,
)
from data_alchemist.validators.reference_validator import UnknownReferenceValidator
from data_alchemist.validators.rule_validator import CircularCoRunValidator, ConflictingRulesValidator
from data_alchemist.validators.capacity_validator import OverloadedWorkerValidator, PhaseSaturationValidator
from data_alchemist.validators.skill_validator import SkillCoverageValidator, MaxConcurrencyValidator

logger = structlog.get_logger()

Records = Optional[Iterable[Any]]


class ValidationEngine:
    """Orchestrates all validators and produces a unified defect list.

    Design principles:
        - Deterministic: same input → same output, including defect ids
        - Pure: inputs are snapshotted, never mutated; no state kept between calls
        - Exhaustive: every validator runs, none short-circuits another
        - Observable: logs every validation run with timing
    """

    def __init__(self, validators: Optional[list[BaseValidator]] = None):
        """Initialize with default validators or custom list.

        Args:
            validators: Optional list of validators. If None, uses all defaults.
        """
        self.validators = validators if validators is not None else self._default_validators()

    @staticmethod
    def _default_validators() -> list[BaseValidator]:
        """Create the default validator chain in execution order."""
        return [
            RequiredFieldValidator(),     # Id / name presence
            DuplicateIdValidator(),       # Repeat ids within a collection
            MalformedListValidator(),     # Worker AvailableSlots shape
            OutOfRangeValidator(),        # Priority, duration, max load
            BrokenJsonValidator(),        # Client AttributesJSON
            UnknownReferenceValidator(),  # Client → task references
            CircularCoRunValidator(),     # Needs rule definitions
            OverloadedWorkerValidator(),  # Max load vs available slots
            PhaseSaturationValidator(),   # Demand vs capacity per phase
            SkillCoverageValidator(),     # Required skills offered by someone
            MaxConcurrencyValidator(),    # Concurrency vs qualified workers
            ConflictingRulesValidator(),  # Needs rule definitions
        ]

    def validate(self, clients: Records = None, workers: Records = None, tasks: Records = None) -> list[Defect]:
        """Run all validators against the three collections.

        Args:
            clients: Client records (models or mappings keyed by header)
            workers: Worker records
            tasks: Task records

        Returns:
            Defects in check order, then input order within each check
        """
        start_time = time.perf_counter()
        dataset = Dataset(clients, workers, tasks)

        all_defects: list[Defect] = []
        validator_timings: dict[str, float] = {}

        for validator in self.validators:
            v_start = time.perf_counter()
            try:
                all_defects.extend(validator.validate(dataset))
            except Exception as e:
                logger.error(
                    "validator_failed",
                    validator=validator.name,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                # Don't let one broken validator hide the others' findings
                all_defects.append(Defect(
                    id=f"{DefectKind.CHECK_FAILED.value}:{EntityKind.SYSTEM.value}:{validator.name}",
                    type=DefectKind.CHECK_FAILED,
                    entity=EntityKind.SYSTEM,
                    entity_id=SYSTEM_ENTITY_ID,
                    field=validator.name,
                    message=f"Validator '{validator.name}' crashed: {str(e)}",
                    severity=Severity.ERROR,
                ))
            finally:
                v_duration = (time.perf_counter() - v_start) * 1000
                validator_timings[validator.name] = round(v_duration, 2)

        defects = self._disambiguate_ids(all_defects)

        total_duration = (time.perf_counter() - start_time) * 1000
        severity_counts = Counter(d.severity for d in defects)

        logger.info(
            "validation_complete",
            clients=len(dataset.clients),
            workers=len(dataset.workers),
            tasks=len(dataset.tasks),
            total_defects=len(defects),
            errors=severity_counts.get(Severity.ERROR.value, 0),
            warnings=severity_counts.get(Severity.WARNING.value, 0),
            duration_ms=round(total_duration, 2),
            validator_timings=validator_timings,
        )

        return defects

    def report(
        self,
        clients: Records = None,
        workers: Records = None,
        tasks: Records = None,
        sequence: Optional[int] = None,
    ) -> ValidationReport:
        """Validate and wrap the defects in a report with summary and export gate."""
        return ValidationReport.build(self.validate(clients, workers, tasks), sequence=sequence)

    @staticmethod
    def _disambiguate_ids(defects: list[Defect]) -> list[Defect]:
        """Suffix repeated defect ids with a running counter so ids are unique within a run."""
        seen: Counter = Counter()
        result = []
        for defect in defects:
            seen[defect.id] += 1
            if seen[defect.id] > 1:
                defect = defect.model_copy(update={"id": f"{defect.id}#{seen[defect.id]}"})
            result.append(defect)
        return result

    def add_validator(self, validator: BaseValidator) -> None:
        """Add a custom validator to the end of the chain."""
        self.validators.append(validator)

    def remove_validator(self, validator_name: str) -> None:
        """Remove a validator by name."""
        self.validators = [v for v in self.validators if v.name != validator_name]


def validate(clients: Records = None, workers: Records = None, tasks: Records = None) -> list[Defect]:
    """Validate the three collections with a fresh engine."""
    return ValidationEngine().validate(clients, workers, tasks)
