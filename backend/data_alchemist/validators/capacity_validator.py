"""Capacity Validators — per-worker load against availability, per-phase demand against capacity."""

from collections import defaultdict

from data_alchemist.validators.base import BaseValidator, Dataset
from data_alchemist.validators.models import Defect, DefectKind, EntityKind, Severity
from data_alchemist.validators.reference_data import SYSTEM_ENTITY_ID


class OverloadedWorkerValidator(BaseValidator):
    """A worker may not be allowed more load per phase than it has phases available."""

    @property
    def name(self) -> str:
        return "OverloadedWorkerValidator"

    def validate(self, dataset: Dataset) -> list[Defect]:
        errors = []

        for worker in dataset.workers:
            max_load = self._as_number(worker.get("MaxLoadPerPhase"))
            if max_load is None:
                continue

            slot_count = len(self._as_sequence(worker.get("AvailableSlots")) or [])
            if slot_count < max_load:
                errors.append(self._defect(
                    kind=DefectKind.OVERLOADED_WORKER,
                    severity=Severity.WARNING,
                    entity=EntityKind.WORKERS,
                    entity_id=self._entity_key(worker, "workers"),
                    field="MaxLoadPerPhase",
                    message=(
                        f"MaxLoadPerPhase ({self._format_value(max_load)}) exceeds "
                        f"available slots ({slot_count})"
                    ),
                ))

        return errors


class PhaseSaturationValidator(BaseValidator):
    """Total task duration preferring a phase must fit the worker capacity in that phase."""

    @property
    def name(self) -> str:
        return "PhaseSaturationValidator"

    def validate(self, dataset: Dataset) -> list[Defect]:
        errors = []

        capacity = self._phase_capacity(dataset)
        demand = self._phase_demand(dataset)

        for phase in sorted(demand):
            phase_demand = demand[phase]
            phase_capacity = capacity.get(phase, 0)
            if phase_demand <= 0 or phase_demand <= phase_capacity:
                continue

            errors.append(self._defect(
                kind=DefectKind.PHASE_SATURATION,
                severity=Severity.WARNING,
                entity=EntityKind.SYSTEM,
                entity_id=SYSTEM_ENTITY_ID,
                field="phase_capacity",
                message=(
                    f"Phase {phase} is oversaturated: demand ({self._format_value(phase_demand)}) "
                    f"exceeds capacity ({self._format_value(phase_capacity)})"
                ),
                detail=phase,
            ))

        return errors

    def _phase_capacity(self, dataset: Dataset) -> dict[int, float]:
        """Sum of MaxLoadPerPhase over every worker available in each phase."""
        capacity: dict[int, float] = defaultdict(int)
        for worker in dataset.workers:
            max_load = self._as_number(worker.get("MaxLoadPerPhase")) or 0
            for phase in self._phases(worker.get("AvailableSlots")):
                capacity[phase] += max_load
        return capacity

    def _phase_demand(self, dataset: Dataset) -> dict[int, float]:
        """Sum of Duration over every task preferring each phase."""
        demand: dict[int, float] = defaultdict(int)
        for task in dataset.tasks:
            duration = self._as_number(task.get("Duration")) or 0
            for phase in self._phases(task.get("PreferredPhases")):
                demand[phase] += duration
        return demand
