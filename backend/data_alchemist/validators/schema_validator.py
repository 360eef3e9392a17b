"""Schema validators — required fields, identifier uniqueness, list shape, value ranges, embedded JSON."""

import json

from data_alchemist.validators.base import BaseValidator, Dataset
from data_alchemist.validators.models import Defect, DefectKind, EntityKind, Severity
from data_alchemist.validators.reference_data import ID_FIELDS, NAME_FIELDS, VALUE_RANGES

# Collections in the order every per-entity check visits them
ENTITY_ORDER = [EntityKind.CLIENTS, EntityKind.WORKERS, EntityKind.TASKS]


def _reject_constant(name: str):
    # NaN / Infinity are not JSON
    raise ValueError(f"Invalid JSON constant: {name}")


class RequiredFieldValidator(BaseValidator):
    """Every record must carry a non-empty identifier and display name."""

    @property
    def name(self) -> str:
        return "RequiredFieldValidator"

    def validate(self, dataset: Dataset) -> list[Defect]:
        errors = []

        for entity in ENTITY_ORDER:
            for record in dataset.collection(entity):
                entity_id = self._entity_key(record, entity.value)
                for field in (ID_FIELDS[entity.value], NAME_FIELDS[entity.value]):
                    if self._is_blank(record.get(field)):
                        errors.append(self._defect(
                            kind=DefectKind.MISSING_REQUIRED_FIELD,
                            severity=Severity.ERROR,
                            entity=entity,
                            entity_id=entity_id,
                            field=field,
                            message=f"{field} is required",
                        ))

        return errors


class DuplicateIdValidator(BaseValidator):
    """Flag every repeat occurrence of an identifier within its own collection."""

    @property
    def name(self) -> str:
        return "DuplicateIdValidator"

    def validate(self, dataset: Dataset) -> list[Defect]:
        errors = []

        for entity in ENTITY_ORDER:
            id_field = ID_FIELDS[entity.value]
            seen: set[str] = set()
            for record in dataset.collection(entity):
                record_id = self._record_id(record, entity.value)
                if record_id in seen:
                    errors.append(self._defect(
                        kind=DefectKind.DUPLICATE_ID,
                        severity=Severity.ERROR,
                        entity=entity,
                        entity_id=self._entity_key(record, entity.value),
                        field=id_field,
                        message=f"Duplicate {id_field}: {record_id}",
                    ))
                seen.add(record_id)

        return errors


class MalformedListValidator(BaseValidator):
    """Worker AvailableSlots must be a list of positive integers."""

    @property
    def name(self) -> str:
        return "MalformedListValidator"

    def validate(self, dataset: Dataset) -> list[Defect]:
        errors = []

        for worker in dataset.workers:
            entity_id = self._entity_key(worker, "workers")
            raw = worker.get("AvailableSlots")
            slots = self._as_sequence(raw)

            if slots is None:
                errors.append(self._defect(
                    kind=DefectKind.MALFORMED_LIST,
                    severity=Severity.ERROR,
                    entity=EntityKind.WORKERS,
                    entity_id=entity_id,
                    field="AvailableSlots",
                    message=f"AvailableSlots must be a list of positive integers, got {self._format_value(raw)}",
                ))
                continue

            for slot in slots:
                if self._as_phase(slot) is None:
                    errors.append(self._defect(
                        kind=DefectKind.MALFORMED_LIST,
                        severity=Severity.ERROR,
                        entity=EntityKind.WORKERS,
                        entity_id=entity_id,
                        field="AvailableSlots",
                        message=f"Invalid slot value: {self._format_value(slot)}. Must be a positive integer",
                        detail=slot,
                    ))

        return errors


class OutOfRangeValidator(BaseValidator):
    """PriorityLevel in [1, 5]; Duration and MaxLoadPerPhase at least 1."""

    @property
    def name(self) -> str:
        return "OutOfRangeValidator"

    def validate(self, dataset: Dataset) -> list[Defect]:
        errors = []

        for entity, field, minimum, maximum in VALUE_RANGES:
            for record in dataset.collection(entity):
                raw = record.get(field)
                if raw is None:
                    # Absent values are not range violations
                    continue

                if maximum is None:
                    expected = f"at least {minimum}"
                else:
                    expected = f"between {minimum} and {maximum}"

                value = self._as_number(raw)
                if value is not None and value >= minimum and (maximum is None or value <= maximum):
                    continue

                errors.append(self._defect(
                    kind=DefectKind.OUT_OF_RANGE,
                    severity=Severity.ERROR,
                    entity=EntityKind(entity),
                    entity_id=self._entity_key(record, entity),
                    field=field,
                    message=f"{field} must be {expected}, got {self._format_value(raw)}",
                ))

        return errors


class BrokenJsonValidator(BaseValidator):
    """Client AttributesJSON must parse as JSON."""

    @property
    def name(self) -> str:
        return "BrokenJsonValidator"

    def validate(self, dataset: Dataset) -> list[Defect]:
        errors = []

        for client in dataset.clients:
            raw = client.get("AttributesJSON")
            if isinstance(raw, (dict, list)):
                # Already-decoded JSON
                continue

            reason = None
            if not isinstance(raw, str):
                reason = f"expected a JSON string, got {self._format_value(raw)}"
            else:
                try:
                    json.loads(raw, parse_constant=_reject_constant)
                except ValueError as e:
                    reason = str(e)

            if reason is not None:
                errors.append(self._defect(
                    kind=DefectKind.BROKEN_JSON,
                    severity=Severity.ERROR,
                    entity=EntityKind.CLIENTS,
                    entity_id=self._entity_key(client, "clients"),
                    field="AttributesJSON",
                    message=f"Invalid JSON format in AttributesJSON: {reason}",
                ))

        return errors
