"""Base validator — abstract class implementing the Strategy Pattern.

Each validator is a standalone, independently testable unit.
New validators are added without modifying the engine.
"""

import copy
import math
from abc import ABC, abstractmethod
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Iterable, Optional

from pydantic import BaseModel

from data_alchemist.validators.models import Defect, DefectKind, EntityKind, Severity
from data_alchemist.validators.reference_data import ID_FIELDS, UNKNOWN_ENTITY_ID


def _snapshot(records: Optional[Iterable[Any]]) -> tuple[Mapping, ...]:
    """Copy records into read-only mappings keyed by spreadsheet header."""
    if records is None:
        return ()

    rows = []
    for record in records:
        if isinstance(record, BaseModel):
            row = record.model_dump(by_alias=True)
        elif isinstance(record, Mapping):
            row = copy.deepcopy(dict(record))
        else:
            # Not a record at all; every field reads as absent
            row = {}
        rows.append(MappingProxyType(row))
    return tuple(rows)


class Dataset:
    """Read-only snapshot of the three record collections for one validation pass."""

    def __init__(self, clients=None, workers=None, tasks=None):
        self.clients = _snapshot(clients)
        self.workers = _snapshot(workers)
        self.tasks = _snapshot(tasks)

    def collection(self, entity: str) -> tuple[Mapping, ...]:
        return getattr(self, EntityKind(entity).value)


class BaseValidator(ABC):
    """Abstract base for all dataset validators.

    Contract:
        - validate() is deterministic: same input → same output
        - validate() returns a list of Defect (empty = no issues)
        - validate() never raises on malformed records; malformed data is a Defect
        - No network calls, no randomness, no mutation of the dataset
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for logging."""
        ...

    @abstractmethod
    def validate(self, dataset: Dataset) -> list[Defect]:
        """Run validation checks against the dataset.

        Args:
            dataset: Snapshot of clients, workers and tasks

        Returns:
            List of Defect findings (empty if no issues)
        """
        ...

    # ── Helper Methods ──

    def _defect(
        self,
        kind: DefectKind,
        severity: Severity,
        entity: EntityKind,
        entity_id: str,
        field: str,
        message: str,
        detail: Any = None,
    ) -> Defect:
        """Convenience method to create a Defect with a deterministic id."""
        entity = EntityKind(entity)
        defect_id = f"{DefectKind(kind).value}:{entity.value}:{entity_id}:{field}"
        if detail is not None:
            defect_id += f":{detail}"
        return Defect(
            id=defect_id,
            type=kind,
            entity=entity,
            entity_id=entity_id,
            field=field,
            message=message,
            severity=severity,
        )

    def _record_id(self, record: Mapping, entity: str) -> str:
        """Raw identifier of a record as a string ('' when absent)."""
        value = record.get(ID_FIELDS[entity])
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)

    def _entity_key(self, record: Mapping, entity: str) -> str:
        """Identifier to attach a defect to, or a placeholder when the record has none."""
        record_id = self._record_id(record, entity)
        return record_id if record_id.strip() else UNKNOWN_ENTITY_ID

    def _is_blank(self, value: Any) -> bool:
        """True if a required field counts as empty."""
        if value is None:
            return True
        if isinstance(value, str):
            return not value.strip()
        return False

    def _as_sequence(self, value: Any) -> Optional[list]:
        """Return value as a list if it is a proper sequence, else None. Strings are not sequences."""
        if isinstance(value, (list, tuple)):
            return list(value)
        return None

    def _string_list(self, value: Any) -> list[str]:
        """Lenient view of a list-of-strings field; non-sequences read as empty."""
        items = self._as_sequence(value) or []
        return [item if isinstance(item, str) else str(item) for item in items if item is not None]

    def _as_number(self, value: Any) -> Optional[float]:
        """Parse a scalar as a number. Returns None for absent or non-numeric values."""
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, (int, float)):
            return None if isinstance(value, float) and math.isnan(value) else value
        if isinstance(value, str):
            try:
                number = float(value.strip())
            except ValueError:
                return None
            if math.isnan(number):
                return None
            return int(number) if number.is_integer() else number
        return None

    def _as_phase(self, value: Any) -> Optional[int]:
        """Return value as a phase number if it is a positive integer, else None."""
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value if value >= 1 else None
        if isinstance(value, float) and value.is_integer() and value >= 1:
            return int(value)
        return None

    def _phases(self, value: Any) -> list[int]:
        """Valid phase numbers in a list field, in order. Invalid elements are skipped.

        Integer-valued text ('2') counts as that phase.
        """
        phases = []
        for item in self._as_sequence(value) or []:
            if isinstance(item, str):
                item = self._as_number(item)
            phase = self._as_phase(item)
            if phase is not None:
                phases.append(phase)
        return phases

    def _format_value(self, value: Any) -> str:
        """Render a value for a defect message."""
        if isinstance(value, str):
            return repr(value)
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value)
