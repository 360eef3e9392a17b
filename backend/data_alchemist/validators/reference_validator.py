"""Reference Validator — client task requests must point at existing tasks."""

from data_alchemist.validators.base import BaseValidator, Dataset
from data_alchemist.validators.models import Defect, DefectKind, EntityKind, Severity


class UnknownReferenceValidator(BaseValidator):
    """Each requested TaskID that does not exist is its own defect."""

    @property
    def name(self) -> str:
        return "UnknownReferenceValidator"

    def validate(self, dataset: Dataset) -> list[Defect]:
        errors = []
        task_ids = {self._record_id(task, "tasks") for task in dataset.tasks}

        for client in dataset.clients:
            for task_id in self._string_list(client.get("RequestedTaskIDs")):
                if task_id not in task_ids:
                    errors.append(self._defect(
                        kind=DefectKind.UNKNOWN_REFERENCE,
                        severity=Severity.ERROR,
                        entity=EntityKind.CLIENTS,
                        entity_id=self._entity_key(client, "clients"),
                        field="RequestedTaskIDs",
                        message=f"Referenced TaskID '{task_id}' does not exist",
                        detail=task_id,
                    ))

        return errors
