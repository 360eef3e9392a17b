"""Skill Validators — skill coverage matrix and max-concurrency feasibility."""

from data_alchemist.validators.base import BaseValidator, Dataset
from data_alchemist.validators.models import Defect, DefectKind, EntityKind, Severity


class SkillCoverageValidator(BaseValidator):
    """Every skill a task requires must be offered by at least one worker."""

    @property
    def name(self) -> str:
        return "SkillCoverageValidator"

    def validate(self, dataset: Dataset) -> list[Defect]:
        errors = []

        worker_skills: set[str] = set()
        for worker in dataset.workers:
            worker_skills.update(self._string_list(worker.get("Skills")))

        for task in dataset.tasks:
            for skill in self._string_list(task.get("RequiredSkills")):
                if skill not in worker_skills:
                    errors.append(self._defect(
                        kind=DefectKind.SKILL_COVERAGE,
                        severity=Severity.ERROR,
                        entity=EntityKind.TASKS,
                        entity_id=self._entity_key(task, "tasks"),
                        field="RequiredSkills",
                        message=f"Required skill '{skill}' is not available in any worker",
                        detail=skill,
                    ))

        return errors


class MaxConcurrencyValidator(BaseValidator):
    """MaxConcurrent may not exceed the number of workers qualified for the task."""

    @property
    def name(self) -> str:
        return "MaxConcurrencyValidator"

    def validate(self, dataset: Dataset) -> list[Defect]:
        errors = []

        skill_sets = [set(self._string_list(w.get("Skills"))) for w in dataset.workers]

        for task in dataset.tasks:
            max_concurrent = self._as_number(task.get("MaxConcurrent"))
            if max_concurrent is None:
                continue

            required = set(self._string_list(task.get("RequiredSkills")))
            qualified = sum(1 for skills in skill_sets if required <= skills)

            if max_concurrent > qualified:
                errors.append(self._defect(
                    kind=DefectKind.MAX_CONCURRENCY,
                    severity=Severity.WARNING,
                    entity=EntityKind.TASKS,
                    entity_id=self._entity_key(task, "tasks"),
                    field="MaxConcurrent",
                    message=(
                        f"MaxConcurrent ({self._format_value(max_concurrent)}) exceeds "
                        f"qualified workers ({qualified})"
                    ),
                ))

        return errors
