"""Rule validators — checks that depend on allocation rule definitions.

Rule definitions (co-run groups, slot restrictions, precedence overrides) are
authored outside the base records. Until they are supplied to the engine these
validators have nothing to inspect and always return no defects. They stay in
the chain so its order is fixed once rules arrive.
"""

from data_alchemist.validators.base import BaseValidator, Dataset
from data_alchemist.validators.models import Defect


class CircularCoRunValidator(BaseValidator):
    """Co-run groups that reference each other in a cycle. Needs rule definitions."""

    @property
    def name(self) -> str:
        return "CircularCoRunValidator"

    def validate(self, dataset: Dataset) -> list[Defect]:
        return []


class ConflictingRulesValidator(BaseValidator):
    """Rules that contradict each other or the phase windows. Needs rule definitions."""

    @property
    def name(self) -> str:
        return "ConflictingRulesValidator"

    def validate(self, dataset: Dataset) -> list[Defect]:
        return []
