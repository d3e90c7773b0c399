"""The eight task validators and their shared contract."""

from tasklint.validators.base import DEFAULT_PRIORITY, ValidationContext, Validator
from tasklint.validators.categories import CategoryValidator
from tasklint.validators.dependencies import DependencyValidator
from tasklint.validators.error_handling import ErrorHandlingValidator
from tasklint.validators.ids import IdValidator
from tasklint.validators.kpi import KpiValidator
from tasklint.validators.sections import SectionValidator
from tasklint.validators.status import StatusValidator
from tasklint.validators.subtasks import SubtaskValidator

VALIDATOR_CLASSES: dict[str, type[Validator]] = {
    cls.name: cls
    for cls in (
        IdValidator,
        StatusValidator,
        ErrorHandlingValidator,
        SectionValidator,
        SubtaskValidator,
        DependencyValidator,
        CategoryValidator,
        KpiValidator,
    )
}

__all__ = [
    "DEFAULT_PRIORITY",
    "VALIDATOR_CLASSES",
    "CategoryValidator",
    "DependencyValidator",
    "ErrorHandlingValidator",
    "IdValidator",
    "KpiValidator",
    "SectionValidator",
    "StatusValidator",
    "SubtaskValidator",
    "ValidationContext",
    "Validator",
]
