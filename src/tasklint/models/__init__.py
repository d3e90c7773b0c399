"""Domain models for tasklint."""

from tasklint.models.enums import Complexity, ErrorType, Severity, SubtaskFormat, TaskType
from tasklint.models.result import ValidationError, ValidationResult
from tasklint.models.task import Task, TaskList

__all__ = [
    "Complexity",
    "ErrorType",
    "Severity",
    "SubtaskFormat",
    "Task",
    "TaskList",
    "TaskType",
    "ValidationError",
    "ValidationResult",
]
