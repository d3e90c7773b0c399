"""Checks a main task's subtasks as a group."""

from __future__ import annotations

from tasklint.models.enums import SubtaskFormat
from tasklint.models.result import ValidationError, ValidationResult
from tasklint.models.task import Task
from tasklint.parsing import patterns
from tasklint.validators.base import ValidationContext, Validator
from tasklint.validators.content import expanded_lines, has_section
from tasklint.validators.error_handling import has_error_handling
from tasklint.validators.status import check_review_rating


class SubtaskValidator(Validator):
    """Validates every subtask owned by a main task.

    Numbered subtasks must document their status and error handling and, once
    Completed, carry a review rating. Checkbox subtasks have no body and are
    only checked for status and prefix. Invoked on a subtask this validator
    does nothing.

    Options:
        strict_formatting: Numbered subtasks also need a Description section.
    """

    name = "subtask"

    def priority(self) -> int:
        return 45

    def validate(self, task: Task, context: ValidationContext) -> ValidationResult:
        if not task.is_main:
            return ValidationResult.success()

        issues: list[ValidationError] = []
        for subtask in task.subtasks:
            issues.extend(self._check_subtask(subtask, task, context))
        return ValidationResult.from_issues(issues)

    def _check_subtask(self, subtask: Task, parent: Task, context: ValidationContext) -> list[ValidationError]:
        valid_statuses = context.policy.valid_statuses
        issues: list[ValidationError] = []

        if subtask.status not in valid_statuses:
            issues.append(
                ValidationError.invalid_subtask_status(
                    subtask.id, subtask.status, valid_statuses, subtask.line_number
                )
            )

        if subtask.subtask_format == SubtaskFormat.NUMBERED:
            missing = self._missing_sections(subtask, context)
            if missing:
                issues.append(ValidationError.missing_subtask_sections(subtask.id, missing, subtask.line_number))
            issues.extend(check_review_rating(subtask, context))

        if subtask.id != patterns.INVALID_FORMAT and subtask.prefix != parent.prefix:
            issues.append(
                ValidationError.inconsistent_subtask_prefix(
                    subtask.id, subtask.prefix, parent.id, parent.prefix, subtask.line_number
                )
            )
        return issues

    def _missing_sections(self, subtask: Task, context: ValidationContext) -> list[str]:
        lines = expanded_lines(subtask.content, context.references)
        missing: list[str] = []
        if context.option("strict_formatting", False) and not has_section(lines, "Description"):
            missing.append("Description")
        if not has_section(lines, "Status"):
            missing.append("Status")
        if not has_error_handling(subtask.content, context.references):
            missing.append("Error Handling")
        return missing
