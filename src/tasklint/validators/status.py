"""Status, priority, progress and review-rating checks."""

from __future__ import annotations

from tasklint.models.result import ValidationError, ValidationResult
from tasklint.models.task import IN_PROGRESS, Task
from tasklint.validators.base import ValidationContext, Validator


def check_review_rating(task: Task, context: ValidationContext) -> list[ValidationError]:
    """Completed tasks must carry a rating that matches ``rating_regex``."""
    if not task.is_completed:
        return []
    if task.review_rating is None:
        return [ValidationError.missing_review_rating(task.id, task.line_number)]
    if not context.policy.rating_regex.match(task.review_rating.strip()):
        return [ValidationError.invalid_review_rating(task.id, task.review_rating, task.line_number)]
    return []


class StatusValidator(Validator):
    """Checks vocabularies, In Progress subtasks and review ratings.

    Options:
        strict_transitions: A Completed main task must not own unfinished
            subtasks.
    """

    name = "status"

    def priority(self) -> int:
        return 60

    def validate(self, task: Task, context: ValidationContext) -> ValidationResult:
        policy = context.policy
        issues: list[ValidationError] = []

        if task.status not in policy.valid_statuses:
            issues.append(ValidationError.invalid_status(task.id, task.status, policy.valid_statuses))
        if task.priority is not None and task.priority not in policy.valid_priorities:
            issues.append(ValidationError.invalid_priority(task.id, task.priority, policy.valid_priorities))
        if task.is_main and task.status == IN_PROGRESS and not task.subtasks:
            issues.append(ValidationError.missing_subtasks(task.id))
        issues.extend(check_review_rating(task, context))

        if context.option("strict_transitions", False) and task.is_main and task.is_completed:
            unfinished = [subtask.id for subtask in task.subtasks if not subtask.is_completed]
            if unfinished:
                issues.append(ValidationError.inconsistent_subtask_status(task.id, unfinished))

        return ValidationResult.from_issues(issues)
