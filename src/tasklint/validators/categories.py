"""Category derivation from id numbers and category-specific sections."""

from __future__ import annotations

from tasklint.models.result import ValidationError, ValidationResult
from tasklint.models.task import Task
from tasklint.parsing import ids
from tasklint.validators.base import ValidationContext, Validator
from tasklint.validators.content import expanded_lines, missing_sections, own_lines


class CategoryValidator(Validator):
    """Checks that a task's id falls in a category range.

    The category comes from the numeric part of the id; a subtask whose id
    yields no number inherits its parent's category. For a categorized main
    task the category's required sections are checked when the policy
    enforces them.

    Options:
        enforce_categories: Check category sections even when the policy
            does not enforce them.
    """

    name = "category"

    def priority(self) -> int:
        return 35

    def validate(self, task: Task, context: ValidationContext) -> ValidationResult:
        policy = context.policy
        number = ids.extract_task_number(task.id)

        if number is None:
            if task.is_subtask and task.category:
                return ValidationResult.success()
            return ValidationResult.failure(ValidationError.invalid_id_for_categorization(task.id))

        category = policy.category_for_number(number)
        if category is None:
            return ValidationResult.failure(
                ValidationError.invalid_category_range(task.id, number, policy.category_ranges)
            )

        enforce = policy.enforce_category_sections or context.option("enforce_categories", False)
        if not (enforce and task.is_main):
            return ValidationResult.success()

        lines = expanded_lines(own_lines(task), context.references)
        missing = missing_sections(lines, policy.sections_for_category(category))
        if missing:
            return ValidationResult.failure(ValidationError.missing_category_sections(task.id, category, missing))
        return ValidationResult.success()
