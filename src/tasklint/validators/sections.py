"""Required section checks: basic fields, completion sections, category sections."""

from __future__ import annotations

from tasklint.models.result import ValidationError, ValidationResult
from tasklint.models.task import Task
from tasklint.validators.base import ValidationContext, Validator
from tasklint.validators.content import expanded_lines, missing_sections, own_lines

MAIN_SECTIONS = ("Description", "Status", "Priority")
SUBTASK_SECTIONS = ("Description", "Status")
EXTENDED_MAIN_SECTIONS = ("Requirements", "Dependencies")
COMPLETION_SECTIONS = (
    "Implementation Notes",
    "Complexity Assessment",
    "Maintenance Impact",
    "Error Handling Implementation",
)


class SectionValidator(Validator):
    """Checks that required sections are present, inline or via a reference.

    Options:
        enforce_all_sections: Main tasks also need Requirements and
            Dependencies.
    """

    name = "section"

    def priority(self) -> int:
        return 50

    def validate(self, task: Task, context: ValidationContext) -> ValidationResult:
        lines = expanded_lines(own_lines(task), context.references)

        required = list(MAIN_SECTIONS if task.is_main else SUBTASK_SECTIONS)
        if task.is_main and context.option("enforce_all_sections", False):
            required.extend(EXTENDED_MAIN_SECTIONS)
        issues = [ValidationError.missing_section(task.id, name) for name in missing_sections(lines, required)]

        if task.is_completed:
            missing = missing_sections(lines, COMPLETION_SECTIONS)
            if missing:
                issues.append(ValidationError.missing_completion_sections(task.id, missing))

        if task.is_main and task.category and context.policy.enforce_category_sections:
            missing = missing_sections(lines, context.policy.sections_for_category(task.category))
            if missing:
                issues.append(ValidationError.missing_category_sections(task.id, task.category, missing))

        return ValidationResult.from_issues(issues)
