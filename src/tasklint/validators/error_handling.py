"""Error handling documentation checks.

A main task documents error handling either inline::

    **Error Handling**
    **Core Principles**
    ...
    **Error Implementation**
    ...
    **Error Examples**
    ...
    **Worker Specifics**
    ...

or through an ``{{error-handling}}``-shaped reference. A reference whose name
is not defined counts as missing, a defined one (or an inline block) that
lacks subsections counts as incomplete.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence

from tasklint.models.enums import SubtaskFormat
from tasklint.models.result import ValidationError, ValidationResult
from tasklint.models.task import Task
from tasklint.validators.base import ValidationContext, Validator
from tasklint.validators.content import expanded_lines, has_section, own_lines

ERROR_HANDLING_REFERENCE = re.compile(
    r"\{\{(error-handling[^}]*|def-error-handling[^}]*|subtask-error-handling[^}]*)\}\}"
)
FRAMEWORK_SPECIFICS = re.compile(r"^\s*\*\*[^*]+ Specifics:?\*\*")

SUBTASK_SUBSECTIONS = ("Task-Specific Approach", "Error Reporting")


def error_handling_references(lines: Sequence[str]) -> list[str]:
    """Distinct error-handling reference names used in ``lines``."""
    seen: dict[str, None] = {}
    for line in lines:
        for match in ERROR_HANDLING_REFERENCE.finditer(line):
            seen.setdefault(match.group(1), None)
    return list(seen)


def missing_main_subsections(lines: Sequence[str]) -> list[str]:
    missing: list[str] = []
    if not (has_section(lines, "Core Principles") or has_section(lines, "Task Principles")):
        missing.append("Core Principles")
    for name in ("Error Implementation", "Error Examples"):
        if not has_section(lines, name):
            missing.append(name)
    if not any(FRAMEWORK_SPECIFICS.match(line) for line in lines):
        missing.append("Framework Specifics")
    return missing


def missing_subtask_subsections(lines: Sequence[str]) -> list[str]:
    return [name for name in SUBTASK_SUBSECTIONS if not has_section(lines, name)]


def has_error_handling(lines: Sequence[str], references: Mapping[str, Sequence[str]]) -> bool:
    """True when an inline block or a resolvable reference is present."""
    if has_section(lines, "Error Handling"):
        return True
    return any(name in references for name in error_handling_references(lines))


def check_error_handling(
    task: Task,
    references: Mapping[str, Sequence[str]],
    *,
    accept_references: bool = True,
) -> list[ValidationError]:
    """Classify a task's error handling documentation as complete, incomplete or missing."""
    lines = own_lines(task)
    subtask = task.is_subtask
    find_missing = missing_subtask_subsections if subtask else missing_main_subsections

    if has_section(lines, "Error Handling"):
        missing = find_missing(expanded_lines(lines, references) if accept_references else lines)
        return [ValidationError.incomplete_error_handling(task.id, missing)] if missing else []

    names = error_handling_references(lines) if accept_references else []
    if not names:
        return [ValidationError.missing_error_handling(task.id, subtask=subtask)]

    defined = [name for name in names if name in references]
    if not defined:
        return [ValidationError.missing_error_handling(task.id, missing_references=names, subtask=subtask)]

    referenced = [line for name in defined for line in references[name]]
    missing = find_missing(referenced)
    return [ValidationError.incomplete_error_handling(task.id, missing)] if missing else []


class ErrorHandlingValidator(Validator):
    """Requires error handling documentation on every task.

    Checkbox subtasks carry no content body and are exempt. Completed tasks
    additionally need an ``**Error Handling Implementation**`` section.

    Options:
        require_comprehensive: Only an inline block is accepted; reference
            shorthand counts as missing.
    """

    name = "error_handling"

    def priority(self) -> int:
        return 55

    def validate(self, task: Task, context: ValidationContext) -> ValidationResult:
        if task.subtask_format == SubtaskFormat.CHECKBOX:
            return ValidationResult.success()

        references = context.references
        issues = check_error_handling(
            task, references, accept_references=not context.option("require_comprehensive", False)
        )
        if task.is_completed and not has_section(
            expanded_lines(own_lines(task), references), "Error Handling Implementation"
        ):
            issues.append(ValidationError.missing_error_implementation(task.id))
        return ValidationResult.from_issues(issues)
