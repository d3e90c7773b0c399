"""Task id checks: grammar, parent linkage, uniqueness and prefix consistency."""

from __future__ import annotations

from tasklint.models.result import ValidationError, ValidationResult
from tasklint.models.task import Task
from tasklint.parsing import ids, patterns
from tasklint.validators.base import ValidationContext, Validator

SUBTASK_ID_FORMAT = "PREFIX####-N or PREFIX####a"


class IdValidator(Validator):
    """Validates a task's id and, for a main task, the ids of its subtasks.

    Hard errors: ``invalid_id_format``, ``invalid_subtask_id``,
    ``duplicate_task_id``. Warnings: ``mixed_prefixes`` and, when the policy
    enables semantic prefixes, ``semantic_prefix_mismatch`` and
    ``unrecognized_semantic_prefix``.

    Options:
        strict_format: Reject the dashed ``PROJ-0001`` main id form unless
            ``id_regex`` itself accepts it.
    """

    name = "id"

    def priority(self) -> int:
        return 90

    def validate(self, task: Task, context: ValidationContext) -> ValidationResult:
        everything = context.all_tasks()
        main_ids = {candidate.id for candidate in everything if candidate.is_main}
        prefixes = _distinct_prefixes(everything)

        issues: list[ValidationError] = []
        subjects = [task, *task.subtasks] if task.is_main else [task]
        for subject in subjects:
            issues.extend(self._check_format(subject, main_ids, context))
            issues.extend(_check_duplicate(subject, everything))
            issues.extend(_check_mixed_prefix(subject, everything, prefixes))
        if task.is_main and context.policy.enable_semantic_prefixes:
            issues.extend(_check_semantic_prefix(task, context))
        return ValidationResult.from_issues(issues)

    def _check_format(self, task: Task, main_ids: set[str], context: ValidationContext) -> list[ValidationError]:
        if task.is_subtask:
            parent_id = ids.extract_any_parent_id(task.id)
            if task.id == patterns.INVALID_FORMAT or parent_id is None:
                return [ValidationError.invalid_id_format(task.id, SUBTASK_ID_FORMAT, subtask=True)]
            if parent_id not in main_ids:
                return [ValidationError.invalid_subtask_id(task.id, parent_id)]
            return []

        regex = context.policy.id_regex
        if regex.match(task.id):
            return []
        if not context.option("strict_format", False) and patterns.DASHED_MAIN_ID_SHAPE.match(task.id):
            return []
        return [ValidationError.invalid_id_format(task.id, regex.pattern)]


def _distinct_prefixes(tasks: list[Task]) -> list[str]:
    seen: dict[str, None] = {}
    for task in tasks:
        if task.prefix:
            seen.setdefault(task.prefix, None)
    return list(seen)


def _check_duplicate(task: Task, everything: list[Task]) -> list[ValidationError]:
    if task.id == patterns.INVALID_FORMAT:
        return []
    same = [candidate for candidate in everything if candidate.id == task.id]
    if not any(candidate is task for candidate in same):
        # a task checked on its own against a list that already holds its id
        return [ValidationError.duplicate_task_id(task.id, len(same) + 1, task.line_number)] if same else []
    if same[0] is task:
        return []
    return [ValidationError.duplicate_task_id(task.id, len(same), task.line_number)]


def _check_mixed_prefix(task: Task, everything: list[Task], prefixes: list[str]) -> list[ValidationError]:
    # only the task that introduces a new prefix is flagged
    if len(prefixes) < 2 or not task.prefix or task.prefix == prefixes[0]:
        return []
    introducer = next((candidate for candidate in everything if candidate.prefix == task.prefix), task)
    if introducer is not task:
        return []
    return [ValidationError.mixed_prefixes(task.id, prefixes)]


def _check_semantic_prefix(task: Task, context: ValidationContext) -> list[ValidationError]:
    if not task.prefix:
        return []
    expected = context.policy.semantic_prefixes.get(task.prefix)
    if expected is None:
        return [ValidationError.unrecognized_semantic_prefix(task.id, task.prefix)]
    if task.category != expected:
        return [ValidationError.semantic_prefix_mismatch(task.id, task.prefix, expected, task.category)]
    return []
