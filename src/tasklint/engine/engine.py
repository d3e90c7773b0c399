"""Validation engine: reference closure plus the validator pipeline."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from tasklint.config.policy import Policy
from tasklint.engine.pipeline import Pipeline, ValidatorSpec
from tasklint.engine.pipeline import preset as preset_pipeline
from tasklint.engine.progress import REFERENCES_PHASE, TASKS_PHASE, NullValidationProgress, ValidationProgress
from tasklint.exceptions import TaskListValidationError
from tasklint.models.result import ValidationResult
from tasklint.models.task import Task, TaskList
from tasklint.parsing.markdown import parse, parse_file
from tasklint.parsing.references import validate_references
from tasklint.validators.base import ValidationContext

logger = logging.getLogger(__name__)

Validators = Pipeline | Sequence[ValidatorSpec] | str | None


def _pipeline(validators: Validators) -> Pipeline:
    if validators is None:
        return preset_pipeline("default")
    if isinstance(validators, Pipeline):
        return validators
    if isinstance(validators, str):
        return preset_pipeline(validators)
    return Pipeline(validators)


class ValidationEngine:
    """Validates parsed task lists against one policy and one validator set.

    Args:
        policy: Validation policy; defaults to ``Policy()``.
        validators: A :class:`Pipeline`, a preset name, or validator specs
            accepted by :func:`~tasklint.engine.pipeline.build_validators`.
            Defaults to the ``default`` preset.
        progress: Receives the ``References`` and ``Tasks`` phases and a
            ``task_checked`` event per main task.
    """

    def __init__(
        self,
        policy: Policy | None = None,
        *,
        validators: Validators = None,
        progress: ValidationProgress | None = None,
    ) -> None:
        self._policy = policy or Policy()
        self._pipeline = _pipeline(validators)
        self._progress: ValidationProgress = progress or NullValidationProgress()

    @property
    def policy(self) -> Policy:
        return self._policy

    def validate(self, task_list: TaskList) -> ValidationResult:
        """Check reference closure, then run the pipeline over every main task.

        The combined result counts main tasks and subtasks in ``task_count``.
        """
        references = self._check_references(task_list)
        tasks = self._check_tasks(task_list)
        result = ValidationResult.combine([references, tasks]).with_task_count(task_list.task_count())
        logger.debug(
            "validated %d tasks: %d errors, %d warnings",
            result.task_count,
            result.error_count,
            result.warning_count,
        )
        return result

    def _check_references(self, task_list: TaskList) -> ValidationResult:
        self._progress.phase_start(REFERENCES_PHASE)
        try:
            result = validate_references(task_list)
        except BaseException as exc:
            self._progress.phase_error(REFERENCES_PHASE, exc)
            raise
        self._progress.phase_done(REFERENCES_PHASE, result.issue_count)
        return result

    def _check_tasks(self, task_list: TaskList) -> ValidationResult:
        main_tasks = task_list.main_tasks()
        context = ValidationContext(policy=self._policy, task_list=task_list)
        self._progress.phase_start(TASKS_PHASE, total=len(main_tasks))
        try:
            result = self._pipeline.run_many(main_tasks, context, on_task_done=self._task_checked)
        except BaseException as exc:
            self._progress.phase_error(TASKS_PHASE, exc)
            raise
        self._progress.phase_done(TASKS_PHASE, result.issue_count)
        return result

    def _task_checked(self, task: Task, result: ValidationResult) -> None:
        logger.debug("%s: %d errors, %d warnings", task.id, result.error_count, result.warning_count)
        self._progress.task_checked(task.id, result.issue_count)


def validate(
    task_list: TaskList,
    policy: Policy | None = None,
    validators: Validators = None,
    progress: ValidationProgress | None = None,
) -> ValidationResult:
    """Validate an already parsed task list."""
    return ValidationEngine(policy, validators=validators, progress=progress).validate(task_list)


def validate_text(
    text: str,
    policy: Policy | None = None,
    preset: Validators = "default",
    progress: ValidationProgress | None = None,
) -> ValidationResult:
    """Parse and validate a document.

    Raises:
        ParseError: If the document contains no tasks.
    """
    policy = policy or Policy()
    return validate(parse(text, policy), policy, preset, progress)


def validate_file(
    path: str | Path,
    policy: Policy | None = None,
    preset: Validators = "default",
    progress: ValidationProgress | None = None,
) -> ValidationResult:
    """Read, parse and validate a task list file.

    Raises:
        DocumentLoadError: If the file cannot be read.
        ParseError: If it contains no tasks.
    """
    policy = policy or Policy()
    return validate(parse_file(path, policy), policy, preset, progress)


def ensure_valid(result: ValidationResult) -> ValidationResult:
    """Return ``result`` unchanged when valid.

    Raises:
        TaskListValidationError: Listing every formatted error otherwise.
    """
    if not result.valid:
        raise TaskListValidationError([error.format() for error in result.errors])
    return result
