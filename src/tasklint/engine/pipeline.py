"""Priority-ordered, short-circuiting validator pipeline and its presets."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from tasklint.exceptions import ConfigError
from tasklint.models.result import ValidationResult
from tasklint.models.task import Task
from tasklint.validators import VALIDATOR_CLASSES, ValidationContext, Validator

logger = logging.getLogger(__name__)

ValidatorSpec = Validator | str | tuple[Validator | str, Mapping[str, Any]]

STRICT_OPTIONS: dict[str, dict[str, Any]] = {
    "id": {"strict_format": True},
    "status": {"strict_transitions": True},
    "error_handling": {"require_comprehensive": True},
    "section": {"enforce_all_sections": True},
    "subtask": {"strict_formatting": True},
    "dependency": {"validate_existence": True},
    "category": {"enforce_categories": True},
    "kpi": {"max_functions_per_module": 5, "max_lines_per_function": 10, "max_call_depth": 3},
}


@dataclass(frozen=True)
class PipelineStep:
    """A validator paired with the options it runs with."""

    validator: Validator
    options: dict[str, Any] = field(default_factory=dict)


def _resolve(validator: Validator | str) -> Validator:
    if isinstance(validator, Validator):
        return validator
    try:
        return VALIDATOR_CLASSES[validator]()
    except KeyError:
        known = ", ".join(sorted(VALIDATOR_CLASSES))
        raise ConfigError(f"unknown validator '{validator}' (expected one of: {known})") from None


def build_validators(specs: Iterable[ValidatorSpec]) -> list[PipelineStep]:
    """Turn names, instances or ``(validator, options)`` pairs into steps.

    Raises:
        ConfigError: If a name does not match a known validator.
    """
    steps: list[PipelineStep] = []
    for spec in specs:
        if isinstance(spec, tuple):
            validator, options = spec
            steps.append(PipelineStep(_resolve(validator), dict(options)))
        else:
            steps.append(PipelineStep(_resolve(spec)))
    return steps


class Pipeline:
    """Runs validators over a task in descending priority order.

    Ties keep their input order. Once a step reports an invalid result the
    remaining steps are skipped for that task; everything gathered so far is
    kept.
    """

    def __init__(self, specs: Iterable[ValidatorSpec]) -> None:
        steps = build_validators(specs)
        self._steps = sorted(steps, key=lambda step: -step.validator.priority())

    @property
    def steps(self) -> list[PipelineStep]:
        return list(self._steps)

    def run(self, task: Task, context: ValidationContext) -> ValidationResult:
        results: list[ValidationResult] = []
        for position, step in enumerate(self._steps):
            result = step.validator.validate(task, context.with_options(step.options))
            results.append(result)
            if not result.valid:
                skipped = [type(later.validator).__name__ for later in self._steps[position + 1 :]]
                logger.debug(
                    "%s failed %s; skipping %s", task.id, type(step.validator).__name__, ", ".join(skipped) or "nothing"
                )
                break
        return ValidationResult.combine(results)

    def run_many(
        self,
        tasks: Sequence[Task],
        context: ValidationContext,
        on_task_done: Callable[[Task, ValidationResult], None] | None = None,
    ) -> ValidationResult:
        results: list[ValidationResult] = []
        for task in tasks:
            result = self.run(task, context)
            results.append(result)
            if on_task_done is not None:
                on_task_done(task, result)
        return ValidationResult.combine(results)


def default_validators() -> list[ValidatorSpec]:
    """All eight validators with default options."""
    return [cls() for cls in VALIDATOR_CLASSES.values()]


def minimal_validators() -> list[ValidatorSpec]:
    """Id and Status only, for fast partial checks."""
    return ["id", "status"]


def strict_validators(overrides: Mapping[str, Mapping[str, Any]] | None = None) -> list[ValidatorSpec]:
    """All eight validators with tightened options.

    Args:
        overrides: Per-validator options merged over the strict defaults.
    """
    overrides = overrides or {}
    return [(name, {**options, **overrides.get(name, {})}) for name, options in STRICT_OPTIONS.items()]


PRESETS: dict[str, Callable[[], list[ValidatorSpec]]] = {
    "default": default_validators,
    "minimal": minimal_validators,
    "strict": strict_validators,
}


def preset(name: str) -> Pipeline:
    """Build the pipeline for a named preset.

    Raises:
        ConfigError: If ``name`` is not a known preset.
    """
    try:
        factory = PRESETS[name]
    except KeyError:
        raise ConfigError(f"unknown preset '{name}' (expected one of: {', '.join(PRESETS)})") from None
    return Pipeline(factory())
