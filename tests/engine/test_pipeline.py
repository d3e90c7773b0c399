from __future__ import annotations

from typing import Any

import pytest

from tasklint.engine.pipeline import (
    PRESETS,
    STRICT_OPTIONS,
    Pipeline,
    build_validators,
    default_validators,
    minimal_validators,
    preset,
    strict_validators,
)
from tasklint.exceptions import ConfigError
from tasklint.models import Task, ValidationError, ValidationResult
from tasklint.validators import (
    VALIDATOR_CLASSES,
    IdValidator,
    KpiValidator,
    StatusValidator,
    ValidationContext,
    Validator,
)


class _Recording(Validator):
    """Records each call and fails when ``fail`` is set."""

    def __init__(self, label: str, rank: int = 50, *, fail: bool = False, calls: list[str] | None = None) -> None:
        self.label = label
        self.rank = rank
        self.fail = fail
        self.calls = calls if calls is not None else []
        self.options: list[dict[str, Any]] = []

    def priority(self) -> int:
        return self.rank

    def validate(self, task: Task, context: ValidationContext) -> ValidationResult:
        self.calls.append(self.label)
        self.options.append(dict(context.validator_options))
        if self.fail:
            return ValidationResult.failure(ValidationError.missing_subtasks(f"{task.id}-{self.label}"))
        return ValidationResult.success()


def _task() -> Task:
    return Task(id="SSH0001")


def test_steps_sorted_by_descending_priority() -> None:
    pipeline = Pipeline(["kpi", "status", "id"])

    assert [type(step.validator) for step in pipeline.steps] == [IdValidator, StatusValidator, KpiValidator]


def test_ties_keep_input_order() -> None:
    calls: list[str] = []
    pipeline = Pipeline([_Recording("a", calls=calls), _Recording("b", calls=calls), _Recording("c", 70, calls=calls)])

    pipeline.run(_task(), ValidationContext())

    assert calls == ["c", "a", "b"]


def test_first_invalid_result_stops_the_run() -> None:
    calls: list[str] = []
    pipeline = Pipeline(
        [
            _Recording("first", 90, calls=calls),
            _Recording("second", 80, fail=True, calls=calls),
            _Recording("third", 70, fail=True, calls=calls),
        ]
    )

    result = pipeline.run(_task(), ValidationContext())

    assert calls == ["first", "second"]
    assert not result.valid
    assert [error.task_id for error in result.errors] == ["SSH0001-second"]


def test_options_are_scoped_to_their_validator() -> None:
    with_options = _Recording("with")
    without = _Recording("without")
    pipeline = Pipeline([(with_options, {"strict_format": True}), without])

    pipeline.run(_task(), ValidationContext())

    assert with_options.options == [{"strict_format": True}]
    assert without.options == [{}]


def test_run_many_combines_in_task_order_and_reports_each_task() -> None:
    done: list[tuple[str, int]] = []
    pipeline = Pipeline([_Recording("only", fail=True)])

    def on_task_done(task: Task, task_result: ValidationResult) -> None:
        done.append((task.id, task_result.error_count))

    result = pipeline.run_many([Task(id="A0001"), Task(id="B0001")], ValidationContext(), on_task_done=on_task_done)

    assert [error.task_id for error in result.errors] == ["A0001-only", "B0001-only"]
    assert done == [("A0001", 1), ("B0001", 1)]


def test_build_validators_accepts_names_instances_and_pairs() -> None:
    steps = build_validators(["id", StatusValidator(), ("kpi", {"max_call_depth": 2})])

    assert [type(step.validator) for step in steps] == [IdValidator, StatusValidator, KpiValidator]
    assert steps[2].options == {"max_call_depth": 2}


def test_validator_names_resolve_to_their_classes() -> None:
    steps = build_validators([cls.name for cls in VALIDATOR_CLASSES.values()])

    assert [type(step.validator) for step in steps] == list(VALIDATOR_CLASSES.values())


def test_unknown_validator_name() -> None:
    with pytest.raises(ConfigError, match="unknown validator 'spelling'"):
        Pipeline(["spelling"])


def test_default_validators_cover_all_eight() -> None:
    priorities = [step.validator.priority() for step in Pipeline(default_validators()).steps]

    assert priorities == [90, 60, 55, 50, 45, 40, 35, 30]


def test_minimal_validators() -> None:
    assert minimal_validators() == ["id", "status"]


def test_strict_validators_merge_overrides() -> None:
    specs = dict(strict_validators({"kpi": {"max_call_depth": 1}}))

    assert specs["kpi"] == {"max_functions_per_module": 5, "max_lines_per_function": 10, "max_call_depth": 1}
    assert specs["id"] == STRICT_OPTIONS["id"]
    assert set(specs) == set(STRICT_OPTIONS)


def test_presets() -> None:
    assert set(PRESETS) == {"default", "minimal", "strict"}
    assert len(preset("minimal").steps) == 2
    assert all(step.options for step in preset("strict").steps)


def test_unknown_preset() -> None:
    with pytest.raises(ConfigError, match="unknown preset 'loose'"):
        preset("loose")
