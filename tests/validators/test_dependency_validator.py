from __future__ import annotations

import pytest

from tasklint.models import ErrorType, Task, TaskList, TaskType
from tasklint.validators import DependencyValidator, ValidationContext
from tasklint.validators.dependencies import declared_dependencies, find_cycle, parse_dependencies


def _item(task_id: str, dependencies: str | None = "None", extra: list[str] | None = None) -> Task:
    content = [f"### {task_id}: Task"]
    if dependencies is not None:
        content += ["**Dependencies**", dependencies]
    return Task(id=task_id, content=[*content, *(extra or [])])


def _context(
    tasks: list[Task], references: dict[str, list[str]] | None = None, **options: object
) -> ValidationContext:
    return ValidationContext(
        task_list=TaskList(tasks=tasks, references=references or {}), validator_options=dict(options)
    )


def _types(task: Task, context: ValidationContext) -> list[ErrorType]:
    return [error.type for error in DependencyValidator().validate(task, context).errors]


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, []),
        ("", []),
        ("None", []),
        ("n/a", []),
        ("-", []),
        ("{{def-no-dependencies}}", []),
        ("**Requirements**", []),
        ("SSH0002, `SSH0003` ,SSH0004", ["SSH0002", "SSH0003", "SSH0004"]),
    ],
)
def test_parse_dependencies(value: str | None, expected: list[str]) -> None:
    assert parse_dependencies(value) == expected


def test_find_cycle() -> None:
    graph = {"A": ["B"], "B": ["C"], "C": ["A"], "D": ["A"]}

    assert find_cycle("A", graph) == ["A", "B", "C", "A"]
    assert find_cycle("D", graph) is None


def test_declared_dependencies_from_referenced_block() -> None:
    task = _item("SSH0002", dependencies=None, extra=["{{shared-deps}}"])

    assert declared_dependencies(task, {"shared-deps": ["**Dependencies**", "SSH0001"]}) == ["SSH0001"]


def test_no_dependencies() -> None:
    task = _item("SSH0001")

    assert DependencyValidator().validate(task, _context([task])).valid


def test_missing_dependencies_section() -> None:
    task = _item("SSH0001", dependencies=None)

    assert _types(task, _context([task])) == [ErrorType.MISSING_DEPENDENCIES_SECTION]


def test_no_dependencies_reference_stands_in_for_section() -> None:
    task = _item("SSH0001", dependencies=None, extra=["{{def-no-dependencies}}"])
    context = _context([task], {"def-no-dependencies": ["**Dependencies**", "None"]})

    assert _types(task, context) == []


def test_undefined_no_dependencies_reference() -> None:
    task = _item("SSH0001", dependencies=None, extra=["{{def-no-dependencies}}"])

    assert _types(task, _context([task])) == [ErrorType.MISSING_DEPENDENCY_REFERENCE]


def test_unknown_dependency_ids() -> None:
    task = _item("SSH0002", "SSH0001, SSH0009")
    other = _item("SSH0001")

    result = DependencyValidator().validate(task, _context([other, task]))

    assert [error.type for error in result.errors] == [ErrorType.INVALID_DEPENDENCY_REFERENCE]
    assert result.errors[0].context["invalid_dependencies"] == ["SSH0009"]


def test_existence_check_can_be_disabled() -> None:
    task = _item("SSH0002", "SSH0009")

    assert _types(task, _context([task], validate_existence=False)) == []


def test_subtask_ids_count_as_existing() -> None:
    parent = Task(id="SSH0001", subtasks=[Task(id="SSH0001-1", type=TaskType.SUBTASK)])
    task = _item("SSH0002", "SSH0001-1")

    assert _types(task, _context([parent, task])) == []


def test_self_dependency() -> None:
    task = _item("SSH0001", "SSH0001")

    result = DependencyValidator().validate(task, _context([task]))

    assert [error.type for error in result.errors] == [ErrorType.CIRCULAR_DEPENDENCY]
    assert result.errors[0].context["cycle_path"] == ["SSH0001", "SSH0001"]


def test_indirect_cycle_reported_for_every_member() -> None:
    a, b, c = _item("SSH0001", "SSH0002"), _item("SSH0002", "SSH0003"), _item("SSH0003", "SSH0001")
    context = _context([a, b, c])

    for task in (a, b, c):
        assert _types(task, context) == [ErrorType.CIRCULAR_DEPENDENCY]
    path = DependencyValidator().validate(a, context).errors[0].context["cycle_path"]
    assert path == ["SSH0001", "SSH0002", "SSH0003", "SSH0001"]


def test_task_leading_into_a_cycle_is_not_flagged() -> None:
    a, b = _item("SSH0001", "SSH0002"), _item("SSH0002", "SSH0001")
    outsider = _item("SSH0003", "SSH0001")

    assert _types(outsider, _context([a, b, outsider])) == []
