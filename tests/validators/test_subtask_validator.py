from __future__ import annotations

from tasklint.models import ErrorType, SubtaskFormat, Task, TaskList, TaskType
from tasklint.parsing.patterns import INVALID_FORMAT
from tasklint.validators import SubtaskValidator, ValidationContext

DOCUMENTED = ["**Status**: Planned", "**Error Handling**", "{{error-handling-subtask}}"]


def _subtask(
    task_id: str = "SSH0001-1",
    status: str = "Planned",
    content: list[str] | None = None,
    subtask_format: SubtaskFormat = SubtaskFormat.NUMBERED,
    prefix: str | None = "SSH",
    **kwargs: object,
) -> Task:
    return Task(
        id=task_id,
        status=status,
        type=TaskType.SUBTASK,
        content=list(DOCUMENTED) if content is None else content,
        prefix=prefix,
        subtask_format=subtask_format,
        **kwargs,
    )


def _parent(*subtasks: Task) -> Task:
    return Task(id="SSH0001", status="In Progress", prefix="SSH", subtasks=list(subtasks))


def _context(**options: object) -> ValidationContext:
    references = {"error-handling-subtask": ["**Task-Specific Approach**", "**Error Reporting**"]}
    return ValidationContext(task_list=TaskList(references=references), validator_options=dict(options))


def _types(task: Task, **options: object) -> list[ErrorType]:
    return [error.type for error in SubtaskValidator().validate(task, _context(**options)).errors]


def test_documented_subtasks_pass() -> None:
    assert _types(_parent(_subtask(), _subtask("SSH0001-2"))) == []


def test_noop_when_invoked_on_a_subtask() -> None:
    assert _types(_subtask(status="Nope", content=[])) == []


def test_invalid_subtask_status() -> None:
    result = SubtaskValidator().validate(_parent(_subtask(status="Doing")), _context())

    error = result.errors[0]
    assert error.type == ErrorType.INVALID_SUBTASK_STATUS
    assert error.task_id == "SSH0001-1"


def test_numbered_subtask_missing_sections() -> None:
    result = SubtaskValidator().validate(_parent(_subtask(content=["Just prose"])), _context())

    assert [error.type for error in result.errors] == [ErrorType.MISSING_SUBTASK_SECTIONS]
    assert result.errors[0].context["missing_sections"] == ["Status", "Error Handling"]


def test_undefined_error_handling_reference_is_missing() -> None:
    subtask = _subtask(content=["**Status**: Planned", "{{error-handling-other}}"])

    result = SubtaskValidator().validate(_parent(subtask), _context())

    assert result.errors[0].context["missing_sections"] == ["Error Handling"]


def test_strict_formatting_requires_description() -> None:
    parent = _parent(_subtask())

    assert _types(parent) == []
    result = SubtaskValidator().validate(parent, _context(strict_formatting=True))
    assert result.errors[0].context["missing_sections"] == ["Description"]


def test_completed_numbered_subtask_needs_rating() -> None:
    assert _types(_parent(_subtask(status="Completed"))) == [ErrorType.MISSING_REVIEW_RATING]
    assert _types(_parent(_subtask(status="Completed", review_rating="7"))) == [ErrorType.INVALID_REVIEW_RATING]
    assert _types(_parent(_subtask(status="Completed", review_rating="4.0"))) == []


def test_checkbox_subtasks_only_check_status_and_prefix() -> None:
    done = _subtask("SSH0001a", status="Completed", content=[], subtask_format=SubtaskFormat.CHECKBOX)

    assert _types(_parent(done)) == []


def test_inconsistent_prefix() -> None:
    result = SubtaskValidator().validate(_parent(_subtask("WEB0001-1", prefix="WEB")), _context())

    error = result.errors[0]
    assert error.type == ErrorType.INCONSISTENT_SUBTASK_PREFIX
    assert error.task_id == "WEB0001-1"


def test_unrecognized_id_skips_prefix_check() -> None:
    unknown = _subtask(INVALID_FORMAT, prefix=None)

    assert _types(_parent(unknown)) == []
