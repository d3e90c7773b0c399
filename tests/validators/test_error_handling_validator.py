from __future__ import annotations

from tasklint.models import ErrorType, SubtaskFormat, Task, TaskList, TaskType
from tasklint.validators import ErrorHandlingValidator, ValidationContext
from tasklint.validators.error_handling import (
    check_error_handling,
    error_handling_references,
    has_error_handling,
    missing_main_subsections,
)

FULL_BLOCK = [
    "**Error Handling**",
    "**Core Principles**",
    "- Crash early",
    "**Error Implementation**",
    "- Wrap errors",
    "**Error Examples**",
    "- Timeout returns an error tuple",
    "**Worker Specifics**",
    "- Supervisor restarts the worker",
]

REFERENCES = {
    "error-handling": FULL_BLOCK,
    "error-handling-partial": ["**Error Handling**", "**Core Principles**", "- Crash early"],
    "error-handling-subtask": [
        "**Error Handling**",
        "**Task-Specific Approach**",
        "- Retry once",
        "**Error Reporting**",
        "- Log with the subtask id",
    ],
}


def _item(content: list[str], status: str = "Planned") -> Task:
    return Task(id="SSH0001", status=status, content=["### SSH0001: Auth", *content])


def _subtask(content: list[str], subtask_format: SubtaskFormat = SubtaskFormat.NUMBERED) -> Task:
    return Task(id="SSH0001-1", type=TaskType.SUBTASK, content=content, subtask_format=subtask_format)


def _context(**options: object) -> ValidationContext:
    return ValidationContext(task_list=TaskList(references=REFERENCES), validator_options=dict(options))


def _types(task: Task, **options: object) -> list[ErrorType]:
    return [error.type for error in ErrorHandlingValidator().validate(task, _context(**options)).errors]


def test_error_handling_references() -> None:
    lines = ["{{error-handling}}", "{{def-error-handling-web}} {{error-handling}}", "{{standard-kpis}}"]

    assert error_handling_references(lines) == ["error-handling", "def-error-handling-web"]


def test_core_principles_can_be_task_principles() -> None:
    lines = ["**Task Principles**", "**Error Implementation**", "**Error Examples**", "**Web Specifics:**"]

    assert missing_main_subsections(lines) == []


def test_missing_main_subsections_lists_every_gap() -> None:
    assert missing_main_subsections(["**Error Handling**"]) == [
        "Core Principles",
        "Error Implementation",
        "Error Examples",
        "Framework Specifics",
    ]


def test_has_error_handling() -> None:
    assert has_error_handling(["**Error Handling**"], {})
    assert has_error_handling(["{{error-handling-subtask}}"], REFERENCES)
    assert not has_error_handling(["{{error-handling-missing}}"], REFERENCES)
    assert not has_error_handling(["**Status**"], REFERENCES)


def test_complete_inline_block() -> None:
    assert _types(_item(FULL_BLOCK)) == []


def test_inline_header_with_reference_body() -> None:
    assert _types(_item(["**Error Handling**", "{{error-handling}}"])) == []


def test_reference_alone_is_accepted() -> None:
    assert _types(_item(["{{error-handling}}"])) == []


def test_incomplete_inline_block() -> None:
    result = ErrorHandlingValidator().validate(_item(FULL_BLOCK[:3]), _context())

    error = result.errors[0]
    assert error.type == ErrorType.INCOMPLETE_ERROR_HANDLING
    assert error.message.endswith("Missing: Error Implementation, Error Examples, Framework Specifics")


def test_incomplete_reference() -> None:
    assert _types(_item(["{{error-handling-partial}}"])) == [ErrorType.INCOMPLETE_ERROR_HANDLING]


def test_missing_entirely() -> None:
    result = ErrorHandlingValidator().validate(_item(["**Status**: Planned"]), _context())

    assert result.errors[0].type == ErrorType.MISSING_ERROR_HANDLING
    assert "{{error-handling}}" in result.errors[0].message


def test_undefined_reference_counts_as_missing() -> None:
    errors = ErrorHandlingValidator().validate(_item(["{{error-handling-web}}"]), _context()).errors

    assert errors[0].type == ErrorType.MISSING_ERROR_HANDLING
    assert errors[0].context["missing_references"] == ["error-handling-web"]


def test_require_comprehensive_rejects_reference_shorthand() -> None:
    assert _types(_item(["{{error-handling}}"]), require_comprehensive=True) == [ErrorType.MISSING_ERROR_HANDLING]
    assert _types(_item(FULL_BLOCK), require_comprehensive=True) == []
    assert _types(_item(["**Error Handling**", "{{error-handling}}"]), require_comprehensive=True) == [
        ErrorType.INCOMPLETE_ERROR_HANDLING
    ]


def test_completed_task_needs_implementation_section() -> None:
    task = _item(FULL_BLOCK, status="Completed")

    assert _types(task) == [ErrorType.MISSING_ERROR_IMPLEMENTATION]
    done = _item([*FULL_BLOCK, "**Error Handling Implementation**", "- Done"], status="Completed")
    assert _types(done) == []


def test_subtask_subsections() -> None:
    assert _types(_subtask(["{{error-handling-subtask}}"])) == []
    issues = check_error_handling(_subtask(["**Error Handling**", "**Error Reporting**"]), {})
    assert issues[0].type == ErrorType.INCOMPLETE_ERROR_HANDLING
    assert issues[0].message.endswith("Missing: Task-Specific Approach")


def test_subtask_missing_message_names_subtask_shorthand() -> None:
    issues = check_error_handling(_subtask(["**Status**: Planned"]), {})

    assert "{{error-handling-subtask}}" in issues[0].message


def test_checkbox_subtasks_are_exempt() -> None:
    assert _types(_subtask([], SubtaskFormat.CHECKBOX)) == []
