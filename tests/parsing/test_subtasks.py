from __future__ import annotations

from tasklint.config import Policy
from tasklint.models import SubtaskFormat, TaskType
from tasklint.parsing.patterns import INVALID_FORMAT
from tasklint.parsing.subtasks import extract_subtasks, is_subtask_marker, parent_lines

CONTENT = [
    "### SSH0001: Auth",
    "**Status**: In Progress",
    "#### 1. Validate keys (SSH0001-1)",
    "**Status**: Completed",
    "**Review Rating**: 4.0",
    "#### 2. Rotate keys",
    "**Description**: Rotate host keys",
    "- [x] Write docs [SSH0001a]",
    "- [ ] **SSH0001b**: Add retries",
    "- [ ] Untracked item",
]


def _subtasks() -> list:
    return extract_subtasks(CONTENT, start_line=10, policy=Policy(), parent_category="stateful_worker")


def test_is_subtask_marker() -> None:
    assert is_subtask_marker("#### 3. Something")
    assert is_subtask_marker("- [ ] open")
    assert is_subtask_marker("- [X] done")
    assert not is_subtask_marker("### SSH0001: Auth")
    assert not is_subtask_marker("- plain bullet")


def test_extracts_every_marker_in_order() -> None:
    subtasks = _subtasks()

    assert [task.id for task in subtasks] == ["SSH0001-1", INVALID_FORMAT, "SSH0001a", "SSH0001b", INVALID_FORMAT]
    assert all(task.type == TaskType.SUBTASK for task in subtasks)


def test_numbered_subtask_fields() -> None:
    first = _subtasks()[0]

    assert first.description == "Validate keys"
    assert first.status == "Completed"
    assert first.review_rating == "4.0"
    assert first.parent_id == "SSH0001"
    assert first.prefix == "SSH"
    assert first.line_number == 12
    assert first.subtask_format == SubtaskFormat.NUMBERED
    assert first.content == ["**Status**: Completed", "**Review Rating**: 4.0"]


def test_numbered_subtask_without_id() -> None:
    second = _subtasks()[1]

    assert second.description == "Rotate keys"
    assert second.status == "Planned"
    assert second.prefix is None
    assert second.parent_id is None
    assert second.category == "stateful_worker"


def test_numbered_body_runs_to_next_marker() -> None:
    assert _subtasks()[1].content == ["**Description**: Rotate host keys"]


def test_checkbox_subtasks() -> None:
    _, _, done, todo, untracked = _subtasks()

    assert done.status == "Completed"
    assert done.description == "Write docs"
    assert done.subtask_format == SubtaskFormat.CHECKBOX
    assert done.content == []
    assert todo.status == "Planned"
    assert todo.description == "Add retries"
    assert untracked.description == "Untracked item"
    assert untracked.category == "stateful_worker"


def test_parent_lines_skip_numbered_bodies_and_checkbox_lines() -> None:
    content = [
        "### SSH0001: Auth",
        "- [ ] Validate keys [SSH0001a]",
        "**Error Handling**",
        "#### 1. Rotate keys (SSH0001-1)",
        "**Status**: Planned",
        "- [x] Log sessions [SSH0001b]",
        "**Dependencies**",
        "None",
    ]

    assert parent_lines(content) == ["### SSH0001: Auth", "**Error Handling**", "**Dependencies**", "None"]
