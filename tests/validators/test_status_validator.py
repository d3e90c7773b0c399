from __future__ import annotations

import pytest

from tasklint.models import ErrorType, SubtaskFormat, Task, TaskType
from tasklint.validators import StatusValidator, ValidationContext


def _item(status: str = "Planned", **kwargs: object) -> Task:
    return Task(id="SSH0001", status=status, **kwargs)


def _subtask(status: str = "Completed") -> Task:
    return Task(id="SSH0001-1", status=status, type=TaskType.SUBTASK, subtask_format=SubtaskFormat.NUMBERED)


def _types(task: Task, **options: object) -> list[ErrorType]:
    result = StatusValidator().validate(task, ValidationContext(validator_options=dict(options)))
    return [error.type for error in result.errors]


def test_valid_task() -> None:
    assert _types(_item(priority="High")) == []


def test_invalid_status() -> None:
    result = StatusValidator().validate(_item("Doing"), ValidationContext())

    assert result.errors[0].type == ErrorType.INVALID_STATUS
    assert "Valid statuses: Planned, In Progress, Review, Completed, Blocked" in result.errors[0].message


def test_invalid_priority() -> None:
    assert _types(_item(priority="Urgent")) == [ErrorType.INVALID_PRIORITY]


def test_missing_priority_is_not_a_status_error() -> None:
    assert _types(_item(priority=None)) == []


def test_in_progress_main_task_needs_subtasks() -> None:
    assert _types(_item("In Progress")) == [ErrorType.MISSING_SUBTASKS_FOR_IN_PROGRESS]
    assert _types(_item("In Progress", subtasks=[_subtask("Planned")])) == []


def test_in_progress_subtask_needs_no_subtasks() -> None:
    assert _types(_subtask("In Progress")) == []


def test_completed_task_needs_rating() -> None:
    assert _types(_item("Completed")) == [ErrorType.MISSING_REVIEW_RATING]


@pytest.mark.parametrize("rating", ["4.5", "4.5 (partial)", "5", " 3.0 "])
def test_accepted_ratings(rating: str) -> None:
    assert _types(_item("Completed", review_rating=rating)) == []


@pytest.mark.parametrize("rating", ["6.0", "0", "4.55", "excellent"])
def test_rejected_ratings(rating: str) -> None:
    assert _types(_item("Completed", review_rating=rating)) == [ErrorType.INVALID_REVIEW_RATING]


def test_rating_ignored_before_completion() -> None:
    assert _types(_item("Review", review_rating="9")) == []


def test_strict_transitions_flag_unfinished_subtasks() -> None:
    task = _item("Completed", review_rating="4.0", subtasks=[_subtask("Completed"), _subtask("Planned")])

    assert _types(task) == []
    assert _types(task, strict_transitions=True) == [ErrorType.INCONSISTENT_SUBTASK_STATUS]
