from __future__ import annotations

import pytest
from pydantic import ValidationError as PydanticValidationError

from tasklint.models import SubtaskFormat, Task, TaskList, TaskType


def _subtask(task_id: str, status: str = "Planned") -> Task:
    return Task(
        id=task_id,
        status=status,
        type=TaskType.SUBTASK,
        prefix="SSH",
        subtask_format=SubtaskFormat.NUMBERED,
    )


def _task_list() -> TaskList:
    return TaskList(
        tasks=[
            Task(
                id="SSH0001",
                status="In Progress",
                prefix="SSH",
                category="stateful_worker",
                subtasks=[_subtask("SSH0001-1", "Completed"), _subtask("SSH0001-2")],
            ),
            Task(id="SSH0101", status="Planned", prefix="SSH", category="web_layer"),
        ],
        references={"error-handling": ["**Error Handling**"]},
        total_lines=40,
    )


class TestTask:
    def test_defaults(self) -> None:
        task = Task(id="SSH0001")

        assert task.status == "Planned"
        assert task.priority is None
        assert task.content == []
        assert task.subtasks == []
        assert task.is_main
        assert not task.is_subtask
        assert not task.is_completed

    def test_subtask_flags(self) -> None:
        subtask = _subtask("SSH0001-1", "Completed")

        assert subtask.is_subtask
        assert subtask.is_completed

    def test_is_frozen(self) -> None:
        task = Task(id="SSH0001")

        with pytest.raises(PydanticValidationError):
            task.status = "Completed"  # type: ignore[misc]


class TestTaskList:
    def test_main_tasks_and_subtasks(self) -> None:
        task_list = _task_list()

        assert [task.id for task in task_list.main_tasks()] == ["SSH0001", "SSH0101"]
        assert [task.id for task in task_list.subtasks()] == ["SSH0001-1", "SSH0001-2"]

    def test_all_tasks_places_subtasks_after_their_parent(self) -> None:
        assert _task_list().task_ids() == ["SSH0001", "SSH0001-1", "SSH0001-2", "SSH0101"]

    def test_lookup_helpers(self) -> None:
        task_list = _task_list()

        assert task_list.find_task("SSH0001-2") is not None
        assert task_list.find_task("SSH9999") is None
        assert task_list.task_exists("SSH0101")
        assert task_list.reference_exists("error-handling")
        assert not task_list.reference_exists("standard-kpis")
        assert task_list.task_count() == 4

    def test_filters(self) -> None:
        task_list = _task_list()

        assert [task.id for task in task_list.tasks_by_status("Completed")] == ["SSH0001-1"]
        assert [task.id for task in task_list.tasks_by_category("web_layer")] == ["SSH0101"]

    def test_stats(self) -> None:
        stats = _task_list().stats()

        assert stats["total_tasks"] == 4
        assert stats["main_tasks"] == 2
        assert stats["subtasks"] == 2
        assert stats["by_status"] == {"In Progress": 1, "Completed": 1, "Planned": 2}
        assert stats["by_category"] == {"stateful_worker": 1, "web_layer": 1}
        assert stats["references"] == 1
        assert stats["total_lines"] == 40

    def test_parsed_at_is_set(self) -> None:
        assert _task_list().parsed_at.tzinfo is not None
