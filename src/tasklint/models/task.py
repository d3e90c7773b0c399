"""Pydantic models for parsed task list documents: Task and TaskList.

Both models are frozen. The parser builds them once per document and every
later stage (resolver, validators, formatting) only reads them.
"""

from __future__ import annotations

from collections import Counter
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field

from tasklint.models.enums import SubtaskFormat, TaskType

COMPLETED = "Completed"
IN_PROGRESS = "In Progress"


class Task(BaseModel):
    """A node in the task graph.

    Attributes:
        id: Task identifier, e.g. ``SSH0001`` or ``SSH0001-1``.
        description: Free-text description.
        status: Status label, checked against the policy vocabulary.
        priority: Priority label; ``None`` for subtasks that carry none.
        content: Raw lines of the task's detailed section.
        subtasks: Child tasks, owned exclusively by this task.
        line_number: 0-based line offset in the source document.
        type: Main task or subtask.
        prefix: 2-4 letter code extracted from ``id``.
        category: Category derived from the numeric part of ``id``.
        parent_id: Parent id, only for numbered ``PREFIX####-N`` subtasks.
        review_rating: Rating text such as ``4.5`` or ``4.0 (partial)``.
        subtask_format: Numbered or checkbox, only for subtasks.
    """

    id: str
    description: str = ""
    status: str = "Planned"
    priority: str | None = None
    content: list[str] = Field(default_factory=list)
    subtasks: list[Task] = Field(default_factory=list)
    line_number: int = 0
    type: TaskType = TaskType.MAIN
    prefix: str | None = None
    category: str | None = None
    parent_id: str | None = None
    review_rating: str | None = None
    subtask_format: SubtaskFormat | None = None

    model_config = {"frozen": True}

    @property
    def is_main(self) -> bool:
        return self.type == TaskType.MAIN

    @property
    def is_subtask(self) -> bool:
        return self.type == TaskType.SUBTASK

    @property
    def is_completed(self) -> bool:
        return self.status == COMPLETED


class TaskList(BaseModel):
    """A whole parsed document.

    Attributes:
        tasks: Main tasks in document order: table rows first (rows with a
            numbered subtask id such as ``SSH0001-1`` are not kept), then
            detailed sections without a row. Subtasks ride on their parents.
        references: Reference name to the content lines of its definition.
        file_path: Source path when the document was read from disk.
        total_lines: Number of lines in the source document.
        parsed_at: When the document was parsed.
        lines: Raw document lines, scanned by the reference resolver.
    """

    tasks: list[Task] = Field(default_factory=list)
    references: dict[str, list[str]] = Field(default_factory=dict)
    file_path: str | None = None
    total_lines: int = 0
    parsed_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    lines: list[str] = Field(default_factory=list)

    model_config = {"frozen": True}

    def main_tasks(self) -> list[Task]:
        return [task for task in self.tasks if task.is_main]

    def subtasks(self) -> list[Task]:
        return [subtask for task in self.tasks for subtask in task.subtasks]

    def all_tasks(self) -> list[Task]:
        """Flatten the tree: each task followed by its subtasks."""
        flattened: list[Task] = []
        for task in self.tasks:
            flattened.append(task)
            flattened.extend(task.subtasks)
        return flattened

    def tasks_by_status(self, status: str) -> list[Task]:
        return [task for task in self.all_tasks() if task.status == status]

    def tasks_by_category(self, category: str) -> list[Task]:
        return [task for task in self.all_tasks() if task.category == category]

    def find_task(self, task_id: str) -> Task | None:
        return next((task for task in self.all_tasks() if task.id == task_id), None)

    def task_exists(self, task_id: str) -> bool:
        return self.find_task(task_id) is not None

    def task_ids(self) -> list[str]:
        return [task.id for task in self.all_tasks()]

    def reference_exists(self, name: str) -> bool:
        return name in self.references

    def task_count(self) -> int:
        return len(self.all_tasks())

    def stats(self) -> dict[str, Any]:
        """Summarize the document: totals by type, status and category."""
        everything = self.all_tasks()
        return {
            "total_tasks": len(everything),
            "main_tasks": len(self.main_tasks()),
            "subtasks": len(self.subtasks()),
            "by_status": dict(Counter(task.status for task in everything)),
            "by_category": dict(Counter(task.category or "uncategorized" for task in self.main_tasks())),
            "references": len(self.references),
            "total_lines": self.total_lines,
        }
