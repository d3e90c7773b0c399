"""Markdown task list parser.

``parse`` turns raw text into a :class:`~tasklint.models.task.TaskList`:

1. reference definitions (``## #{{name}}``) are collected;
2. rows of the Current and Completed task tables become provisional tasks;
3. ``### ID:`` sections are read, including their subtasks;
4. table rows and sections are merged by id.

Only a document without any task is a parse failure. Everything else that is
malformed survives into the model and is reported later by the validators.
"""

from __future__ import annotations

import logging
from pathlib import Path

from tasklint.config.policy import Policy
from tasklint.exceptions import DocumentLoadError, ParseError
from tasklint.models.task import Task, TaskList
from tasklint.parsing import ids, patterns
from tasklint.parsing.sections import DetailedSection, extract_detailed_sections, extract_references
from tasklint.parsing.tables import extract_table_tasks

logger = logging.getLogger(__name__)

NO_TASKS_MESSAGE = "No tasks found in the document"


def _merge_row(row: Task, section: DetailedSection) -> Task:
    return row.model_copy(
        update={
            "content": section.content,
            "subtasks": section.subtasks,
            "description": section.description or row.description,
            "status": section.status or row.status,
            "priority": section.priority or row.priority,
            "review_rating": section.review_rating or row.review_rating,
        }
    )


def _standalone(section: DetailedSection, policy: Policy) -> Task:
    return Task(
        id=section.id,
        description=section.description or section.title,
        status=section.status or "Planned",
        priority=section.priority or "Medium",
        content=section.content,
        subtasks=section.subtasks,
        line_number=section.start_line,
        prefix=ids.extract_prefix(section.id),
        category=ids.derive_category(section.id, policy),
        review_rating=section.review_rating,
    )


def merge_tasks(table_tasks: list[Task], sections: list[DetailedSection], policy: Policy) -> list[Task]:
    """Unify table rows with detailed sections by id.

    Table rows keep their order; sections without a row follow in document
    order. The first section for an id is the one merged into its row.
    """
    by_id: dict[str, DetailedSection] = {}
    for section in sections:
        by_id.setdefault(section.id, section)

    row_ids = {task.id for task in table_tasks}
    merged = [_merge_row(task, by_id[task.id]) if task.id in by_id else task for task in table_tasks]
    merged.extend(_standalone(section, policy) for section in sections if section.id not in row_ids)
    return merged


def parse(text: str, policy: Policy | None = None, *, file_path: str | None = None) -> TaskList:
    """Parse a task list document.

    Args:
        text: Full document text.
        policy: Policy used to derive categories; defaults to ``Policy()``.
        file_path: Recorded on the result for diagnostics.

    Returns:
        The parsed, immutable task list.

    Raises:
        ParseError: If the document contains no tasks at all.
    """
    policy = policy or Policy()
    lines = text.splitlines()

    references = extract_references(lines)
    table_tasks = extract_table_tasks(
        lines, patterns.CURRENT_TASKS_HEADER, completed=False, policy=policy
    ) + extract_table_tasks(lines, patterns.COMPLETED_TASKS_HEADER, completed=True, policy=policy)
    sections = extract_detailed_sections(lines, policy)
    tasks = merge_tasks(table_tasks, sections, policy)

    logger.debug(
        "parsed %d references, %d table rows, %d detailed sections into %d tasks",
        len(references),
        len(table_tasks),
        len(sections),
        len(tasks),
    )
    if not tasks:
        raise ParseError(NO_TASKS_MESSAGE)

    return TaskList(
        tasks=tasks,
        references=references,
        file_path=file_path,
        total_lines=len(lines),
        lines=lines,
    )


def try_parse(text: str, policy: Policy | None = None) -> tuple[TaskList | None, str | None]:
    """Result-style variant of :func:`parse`: ``(task_list, None)`` or ``(None, reason)``."""
    try:
        return parse(text, policy), None
    except ParseError as exc:
        return None, str(exc)


def parse_file(path: str | Path, policy: Policy | None = None) -> TaskList:
    """Read and parse a task list file.

    Raises:
        DocumentLoadError: If the file cannot be read.
        ParseError: If it contains no tasks.
    """
    document_path = Path(path)
    try:
        text = document_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise DocumentLoadError(f"failed to read task list: {document_path}") from exc
    return parse(text, policy, file_path=str(document_path))
