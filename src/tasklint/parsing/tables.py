"""Task table extraction (``## Current Tasks`` / ``## Completed Tasks``)."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from tasklint.config.policy import Policy
from tasklint.models.task import COMPLETED, Task
from tasklint.parsing import ids, patterns
from tasklint.parsing.fields import non_blank

logger = logging.getLogger(__name__)

_RATING_HEADERS = {"review rating", "rating"}


def split_row(line: str) -> list[str]:
    """Split a pipe-delimited row into trimmed cells, dropping the outer pipes."""
    stripped = line.strip()
    if stripped.startswith("|"):
        stripped = stripped[1:]
    if stripped.endswith("|"):
        stripped = stripped[:-1]
    return [cell.strip() for cell in stripped.split("|")]


def is_separator_row(line: str) -> bool:
    return patterns.TABLE_SEPARATOR.match(line.strip()) is not None


def _rating_column(lines: Sequence[str], header_index: int) -> int | None:
    column_row = header_index + 1
    if column_row >= len(lines) or not lines[column_row].lstrip().startswith("|"):
        return None
    for index, cell in enumerate(split_row(lines[column_row])):
        if cell.lower() in _RATING_HEADERS:
            return index
    return None


def _review_rating(cells: list[str], rating_column: int | None) -> str | None:
    if rating_column is not None:
        value = cells[rating_column] if rating_column < len(cells) else ""
    elif len(cells) >= 6:
        value = cells[-1]
    else:
        return None
    value = value.strip()
    return None if value in ("", "-") else value


def extract_table_tasks(
    lines: Sequence[str], section_header: str, *, completed: bool, policy: Policy
) -> list[Task]:
    """Read the task table under ``section_header``.

    Rows start three lines below the header (header, column row, separator)
    and run until a blank line or a ``##`` line. Rows whose id has the
    numbered-subtask shape are skipped; subtasks live in detailed sections.
    """
    try:
        header_index = next(i for i, line in enumerate(lines) if line.strip() == section_header)
    except StopIteration:
        return []

    rating_column = _rating_column(lines, header_index)
    tasks: list[Task] = []
    for index in range(header_index + 3, len(lines)):
        line = lines[index]
        if line.startswith("##") or not line.strip():
            break
        if not line.lstrip().startswith("|") or is_separator_row(line):
            continue
        cells = split_row(line)
        if len(cells) < 2 or not cells[0]:
            continue
        task_id = cells[0]
        if ids.is_subtask_id(task_id):
            logger.debug("skipping subtask row %s at line %d", task_id, index)
            continue

        table_status = non_blank(cells[2]) if len(cells) >= 3 else None
        status = COMPLETED if completed else (table_status or "Planned")
        tasks.append(
            Task(
                id=task_id,
                description=cells[1],
                status=status,
                priority=non_blank(cells[3]) if len(cells) >= 4 else None,
                line_number=index,
                prefix=ids.extract_prefix(task_id),
                category=ids.derive_category(task_id, policy),
                review_rating=_review_rating(cells, rating_column),
            )
        )

    logger.debug("table %r yielded %d task rows", section_header, len(tasks))
    return tasks
