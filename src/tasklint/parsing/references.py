"""Reference closure checking and usage statistics.

Placeholders are never expanded here; a ``{{name}}`` usage only has to have a
matching ``## #{{name}}`` definition somewhere in the document.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Mapping, Sequence
from typing import Any

from tasklint.models.result import ValidationError, ValidationResult
from tasklint.models.task import TaskList
from tasklint.parsing import patterns

logger = logging.getLogger(__name__)


def _document_lines(task_list: TaskList) -> list[str]:
    if task_list.lines:
        return task_list.lines
    # Hand-built task lists carry no raw text; fall back to section content.
    return [line for task in task_list.tasks for line in task.content]


def find_reference_usages(lines: Sequence[str]) -> list[tuple[str, int]]:
    """Return ``(name, line)`` pairs in document order, lines 1-based."""
    return [
        (match.group(1), index + 1)
        for index, line in enumerate(lines)
        for match in patterns.REFERENCE_USAGE.finditer(line)
    ]


def validate_references(
    source: TaskList | Sequence[str], references: Mapping[str, Sequence[str]] | None = None
) -> ValidationResult:
    """Report every placeholder name that has no definition.

    One ``missing_reference`` error is produced per undefined name, located
    at its first usage; later usages are listed in the error context.

    Args:
        source: A parsed task list, or raw document lines.
        references: Definitions to check against; required when ``source``
            is a list of lines, defaults to ``source.references`` otherwise.
    """
    if isinstance(source, TaskList):
        lines = _document_lines(source)
        defined = source.references if references is None else references
    else:
        lines = list(source)
        defined = references or {}

    first_seen: dict[str, int] = {}
    all_lines: dict[str, list[int]] = {}
    for name, line_number in find_reference_usages(lines):
        if name in defined:
            continue
        first_seen.setdefault(name, line_number)
        if line_number not in all_lines.setdefault(name, []):
            all_lines[name].append(line_number)

    errors = [
        ValidationError.missing_reference(name, line_number, all_lines[name])
        for name, line_number in first_seen.items()
    ]

    logger.debug("reference check: %d undefined names", len(errors))
    return ValidationResult.failure(errors) if errors else ValidationResult.success()


def expand_reference(task_list: TaskList, name: str) -> list[str] | None:
    """Return a definition's content lines, or ``None`` when undefined."""
    content = task_list.references.get(name)
    return list(content) if content is not None else None


def reference_stats(task_list: TaskList) -> dict[str, Any]:
    """Usage counts per defined reference.

    Definition headers themselves are not counted as usages.
    """
    lines = _document_lines(task_list)
    usages = Counter(
        name
        for name, line_number in find_reference_usages(lines)
        if not patterns.REFERENCE_DEFINITION.match(lines[line_number - 1].rstrip())
    )
    usage_counts = {name: usages.get(name, 0) for name in task_list.references}
    most_used: dict[str, Any] | None = None
    if usages:
        name, count = usages.most_common(1)[0]
        most_used = {"name": name, "count": count}
    return {
        "total_references": len(task_list.references),
        "total_usages": sum(usages.values()),
        "usage_counts": usage_counts,
        "unused_references": sorted(name for name, count in usage_counts.items() if count == 0),
        "undefined_references": sorted(name for name in usages if name not in task_list.references),
        "most_used": most_used,
    }
