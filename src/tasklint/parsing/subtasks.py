"""Subtask extraction from a detailed task section.

Two syntaxes are recognized and may be mixed inside one section:

* numbered: ``#### 1. Write the handler (SSH0001-1)`` followed by a content
  body that runs until the next subtask marker or the end of the section;
* checkbox: ``- [x] Write the handler [SSH0001a]`` or
  ``- [ ] **SSH0001b**: Add retries``, with no content body.
"""

from __future__ import annotations

from collections.abc import Sequence

from tasklint.config.policy import Policy
from tasklint.models.enums import SubtaskFormat, TaskType
from tasklint.models.task import COMPLETED, Task
from tasklint.parsing import ids, patterns
from tasklint.parsing.fields import extract_field, non_blank


def is_subtask_marker(line: str) -> bool:
    return bool(patterns.NUMBERED_SUBTASK.match(line) or patterns.CHECKBOX_SUBTASK.match(line))


def parent_lines(content: Sequence[str]) -> list[str]:
    """Lines of a detailed section that belong to the parent task.

    A numbered subtask owns its marker and the body up to the next marker. A
    checkbox subtask owns only its own line, so text after a checkbox list is
    the parent's again.
    """
    lines: list[str] = []
    in_numbered = False
    for line in content:
        if patterns.NUMBERED_SUBTASK.match(line):
            in_numbered = True
        elif patterns.CHECKBOX_SUBTASK.match(line):
            in_numbered = False
        elif not in_numbered:
            lines.append(line)
    return lines


def _numbered_description(line: str) -> str:
    match = patterns.NUMBERED_SUBTASK_DESCRIPTION.match(line.rstrip())
    return match.group(1).strip() if match else line.strip()


def _checkbox_description(line: str) -> str:
    text = patterns.CHECKBOX_PREFIX.sub("", line.rstrip())
    text = patterns.CHECKBOX_TRAILING_ID_STRIP.sub("", text)
    text = patterns.CHECKBOX_BOLD_ID_STRIP.sub("", text)
    return text.strip()


def _checkbox_id(line: str) -> str:
    stripped = line.rstrip()
    match = patterns.CHECKBOX_TRAILING_ID.search(stripped) or patterns.CHECKBOX_BOLD_ID.search(stripped)
    return match.group(1) if match else patterns.INVALID_FORMAT


def _numbered_subtask(
    header: str, body: list[str], line_number: int, parent_category: str | None, policy: Policy
) -> Task:
    id_match = patterns.NUMBERED_SUBTASK_ID.search(header)
    subtask_id = id_match.group(1) if id_match else patterns.INVALID_FORMAT
    valid_id = id_match is not None
    description = _numbered_description(header) or non_blank(extract_field(body, "Description")) or ""
    return Task(
        id=subtask_id,
        description=description,
        status=non_blank(extract_field(body, "Status")) or "Planned",
        content=body,
        line_number=line_number,
        type=TaskType.SUBTASK,
        prefix=ids.extract_prefix(subtask_id) if valid_id else None,
        category=ids.derive_category(subtask_id, policy, parent_category) if valid_id else parent_category,
        parent_id=ids.extract_parent_id(subtask_id) if valid_id else None,
        review_rating=non_blank(extract_field(body, "Review Rating")),
        subtask_format=SubtaskFormat.NUMBERED,
    )


def _checkbox_subtask(line: str, line_number: int, parent_category: str | None, policy: Policy) -> Task:
    subtask_id = _checkbox_id(line)
    marker = patterns.CHECKBOX_SUBTASK.match(line)
    checked = marker is not None and marker.group(1).lower() == "x"
    known = subtask_id != patterns.INVALID_FORMAT
    return Task(
        id=subtask_id,
        description=_checkbox_description(line),
        status=COMPLETED if checked else "Planned",
        line_number=line_number,
        type=TaskType.SUBTASK,
        prefix=ids.extract_prefix(subtask_id) if known else None,
        category=ids.derive_category(subtask_id, policy, parent_category) if known else parent_category,
        subtask_format=SubtaskFormat.CHECKBOX,
    )


def extract_subtasks(
    content: Sequence[str],
    *,
    start_line: int,
    policy: Policy,
    parent_category: str | None = None,
) -> list[Task]:
    """Extract every subtask marker from a section's ``content``.

    Args:
        content: Lines of the parent's detailed section.
        start_line: Document offset of ``content[0]``.
        policy: Active policy, used to derive categories.
        parent_category: Category inherited when a subtask id has no number.

    Returns:
        Subtasks in document order.
    """
    markers = [index for index, line in enumerate(content) if is_subtask_marker(line)]
    subtasks: list[Task] = []
    for position, index in enumerate(markers):
        line = content[index]
        if patterns.NUMBERED_SUBTASK.match(line):
            end = markers[position + 1] if position + 1 < len(markers) else len(content)
            body = list(content[index + 1 : end])
            subtasks.append(_numbered_subtask(line, body, start_line + index, parent_category, policy))
        else:
            subtasks.append(_checkbox_subtask(line, start_line + index, parent_category, policy))
    return subtasks
