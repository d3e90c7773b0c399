"""Detailed task sections and reference definitions."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from tasklint.config.policy import Policy
from tasklint.models.task import Task
from tasklint.parsing import ids, patterns
from tasklint.parsing.fields import extract_field, non_blank
from tasklint.parsing.subtasks import extract_subtasks, parent_lines

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DetailedSection:
    """A ``### ID: title`` section before it is merged with table rows."""

    id: str
    start_line: int
    content: list[str]
    title: str = ""
    description: str | None = None
    status: str | None = None
    priority: str | None = None
    review_rating: str | None = None
    subtasks: list[Task] = field(default_factory=list)


def extract_references(lines: Sequence[str]) -> dict[str, list[str]]:
    """Collect ``## #{{name}}`` definitions.

    A definition's content runs until the next line starting with ``## ``.
    A later definition of the same name replaces the earlier one.
    """
    references: dict[str, list[str]] = {}
    for index, line in enumerate(lines):
        match = patterns.REFERENCE_DEFINITION.match(line.rstrip())
        if match is None:
            continue
        body: list[str] = []
        for following in lines[index + 1 :]:
            if following.startswith("## "):
                break
            body.append(following)
        name = match.group(1)
        if name in references:
            logger.debug("reference %r redefined at line %d", name, index)
        references[name] = body
    return references


def _section_end(lines: Sequence[str], start: int) -> int:
    for index in range(start + 1, len(lines)):
        if patterns.SECTION_BOUNDARY.match(lines[index]):
            return index
    return len(lines)


def extract_detailed_sections(lines: Sequence[str], policy: Policy) -> list[DetailedSection]:
    """Find every ``### ID:`` section in document order.

    A section runs from its header to the line before the next heading of
    level one to three, or to the end of the document.
    """
    sections: list[DetailedSection] = []
    for start, line in enumerate(lines):
        match = patterns.TASK_HEADER.match(line)
        if match is None:
            continue
        task_id = match.group(1)
        end = _section_end(lines, start)
        content = list(lines[start:end])
        own = parent_lines(content)
        category = ids.derive_category(task_id, policy)
        sections.append(
            DetailedSection(
                id=task_id,
                start_line=start,
                content=content,
                title=line[match.end() :].strip(),
                description=non_blank(extract_field(own, "Description")),
                status=non_blank(extract_field(own, "Status")),
                priority=non_blank(extract_field(own, "Priority")),
                review_rating=non_blank(extract_field(own, "Review Rating")),
                subtasks=extract_subtasks(content, start_line=start, policy=policy, parent_category=category),
            )
        )
    return sections
