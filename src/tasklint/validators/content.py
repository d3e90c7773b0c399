"""Section and reference lookups over a task's raw content lines.

A section is a line that starts with ``**Name**`` (or ``**Name:**``). It is
present when it appears in the task's own lines or in the content of a
reference block those lines use. Expansion is one level deep.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, Sequence
from functools import lru_cache

from tasklint.models.task import Task
from tasklint.parsing import patterns
from tasklint.parsing.subtasks import parent_lines


@lru_cache(maxsize=128)
def _section_pattern(name: str) -> re.Pattern[str]:
    return re.compile(rf"^\s*\*\*{re.escape(name)}:?\*\*")


def own_lines(task: Task) -> list[str]:
    """A main task's lines outside its subtasks; all lines for a subtask."""
    if task.is_subtask:
        return list(task.content)
    return parent_lines(task.content)


def used_references(lines: Iterable[str]) -> list[str]:
    """Distinct ``{{name}}`` usages in first-seen order."""
    seen: dict[str, None] = {}
    for line in lines:
        for match in patterns.REFERENCE_USAGE.finditer(line):
            seen.setdefault(match.group(1), None)
    return list(seen)


def expanded_lines(lines: Sequence[str], references: Mapping[str, Sequence[str]]) -> list[str]:
    """``lines`` followed by the content of every defined reference they use."""
    expanded = list(lines)
    for name in used_references(lines):
        expanded.extend(references.get(name, ()))
    return expanded


def has_section(lines: Iterable[str], name: str) -> bool:
    pattern = _section_pattern(name)
    return any(pattern.match(line) for line in lines)


def missing_sections(lines: Sequence[str], names: Iterable[str]) -> list[str]:
    return [name for name in names if not has_section(lines, name)]


def section_block(lines: Sequence[str], name: str) -> list[str] | None:
    """Lines after a ``**name**`` header up to the next bold label or blank line.

    Returns ``None`` when the header is absent. Text after the header on the
    same line is included as the block's first line.
    """
    pattern = _section_pattern(name)
    for index, line in enumerate(lines):
        match = pattern.match(line)
        if match is None:
            continue
        block: list[str] = []
        inline = line[match.end() :].lstrip(":").strip()
        if inline:
            block.append(inline)
        for following in lines[index + 1 :]:
            stripped = following.strip()
            if not stripped or patterns.BOLD_LABEL.match(stripped):
                break
            block.append(following)
        return block
    return None
