"""Task id helpers shared by the parser and the validators."""

from __future__ import annotations

from tasklint.config.policy import Policy
from tasklint.parsing import patterns


def is_subtask_id(task_id: str) -> bool:
    """True for the numbered ``PREFIX####-N`` shape only.

    ``PROJ-0001`` is a main task id even though it contains a dash.
    """
    return patterns.NUMBERED_SUBTASK_ID_SHAPE.match(task_id) is not None


def extract_prefix(task_id: str) -> str | None:
    match = patterns.PREFIX.match(task_id)
    return match.group(1) if match else None


def extract_parent_id(task_id: str) -> str | None:
    """Parent id of a numbered subtask, ``None`` for anything else."""
    match = patterns.NUMBERED_SUBTASK_ID_SHAPE.match(task_id)
    return match.group(1) if match else None


def extract_any_parent_id(task_id: str) -> str | None:
    """Parent id for numbered, lettered and dashed-numbered subtask ids."""
    for shape in (
        patterns.NUMBERED_SUBTASK_ID_SHAPE,
        patterns.LETTERED_SUBTASK_ID_SHAPE,
        patterns.DASHED_NUMBERED_SUBTASK_ID_SHAPE,
    ):
        match = shape.match(task_id)
        if match:
            return match.group(1)
    return None


def extract_task_number(task_id: str) -> int | None:
    match = patterns.TASK_NUMBER.match(task_id)
    return int(match.group(1)) if match else None


def derive_category(task_id: str, policy: Policy, fallback: str | None = None) -> str | None:
    """Map the numeric part of ``task_id`` through the policy's range table."""
    number = extract_task_number(task_id)
    if number is None:
        return fallback
    return policy.category_for_number(number)
