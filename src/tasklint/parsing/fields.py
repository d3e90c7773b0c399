"""Labeled field extraction from a detailed section's lines.

A field looks like ``**Status**: In Progress``. When the label line has no
colon the value is taken from the very next line::

    **Description**
    Build the login flow
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from functools import lru_cache


@lru_cache(maxsize=64)
def _label_pattern(label: str) -> re.Pattern[str]:
    # **Label**: value, **Label:** value, or a bare **Label**
    return re.compile(rf"^\*\*{re.escape(label)}(:)?\*\*(:)?(.*)$")


def find_label_index(lines: Sequence[str], label: str) -> int | None:
    pattern = _label_pattern(label)
    for index, line in enumerate(lines):
        if pattern.match(line):
            return index
    return None


def extract_field(lines: Sequence[str], label: str) -> str | None:
    """Return the value of the first ``**label**`` field, or ``None`` if absent.

    An inline value that is present but blank yields ``""``.
    """
    pattern = _label_pattern(label)
    for index, line in enumerate(lines):
        match = pattern.match(line)
        if match is None:
            continue
        inner_colon, outer_colon, remainder = match.groups()
        if inner_colon or outer_colon:
            return remainder.strip()
        if index + 1 < len(lines):
            return lines[index + 1].strip()
        return None
    return None


def non_blank(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value.strip()
