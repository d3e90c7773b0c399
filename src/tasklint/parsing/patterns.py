"""Compiled line grammars for the task list convention.

Every pattern is compiled once at import time; the policy-dependent grammars
(``id_regex``, ``rating_regex``) are compiled by :class:`tasklint.config.Policy`.
"""

from __future__ import annotations

import re

INVALID_FORMAT = "INVALID_FORMAT"
"""Sentinel id for a subtask whose marker carries no recognizable id."""

CURRENT_TASKS_HEADER = "## Current Tasks"
COMPLETED_TASKS_HEADER = "## Completed Tasks"

# Task header ids accept dash-containing prefixes such as PROJ-0001.
TASK_HEADER = re.compile(r"^### ([A-Z-]{2,9}\d{3,4}):")
SECTION_BOUNDARY = re.compile(r"^#{1,3}\s")

REFERENCE_DEFINITION = re.compile(r"^## #?\{\{([^}]+)\}\}\s*$")
REFERENCE_USAGE = re.compile(r"\{\{([^}]+)\}\}")

TABLE_SEPARATOR = re.compile(r"^[|\-:\s]+$")

NUMBERED_SUBTASK = re.compile(r"^#### \d+\.")
NUMBERED_SUBTASK_ID = re.compile(r"\(([A-Z]{2,4}\d{3,4}-\d+)\)")
NUMBERED_SUBTASK_DESCRIPTION = re.compile(r"^#### \d+\.\s*(.+?)(?:\s*\([A-Z]{2,4}\d{3,4}-\d+\))?$")

CHECKBOX_SUBTASK = re.compile(r"^- \[([ xX])\]")
CHECKBOX_TRAILING_ID = re.compile(r"\[([A-Z]{2,4}\d{3,4}[a-z]?)\]$")
CHECKBOX_BOLD_ID = re.compile(r"\*\*([A-Z]{2,4}\d{3,4}[a-z]?)\*\*")
CHECKBOX_PREFIX = re.compile(r"^- \[[ xX]\]\s*")
CHECKBOX_TRAILING_ID_STRIP = re.compile(r"\s*\[[A-Z]{2,4}\d{3,4}[a-z]?\]$")
CHECKBOX_BOLD_ID_STRIP = re.compile(r"\*\*[A-Z]{2,4}\d{3,4}[a-z]?\*\*:?\s*")

# Subtask grammars. A dash inside the prefix (PROJ-0001) is not a subtask.
NUMBERED_SUBTASK_ID_SHAPE = re.compile(r"^([A-Z]{2,4}\d{3,4})-\d+$")
LETTERED_SUBTASK_ID_SHAPE = re.compile(r"^([A-Z]{2,4}\d{3,4})[a-z]$")
DASHED_NUMBERED_SUBTASK_ID_SHAPE = re.compile(r"^([A-Z]{2,4}-\d{3,4})-\d+$")
DASHED_MAIN_ID_SHAPE = re.compile(r"^[A-Z]{2,4}-\d{3,4}$")

PREFIX = re.compile(r"^([A-Z]{2,4})-?\d")
TASK_NUMBER = re.compile(r"^[A-Z]{2,4}-?(\d{3,4})")

BOLD_LABEL = re.compile(r"^\*\*[^*]+\*\*")
