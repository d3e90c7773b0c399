"""Custom exception hierarchy for tasklint.

All tasklint exceptions inherit from :class:`TaskLintError`, making it easy
to catch any library error with a single ``except`` clause while still allowing
callers to handle specific failure modes.

Malformed task content is never an exception: validators report it as
:class:`~tasklint.models.result.ValidationError` records instead.
"""

from __future__ import annotations


class TaskLintError(Exception):
    """Base exception for all tasklint errors."""


class ConfigError(TaskLintError):
    """Raised when a policy file cannot be loaded or fails shape validation."""


class DocumentLoadError(TaskLintError):
    """Raised when a task list document cannot be read from disk."""


class ParseError(TaskLintError):
    """Raised when a document contains no tasks at all."""


class TaskListValidationError(TaskLintError):
    """Raised by :func:`tasklint.engine.ensure_valid` when a task list is invalid.

    Attributes:
        errors: Formatted error lines, one per blocking issue.
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        joined = "\n".join(f"  - {e}" for e in errors)
        super().__init__(f"Task list validation failed:\n{joined}")
