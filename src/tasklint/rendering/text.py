"""Plain-text summary of a validation result."""

from __future__ import annotations

from collections.abc import Iterable

from tasklint.models.result import ValidationError, ValidationResult


def format_issues(issues: Iterable[ValidationError]) -> str:
    return "\n".join(issue.format() for issue in issues)


def format_result(result: ValidationResult) -> str:
    """Render the pass/fail headline followed by every error and warning."""
    if result.valid and not result.warnings:
        return f"✓ TaskList validation passed! ({result.task_count} tasks validated)"

    if result.valid:
        return (
            f"✓ TaskList validation passed with {result.warning_count} warning(s)! "
            f"({result.task_count} tasks validated)\n\nWarnings:\n{format_issues(result.warnings)}"
        )

    headline = f"✗ TaskList validation failed with {result.error_count} error(s)"
    if result.warnings:
        headline += f" and {result.warning_count} warning(s)"
    sections = [f"{headline} ({result.task_count} tasks processed)", f"Errors:\n{format_issues(result.errors)}"]
    if result.warnings:
        sections.append(f"Warnings:\n{format_issues(result.warnings)}")
    return "\n\n".join(sections)
