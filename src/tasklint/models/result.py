"""Validation issue and result models.

:class:`ValidationError` is an immutable tagged record; every kind has a named
constructor producing its canonical message. :class:`ValidationResult`
aggregates issues and combines associatively: combining preserves the input
order of errors and warnings and is valid only when every input was valid.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field

from tasklint.models.enums import ErrorType, Severity


class ValidationError(BaseModel):
    """A single validation issue.

    Attributes:
        type: Issue kind, callers should branch on this rather than on text.
        message: Human-readable description.
        task_id: Task the issue belongs to, if any.
        line_number: 1-based document line for reference issues, 0-based
            offsets elsewhere; ``None`` when unknown.
        section: Section name the issue is about, if any.
        severity: ``error`` blocks validity, ``warning`` does not.
        context: Structured detail for programmatic consumers.
    """

    type: ErrorType
    message: str
    task_id: str | None = None
    line_number: int | None = None
    section: str | None = None
    severity: Severity = Severity.ERROR
    context: dict[str, Any] = Field(default_factory=dict)

    model_config = {"frozen": True}

    @property
    def is_warning(self) -> bool:
        return self.severity == Severity.WARNING

    def format(self) -> str:
        """Render as ``ERROR (TASK, line N): message``."""
        parts: list[str] = []
        if self.task_id is not None:
            parts.append(self.task_id)
        if self.line_number is not None:
            parts.append(f"line {self.line_number}")
        location = f" ({', '.join(parts)})" if parts else ""
        return f"{self.severity.upper()}{location}: {self.message}"

    # -- ids -----------------------------------------------------------------

    @classmethod
    def invalid_id_format(cls, task_id: str, expected: str, *, subtask: bool = False) -> ValidationError:
        kind = "Subtask" if subtask else "Task"
        return cls(
            type=ErrorType.INVALID_ID_FORMAT,
            message=f"{kind} ID '{task_id}' does not match expected format {expected}",
            task_id=task_id,
            context={"expected": expected, "task_type": "subtask" if subtask else "main"},
        )

    @classmethod
    def invalid_subtask_id(cls, task_id: str, parent_id: str | None) -> ValidationError:
        if parent_id is None:
            message = f"Could not extract parent ID from subtask '{task_id}'"
        else:
            message = f"Subtask '{task_id}' references non-existent parent task '{parent_id}'"
        return cls(
            type=ErrorType.INVALID_SUBTASK_ID,
            message=message,
            task_id=task_id,
            context={"parent_id": parent_id},
        )

    @classmethod
    def duplicate_task_id(cls, task_id: str, count: int, line_number: int | None = None) -> ValidationError:
        return cls(
            type=ErrorType.DUPLICATE_TASK_ID,
            message=f"Duplicate task ID '{task_id}' found {count} times",
            task_id=task_id,
            line_number=line_number,
            context={"duplicate_count": count},
        )

    @classmethod
    def mixed_prefixes(cls, task_id: str, prefixes: Sequence[str]) -> ValidationError:
        return cls(
            type=ErrorType.MIXED_PREFIXES,
            message=f"Multiple task prefixes detected: {', '.join(prefixes)}. Consider using consistent prefixes",
            task_id=task_id,
            severity=Severity.WARNING,
            context={"prefixes": list(prefixes)},
        )

    @classmethod
    def semantic_prefix_mismatch(
        cls, task_id: str, prefix: str, suggested: str, current: str | None
    ) -> ValidationError:
        actual = "has no category assigned" if current is None else f"is categorized as '{current}'"
        return cls(
            type=ErrorType.SEMANTIC_PREFIX_MISMATCH,
            message=(
                f"Task '{task_id}' uses semantic prefix '{prefix}' which suggests category "
                f"'{suggested}', but {actual}"
            ),
            task_id=task_id,
            severity=Severity.WARNING,
            context={"prefix": prefix, "suggested_category": suggested, "current_category": current},
        )

    @classmethod
    def unrecognized_semantic_prefix(cls, task_id: str, prefix: str) -> ValidationError:
        return cls(
            type=ErrorType.UNRECOGNIZED_SEMANTIC_PREFIX,
            message=f"Task '{task_id}' uses prefix '{prefix}' which is not in the semantic prefix map",
            task_id=task_id,
            severity=Severity.WARNING,
            context={"prefix": prefix},
        )

    # -- status and rating ---------------------------------------------------

    @classmethod
    def invalid_status(cls, task_id: str, status: str, valid: Sequence[str]) -> ValidationError:
        return cls(
            type=ErrorType.INVALID_STATUS,
            message=f"Invalid status '{status}' for task '{task_id}'. Valid statuses: {', '.join(valid)}",
            task_id=task_id,
            context={"status": status, "valid_statuses": list(valid)},
        )

    @classmethod
    def invalid_priority(cls, task_id: str, priority: str, valid: Sequence[str]) -> ValidationError:
        return cls(
            type=ErrorType.INVALID_PRIORITY,
            message=f"Invalid priority '{priority}' for task '{task_id}'. Valid priorities: {', '.join(valid)}",
            task_id=task_id,
            context={"priority": priority, "valid_priorities": list(valid)},
        )

    @classmethod
    def missing_subtasks(cls, task_id: str) -> ValidationError:
        return cls(
            type=ErrorType.MISSING_SUBTASKS_FOR_IN_PROGRESS,
            message=f"Task '{task_id}' is 'In Progress' but has no subtasks defined",
            task_id=task_id,
        )

    @classmethod
    def missing_review_rating(cls, task_id: str, line_number: int | None = None) -> ValidationError:
        return cls(
            type=ErrorType.MISSING_REVIEW_RATING,
            message=f"Completed task '{task_id}' is missing a review rating",
            task_id=task_id,
            line_number=line_number,
        )

    @classmethod
    def invalid_review_rating(cls, task_id: str, rating: str, line_number: int | None = None) -> ValidationError:
        return cls(
            type=ErrorType.INVALID_REVIEW_RATING,
            message=(
                f"Invalid review rating '{rating}' for task '{task_id}'. "
                "Expected N.N between 1.0 and 5.0 with optional (partial) suffix"
            ),
            task_id=task_id,
            line_number=line_number,
            context={"rating": rating},
        )

    @classmethod
    def inconsistent_subtask_status(cls, task_id: str, open_subtasks: Sequence[str]) -> ValidationError:
        return cls(
            type=ErrorType.INCONSISTENT_SUBTASK_STATUS,
            message=f"Completed task '{task_id}' has unfinished subtasks: {', '.join(open_subtasks)}",
            task_id=task_id,
            context={"open_subtasks": list(open_subtasks)},
        )

    # -- error handling ------------------------------------------------------

    @classmethod
    def missing_error_handling(
        cls, task_id: str, *, missing_references: Sequence[str] = (), subtask: bool = False
    ) -> ValidationError:
        if missing_references:
            message = f"Task '{task_id}' references undefined error handling: {', '.join(missing_references)}"
        else:
            shorthand = "{{error-handling-subtask}}" if subtask else "{{error-handling}}"
            message = f"Task '{task_id}' is missing an **Error Handling** section or {shorthand} reference"
        return cls(
            type=ErrorType.MISSING_ERROR_HANDLING,
            message=message,
            task_id=task_id,
            section="Error Handling",
            context={"missing_references": list(missing_references)},
        )

    @classmethod
    def incomplete_error_handling(cls, task_id: str, missing: Sequence[str]) -> ValidationError:
        return cls(
            type=ErrorType.INCOMPLETE_ERROR_HANDLING,
            message=f"Task '{task_id}' has incomplete error handling documentation. Missing: {', '.join(missing)}",
            task_id=task_id,
            section="Error Handling",
            context={"missing_sections": list(missing)},
        )

    @classmethod
    def missing_error_implementation(cls, task_id: str) -> ValidationError:
        return cls(
            type=ErrorType.MISSING_ERROR_IMPLEMENTATION,
            message=f"Completed task '{task_id}' is missing an **Error Handling Implementation** section",
            task_id=task_id,
            section="Error Handling Implementation",
        )

    # -- sections ------------------------------------------------------------

    @classmethod
    def missing_section(cls, task_id: str, section: str) -> ValidationError:
        return cls(
            type=ErrorType.MISSING_SECTION,
            message=f"Missing required section '{section}' in task {task_id}",
            task_id=task_id,
            section=section,
        )

    @classmethod
    def missing_completion_sections(cls, task_id: str, missing: Sequence[str]) -> ValidationError:
        return cls(
            type=ErrorType.MISSING_COMPLETION_SECTIONS,
            message=f"Completed task '{task_id}' is missing required completion sections: {', '.join(missing)}",
            task_id=task_id,
            context={"missing_sections": list(missing)},
        )

    # -- subtasks ------------------------------------------------------------

    @classmethod
    def invalid_subtask_status(
        cls, task_id: str, status: str, valid: Sequence[str], line_number: int | None = None
    ) -> ValidationError:
        return cls(
            type=ErrorType.INVALID_SUBTASK_STATUS,
            message=f"Subtask '{task_id}' has invalid status '{status}'. Valid statuses: {', '.join(valid)}",
            task_id=task_id,
            line_number=line_number,
            context={"status": status, "valid_statuses": list(valid)},
        )

    @classmethod
    def missing_subtask_sections(
        cls, task_id: str, missing: Sequence[str], line_number: int | None = None
    ) -> ValidationError:
        return cls(
            type=ErrorType.MISSING_SUBTASK_SECTIONS,
            message=f"Subtask '{task_id}' is missing required sections: {', '.join(missing)}",
            task_id=task_id,
            line_number=line_number,
            context={"missing_sections": list(missing)},
        )

    @classmethod
    def inconsistent_subtask_prefix(
        cls,
        task_id: str,
        prefix: str | None,
        parent_id: str,
        parent_prefix: str | None,
        line_number: int | None = None,
    ) -> ValidationError:
        return cls(
            type=ErrorType.INCONSISTENT_SUBTASK_PREFIX,
            message=(
                f"Subtask '{task_id}' has prefix '{prefix}' which doesn't match "
                f"parent task '{parent_id}' prefix '{parent_prefix}'"
            ),
            task_id=task_id,
            line_number=line_number,
            context={"prefix": prefix, "parent_id": parent_id, "parent_prefix": parent_prefix},
        )

    # -- dependencies --------------------------------------------------------

    @classmethod
    def missing_dependencies_section(cls, task_id: str) -> ValidationError:
        return cls(
            type=ErrorType.MISSING_DEPENDENCIES_SECTION,
            message=f"Task '{task_id}' is missing a **Dependencies** section or {{{{def-no-dependencies}}}} reference",
            task_id=task_id,
            section="Dependencies",
        )

    @classmethod
    def invalid_dependency_reference(cls, task_id: str, missing_ids: Sequence[str]) -> ValidationError:
        return cls(
            type=ErrorType.INVALID_DEPENDENCY_REFERENCE,
            message=f"Task '{task_id}' references non-existent dependencies: {', '.join(missing_ids)}",
            task_id=task_id,
            context={"invalid_dependencies": list(missing_ids)},
        )

    @classmethod
    def missing_dependency_reference(cls, task_id: str, names: Sequence[str]) -> ValidationError:
        return cls(
            type=ErrorType.MISSING_DEPENDENCY_REFERENCE,
            message=f"Task '{task_id}' references undefined dependency definitions: {', '.join(names)}",
            task_id=task_id,
            context={"missing_references": list(names)},
        )

    @classmethod
    def circular_dependency(cls, task_id: str, path: Sequence[str]) -> ValidationError:
        if len(path) <= 2 and path[0] == path[-1]:
            message = f"Task '{task_id}' has a circular dependency on itself"
        else:
            message = f"Circular dependency detected: {' -> '.join(path)}"
        return cls(
            type=ErrorType.CIRCULAR_DEPENDENCY,
            message=message,
            task_id=task_id,
            context={"cycle_path": list(path)},
        )

    # -- categories ----------------------------------------------------------

    @classmethod
    def invalid_category_range(
        cls, task_id: str, number: int, ranges: dict[str, tuple[int, int]]
    ) -> ValidationError:
        available = ", ".join(f"{name} ({low}-{high})" for name, (low, high) in ranges.items())
        return cls(
            type=ErrorType.INVALID_CATEGORY_RANGE,
            message=f"Task '{task_id}' number {number} doesn't fit any category range. Available ranges: {available}",
            task_id=task_id,
            context={"task_number": number},
        )

    @classmethod
    def invalid_id_for_categorization(cls, task_id: str) -> ValidationError:
        return cls(
            type=ErrorType.INVALID_ID_FOR_CATEGORIZATION,
            message=f"Cannot categorize task '{task_id}': no task number could be extracted from the ID",
            task_id=task_id,
        )

    @classmethod
    def missing_category_sections(cls, task_id: str, category: str, missing: Sequence[str]) -> ValidationError:
        return cls(
            type=ErrorType.MISSING_CATEGORY_SECTIONS,
            message=f"Task '{task_id}' ({category} category) is missing required sections: {', '.join(missing)}",
            task_id=task_id,
            context={"category": category, "missing_sections": list(missing)},
        )

    # -- kpis ----------------------------------------------------------------

    @classmethod
    def missing_kpi_section(cls, task_id: str) -> ValidationError:
        return cls(
            type=ErrorType.MISSING_KPI_SECTION,
            message=f"Task '{task_id}' is missing a **Code Quality KPIs** section or KPI reference",
            task_id=task_id,
            section="Code Quality KPIs",
        )

    @classmethod
    def missing_kpi_metrics(cls, task_id: str, metrics: Sequence[str]) -> ValidationError:
        return cls(
            type=ErrorType.MISSING_KPI_METRICS,
            message=f"Task '{task_id}' is missing required KPI metrics: {', '.join(metrics)}",
            task_id=task_id,
            section="Code Quality KPIs",
            context={"missing_metrics": list(metrics)},
        )

    @classmethod
    def missing_kpi_reference(cls, task_id: str, names: Sequence[str]) -> ValidationError:
        return cls(
            type=ErrorType.MISSING_KPI_REFERENCE,
            message=f"Task '{task_id}' references undefined KPI definitions: {', '.join(names)}",
            task_id=task_id,
            context={"missing_references": list(names)},
        )

    @classmethod
    def invalid_kpi_value(
        cls,
        task_id: str,
        metric: str,
        value: float,
        limit: float,
        *,
        minimum: bool = False,
        complexity: str | None = None,
    ) -> ValidationError:
        if minimum:
            message = f"Task '{task_id}' has {metric} below minimum: {value} < {limit}"
        else:
            message = f"Task '{task_id}' exceeds {metric} limit: {value} > {limit}"
        return cls(
            type=ErrorType.INVALID_KPI_VALUE,
            message=message,
            task_id=task_id,
            context={"metric": metric, "value": value, "limit": limit, "complexity": complexity},
        )

    # -- references ----------------------------------------------------------

    @classmethod
    def missing_reference(
        cls, name: str, line_number: int, usage_lines: Sequence[int] = ()
    ) -> ValidationError:
        return cls(
            type=ErrorType.MISSING_REFERENCE,
            message=f"Missing reference definition: '{{{{{name}}}}}'",
            line_number=line_number,
            context={"reference_name": name, "usage_lines": list(usage_lines) or [line_number]},
        )


class ValidationResult(BaseModel):
    """Aggregate outcome of one or more validation checks."""

    valid: bool = True
    errors: list[ValidationError] = Field(default_factory=list)
    warnings: list[ValidationError] = Field(default_factory=list)
    task_count: int = 0
    validated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    model_config = {"frozen": True}

    @classmethod
    def success(cls, warnings: Iterable[ValidationError] = (), task_count: int = 0) -> ValidationResult:
        return cls(valid=True, warnings=list(warnings), task_count=task_count)

    @classmethod
    def failure(
        cls, errors: ValidationError | Iterable[ValidationError], warnings: Iterable[ValidationError] = ()
    ) -> ValidationResult:
        error_list = [errors] if isinstance(errors, ValidationError) else list(errors)
        return cls(valid=not error_list, errors=error_list, warnings=list(warnings))

    @classmethod
    def from_issues(cls, issues: Iterable[ValidationError]) -> ValidationResult:
        """Split a mixed list of issues by severity."""
        errors: list[ValidationError] = []
        warnings: list[ValidationError] = []
        for issue in issues:
            (warnings if issue.is_warning else errors).append(issue)
        return cls(valid=not errors, errors=errors, warnings=warnings)

    @classmethod
    def combine(cls, results: Iterable[ValidationResult]) -> ValidationResult:
        """Fold results in order. ``combine([])`` is a vacuous success."""
        collected = list(results)
        if not collected:
            return cls.success()
        if len(collected) == 1:
            return collected[0]
        errors = [error for result in collected for error in result.errors]
        return cls(
            valid=all(result.valid for result in collected) and not errors,
            errors=errors,
            warnings=[warning for result in collected for warning in result.warnings],
            task_count=sum(result.task_count for result in collected),
        )

    def add_error(self, error: ValidationError) -> ValidationResult:
        return self.model_copy(update={"valid": False, "errors": [*self.errors, error]})

    def add_warning(self, warning: ValidationError) -> ValidationResult:
        return self.model_copy(update={"warnings": [*self.warnings, warning]})

    def with_task_count(self, task_count: int) -> ValidationResult:
        return self.model_copy(update={"task_count": task_count})

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        return len(self.warnings)

    @property
    def issue_count(self) -> int:
        return self.error_count + self.warning_count

    def has_issues(self) -> bool:
        return self.issue_count > 0

    def group_errors_by_type(self) -> dict[ErrorType, list[ValidationError]]:
        grouped: dict[ErrorType, list[ValidationError]] = {}
        for error in self.errors:
            grouped.setdefault(error.type, []).append(error)
        return grouped

    def errors_for_task(self, task_id: str) -> list[ValidationError]:
        return [error for error in self.errors if error.task_id == task_id]

    def has_error_type(self, error_type: ErrorType | str) -> bool:
        return any(error.type == error_type for error in self.errors)

    def has_warning_type(self, error_type: ErrorType | str) -> bool:
        return any(warning.type == error_type for warning in self.warnings)

    def format(self) -> str:
        from tasklint.rendering.text import format_result

        return format_result(self)
