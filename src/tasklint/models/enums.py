"""Enumerated types used across tasklint."""

from __future__ import annotations

from enum import StrEnum


class TaskType(StrEnum):
    """Discriminator for main tasks and their subtasks."""

    MAIN = "main"
    SUBTASK = "subtask"


class SubtaskFormat(StrEnum):
    """The two textual forms a subtask can take."""

    NUMBERED = "numbered"
    CHECKBOX = "checkbox"


class Severity(StrEnum):
    """Errors block validity, warnings are reported only."""

    ERROR = "error"
    WARNING = "warning"


class Complexity(StrEnum):
    """Declared or inferred implementation complexity of a task."""

    SIMPLE = "simple"
    MEDIUM = "medium"
    COMPLEX = "complex"
    CRITICAL = "critical"


class ErrorType(StrEnum):
    """Closed set of validation issue kinds."""

    # ids
    INVALID_ID_FORMAT = "invalid_id_format"
    INVALID_SUBTASK_ID = "invalid_subtask_id"
    DUPLICATE_TASK_ID = "duplicate_task_id"
    MIXED_PREFIXES = "mixed_prefixes"
    SEMANTIC_PREFIX_MISMATCH = "semantic_prefix_mismatch"
    UNRECOGNIZED_SEMANTIC_PREFIX = "unrecognized_semantic_prefix"

    # status and rating
    INVALID_STATUS = "invalid_status"
    INVALID_PRIORITY = "invalid_priority"
    MISSING_SUBTASKS_FOR_IN_PROGRESS = "missing_subtasks_for_in_progress"
    MISSING_REVIEW_RATING = "missing_review_rating"
    INVALID_REVIEW_RATING = "invalid_review_rating"
    INCONSISTENT_SUBTASK_STATUS = "inconsistent_subtask_status"

    # error handling
    MISSING_ERROR_HANDLING = "missing_error_handling"
    INCOMPLETE_ERROR_HANDLING = "incomplete_error_handling"
    MISSING_ERROR_IMPLEMENTATION = "missing_error_implementation"

    # sections
    MISSING_SECTION = "missing_section"
    MISSING_COMPLETION_SECTIONS = "missing_completion_sections"

    # subtasks
    INVALID_SUBTASK_STATUS = "invalid_subtask_status"
    MISSING_SUBTASK_SECTIONS = "missing_subtask_sections"
    INCONSISTENT_SUBTASK_PREFIX = "inconsistent_subtask_prefix"

    # dependencies
    MISSING_DEPENDENCIES_SECTION = "missing_dependencies_section"
    INVALID_DEPENDENCY_REFERENCE = "invalid_dependency_reference"
    MISSING_DEPENDENCY_REFERENCE = "missing_dependency_reference"
    CIRCULAR_DEPENDENCY = "circular_dependency"

    # categories
    INVALID_CATEGORY_RANGE = "invalid_category_range"
    INVALID_ID_FOR_CATEGORIZATION = "invalid_id_for_categorization"
    MISSING_CATEGORY_SECTIONS = "missing_category_sections"

    # kpis
    MISSING_KPI_SECTION = "missing_kpi_section"
    MISSING_KPI_METRICS = "missing_kpi_metrics"
    MISSING_KPI_REFERENCE = "missing_kpi_reference"
    INVALID_KPI_VALUE = "invalid_kpi_value"

    # references
    MISSING_REFERENCE = "missing_reference"
