"""Public API surface for tasklint."""

__version__ = "0.1.0"

from tasklint.config import Policy, load_policy
from tasklint.engine import (
    NullValidationProgress,
    Pipeline,
    ValidationEngine,
    ValidationProgress,
    build_validators,
    default_validators,
    ensure_valid,
    minimal_validators,
    strict_validators,
    validate,
    validate_file,
    validate_text,
)
from tasklint.exceptions import (
    ConfigError,
    DocumentLoadError,
    ParseError,
    TaskLintError,
    TaskListValidationError,
)
from tasklint.models import (
    Complexity,
    ErrorType,
    Severity,
    SubtaskFormat,
    Task,
    TaskList,
    TaskType,
    ValidationError,
    ValidationResult,
)
from tasklint.parsing import parse, parse_file, reference_stats, try_parse, validate_references
from tasklint.rendering import format_result
from tasklint.templates import render_template
from tasklint.validators import ValidationContext, Validator

__all__ = [
    "Complexity",
    "ConfigError",
    "DocumentLoadError",
    "ErrorType",
    "NullValidationProgress",
    "ParseError",
    "Pipeline",
    "Policy",
    "Severity",
    "SubtaskFormat",
    "Task",
    "TaskLintError",
    "TaskList",
    "TaskListValidationError",
    "TaskType",
    "ValidationContext",
    "ValidationEngine",
    "ValidationError",
    "ValidationProgress",
    "ValidationResult",
    "Validator",
    "__version__",
    "build_validators",
    "default_validators",
    "ensure_valid",
    "format_result",
    "load_policy",
    "minimal_validators",
    "parse",
    "parse_file",
    "reference_stats",
    "render_template",
    "strict_validators",
    "try_parse",
    "validate",
    "validate_file",
    "validate_references",
    "validate_text",
]
