"""Human-readable rendering of validation results."""

from tasklint.rendering.text import format_issues, format_result

__all__ = ["format_issues", "format_result"]
