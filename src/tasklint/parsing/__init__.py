"""Markdown parsing and reference closure checking."""

from tasklint.parsing.markdown import parse, parse_file, try_parse
from tasklint.parsing.references import (
    expand_reference,
    find_reference_usages,
    reference_stats,
    validate_references,
)

__all__ = [
    "expand_reference",
    "find_reference_usages",
    "parse",
    "parse_file",
    "reference_stats",
    "try_parse",
    "validate_references",
]
