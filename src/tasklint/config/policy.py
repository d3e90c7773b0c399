"""Validation policy: every tunable parameter the parser and validators read.

:class:`Policy` is built once (from defaults or a config file via
:func:`tasklint.config.loader.load_policy`) and passed explicitly into
``parse`` and ``validate``. Each field carries its own shape rule, so a
constructed policy is always well-formed.
"""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, Field, field_validator

from tasklint.models.enums import Complexity

DEFAULT_STATUSES = ["Planned", "In Progress", "Review", "Completed", "Blocked"]
DEFAULT_PRIORITIES = ["Critical", "High", "Medium", "Low"]
DEFAULT_ID_REGEX = r"^[A-Z]{2,4}\d{3,4}(-\d+|[a-z])?$"
DEFAULT_RATING_REGEX = r"^([1-5](\.\d)?)\s*(\(partial\))?$"

DEFAULT_CATEGORY_RANGES: dict[str, tuple[int, int]] = {
    "stateful_worker": (1, 99),
    "web_layer": (100, 199),
    "business_logic": (200, 299),
    "data_layer": (300, 399),
    "infrastructure": (400, 499),
    "testing": (500, 599),
}

DEFAULT_CATEGORY_SECTIONS: dict[str, list[str]] = {
    "stateful_worker": ["Process Design", "State Management", "Supervision Strategy"],
    "web_layer": ["Route Design", "Context Integration", "Template/Component Strategy"],
    "business_logic": ["API Design", "Data Access", "Validation Strategy"],
    "data_layer": ["Schema Design", "Migration Strategy", "Query Optimization"],
    "infrastructure": ["Release Configuration", "Environment Variables", "Deployment Strategy"],
    "testing": ["Test Strategy", "Coverage Requirements"],
}

DEFAULT_CATEGORY_COMPLEXITY: dict[str, Complexity] = {
    "stateful_worker": Complexity.MEDIUM,
    "web_layer": Complexity.SIMPLE,
    "business_logic": Complexity.MEDIUM,
    "data_layer": Complexity.SIMPLE,
    "infrastructure": Complexity.COMPLEX,
    "testing": Complexity.COMPLEX,
}

DEFAULT_SEMANTIC_PREFIXES: dict[str, str] = {
    **dict.fromkeys(["OTP", "GEN", "SUP", "APP"], "stateful_worker"),
    **dict.fromkeys(["PHX", "WEB", "LV", "LVC"], "web_layer"),
    **dict.fromkeys(["CTX", "BIZ", "DOM"], "business_logic"),
    **dict.fromkeys(["DB", "ECT", "MIG", "SCH"], "data_layer"),
    **dict.fromkeys(["INF", "DEP", "ENV", "REL"], "infrastructure"),
    **dict.fromkeys(["TST", "TES", "INT", "E2E"], "testing"),
}


def _positive(value: int) -> int:
    if value <= 0:
        raise ValueError("must be a positive integer")
    return value


class Policy(BaseModel):
    """Named validation parameters with defaults.

    Attributes:
        valid_statuses: Accepted status labels.
        valid_priorities: Accepted priority labels.
        id_regex: Grammar for task and subtask ids.
        rating_regex: Grammar for review ratings.
        max_functions_per_module: Functions-per-module KPI ceiling.
        max_lines_per_function: Lines-per-function KPI ceiling.
        max_call_depth: Call-depth KPI ceiling.
        max_cyclomatic_complexity: Optional KPI ceiling.
        max_pattern_match_depth: Optional KPI ceiling.
        max_static_analysis_warnings: Optional KPI ceiling, never scaled.
        min_lint_score: Optional KPI minimum, never scaled.
        max_state_complexity: Optional KPI ceiling.
        max_context_boundaries: Optional KPI ceiling.
        max_query_complexity: Optional KPI ceiling.
        category_ranges: Category name to inclusive ``(min, max)`` id-number range.
        category_sections: Category name to required section names.
        enforce_category_sections: Whether CategoryValidator checks sections.
        category_complexity: Complexity assumed per category when a task
            declares none.
        semantic_prefixes: Id prefix to the category it implies.
        enable_semantic_prefixes: Whether IdValidator checks prefixes against
            ``semantic_prefixes``.
    """

    valid_statuses: list[str] = Field(default_factory=lambda: list(DEFAULT_STATUSES))
    valid_priorities: list[str] = Field(default_factory=lambda: list(DEFAULT_PRIORITIES))
    id_regex: re.Pattern[str] = re.compile(DEFAULT_ID_REGEX)
    rating_regex: re.Pattern[str] = re.compile(DEFAULT_RATING_REGEX)
    max_functions_per_module: int = 8
    max_lines_per_function: int = 15
    max_call_depth: int = 3
    max_cyclomatic_complexity: int = 10
    max_pattern_match_depth: int = 4
    max_static_analysis_warnings: int = 0
    min_lint_score: float = 8.0
    max_state_complexity: int = 5
    max_context_boundaries: int = 3
    max_query_complexity: int = 4
    category_ranges: dict[str, tuple[int, int]] = Field(default_factory=lambda: dict(DEFAULT_CATEGORY_RANGES))
    category_sections: dict[str, list[str]] = Field(
        default_factory=lambda: {name: list(sections) for name, sections in DEFAULT_CATEGORY_SECTIONS.items()}
    )
    enforce_category_sections: bool = True
    category_complexity: dict[str, Complexity] = Field(
        default_factory=lambda: dict(DEFAULT_CATEGORY_COMPLEXITY)
    )
    semantic_prefixes: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_SEMANTIC_PREFIXES))
    enable_semantic_prefixes: bool = False

    model_config = {"frozen": True, "extra": "forbid"}

    @field_validator("valid_statuses", "valid_priorities")
    @classmethod
    def _non_empty_strings(cls, value: list[str]) -> list[str]:
        if not value or any(not item.strip() for item in value):
            raise ValueError("must be a non-empty list of non-blank strings")
        return value

    @field_validator(
        "max_functions_per_module",
        "max_lines_per_function",
        "max_call_depth",
        "max_cyclomatic_complexity",
        "max_pattern_match_depth",
        "max_state_complexity",
        "max_context_boundaries",
        "max_query_complexity",
    )
    @classmethod
    def _positive_limits(cls, value: int) -> int:
        return _positive(value)

    @field_validator("max_static_analysis_warnings")
    @classmethod
    def _non_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError("must be a non-negative integer")
        return value

    @field_validator("min_lint_score")
    @classmethod
    def _score_range(cls, value: float) -> float:
        if not 0.0 <= value <= 10.0:
            raise ValueError("must be a number between 0.0 and 10.0")
        return value

    @field_validator("category_ranges")
    @classmethod
    def _ordered_ranges(cls, value: dict[str, tuple[int, int]]) -> dict[str, tuple[int, int]]:
        for name, (low, high) in value.items():
            if low > high:
                raise ValueError(f"range for '{name}' must satisfy min <= max, got [{low}, {high}]")
        return value

    @field_validator("category_sections")
    @classmethod
    def _bare_section_names(cls, value: dict[str, list[str]]) -> dict[str, list[str]]:
        return {name: [section.strip().strip("*").strip() for section in sections] for name, sections in value.items()}

    def category_for_number(self, number: int) -> str | None:
        """Return the first category whose range contains ``number``."""
        for name, (low, high) in self.category_ranges.items():
            if low <= number <= high:
                return name
        return None

    def sections_for_category(self, category: str) -> list[str]:
        return self.category_sections.get(category, [])

    def with_overrides(self, **overrides: Any) -> Policy:
        """Return a re-validated copy with ``overrides`` applied."""
        return Policy.model_validate({**self.model_dump(), **overrides})
