"""Code quality KPI checks.

A task documents its KPIs in a block such as::

    **Code Quality KPIs**
    - Functions per module: 3
    - Lines per function: 12
    - Call depth: 2

either inline or in a referenced definition (any reference whose name
contains ``kpi``/``kpis``). Ceilings are scaled by the task's complexity:
the explicit ``**Complexity Assessment**: Complex`` marker wins, otherwise
the policy's per-category default applies.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from tasklint.config.policy import Policy
from tasklint.models.enums import Complexity
from tasklint.models.result import ValidationError, ValidationResult
from tasklint.models.task import Task
from tasklint.validators.base import ValidationContext, Validator
from tasklint.validators.content import has_section, own_lines, section_block, used_references

KPI_SECTION = "Code Quality KPIs"
KPI_REFERENCE = re.compile(r"kpis?", re.IGNORECASE)
COMPLEXITY_MARKER = re.compile(r"\*\*Complexity Assessment:?\*\*:?\s*(Simple|Medium|Complex|Critical)", re.IGNORECASE)

MULTIPLIERS: dict[Complexity, float] = {
    Complexity.SIMPLE: 1.0,
    Complexity.MEDIUM: 1.5,
    Complexity.COMPLEX: 2.0,
    Complexity.CRITICAL: 3.0,
}


def scaled_limit(base: float, complexity: Complexity) -> int:
    """Ceiling for ``complexity``, rounded half away from zero."""
    return math.floor(base * MULTIPLIERS[complexity] + 0.5)


@dataclass(frozen=True)
class Metric:
    """One KPI: how to find it and which policy field bounds it."""

    key: str
    label: str
    pattern: re.Pattern[str]
    policy_field: str
    required: bool = False
    scaled: bool = True
    minimum: bool = False


def _metric(words: str) -> re.Pattern[str]:
    return re.compile(rf"{words}\s*:\s*(\d+(?:\.\d+)?)", re.IGNORECASE)


METRICS: tuple[Metric, ...] = (
    Metric(
        "functions_per_module",
        "Functions per module",
        _metric(r"functions?\s+per\s+module"),
        "max_functions_per_module",
        required=True,
    ),
    Metric(
        "lines_per_function",
        "Lines per function",
        _metric(r"lines?\s+per\s+function"),
        "max_lines_per_function",
        required=True,
    ),
    Metric("call_depth", "Call depth", _metric(r"call\s+depth"), "max_call_depth", required=True),
    Metric(
        "cyclomatic_complexity",
        "Cyclomatic complexity",
        _metric(r"cyclomatic\s+complexity"),
        "max_cyclomatic_complexity",
    ),
    Metric(
        "pattern_match_depth",
        "Pattern match depth",
        _metric(r"pattern\s+match(?:ing)?\s+depth"),
        "max_pattern_match_depth",
    ),
    Metric(
        "static_analysis_warnings",
        "Static analysis warnings",
        _metric(r"static\s+analysis\s+warnings"),
        "max_static_analysis_warnings",
        scaled=False,
    ),
    Metric(
        "lint_score",
        "Lint score",
        _metric(r"lint\s+score"),
        "min_lint_score",
        scaled=False,
        minimum=True,
    ),
    Metric(
        "state_complexity",
        "State complexity",
        _metric(r"state\s+complexity"),
        "max_state_complexity",
    ),
    Metric(
        "context_boundaries",
        "Context boundaries",
        _metric(r"context\s+boundaries"),
        "max_context_boundaries",
    ),
    Metric(
        "query_complexity",
        "Query complexity",
        _metric(r"query\s+complexity"),
        "max_query_complexity",
    ),
)

LIMIT_OPTIONS = ("max_functions_per_module", "max_lines_per_function", "max_call_depth")


def extract_metrics(lines: Sequence[str]) -> dict[str, float]:
    """Map metric keys to the first value found for each in ``lines``."""
    values: dict[str, float] = {}
    for line in lines:
        for metric in METRICS:
            if metric.key in values:
                continue
            match = metric.pattern.search(line)
            if match:
                values[metric.key] = float(match.group(1))
    return values


def task_complexity(task: Task, policy: Policy) -> Complexity:
    """Explicit complexity marker, else the category default, else simple."""
    for line in own_lines(task):
        match = COMPLEXITY_MARKER.search(line)
        if match:
            return Complexity(match.group(1).lower())
    if task.category is not None:
        return policy.category_complexity.get(task.category, Complexity.SIMPLE)
    return Complexity.SIMPLE


def kpi_lines(task: Task, references: Mapping[str, Sequence[str]]) -> tuple[list[str] | None, list[str]]:
    """Collect KPI lines from the inline block and referenced definitions.

    Returns:
        ``(lines, undefined)``: ``lines`` is ``None`` when the task has
        neither an inline block nor a KPI reference; ``undefined`` lists KPI
        reference names with no definition.
    """
    lines = own_lines(task)
    inline = section_block(lines, KPI_SECTION)
    names = [name for name in used_references(lines) if KPI_REFERENCE.search(name)]
    if inline is None and not names:
        return None, []

    collected = list(inline or [])
    undefined: list[str] = []
    for name in names:
        block = references.get(name)
        if block is None:
            undefined.append(name)
            continue
        if has_section(block, KPI_SECTION):
            collected.extend(section_block(block, KPI_SECTION) or [])
        else:
            collected.extend(block)
    return collected, undefined


def _number(value: float) -> float | int:
    return int(value) if float(value).is_integer() else value


class KpiValidator(Validator):
    """Requires a KPI block with the three core metrics within their ceilings.

    Options:
        max_functions_per_module: Override the policy ceiling.
        max_lines_per_function: Override the policy ceiling.
        max_call_depth: Override the policy ceiling.
    """

    name = "kpi"

    def priority(self) -> int:
        return 30

    def validate(self, task: Task, context: ValidationContext) -> ValidationResult:
        lines, undefined = kpi_lines(task, context.references)
        if lines is None:
            return ValidationResult.failure(ValidationError.missing_kpi_section(task.id))

        values = extract_metrics(lines)
        if undefined and not values:
            return ValidationResult.failure(ValidationError.missing_kpi_reference(task.id, undefined))

        missing = [metric.label for metric in METRICS if metric.required and metric.key not in values]
        if missing:
            return ValidationResult.failure(ValidationError.missing_kpi_metrics(task.id, missing))

        complexity = task_complexity(task, context.policy)
        issues = [
            issue
            for metric in METRICS
            if metric.key in values
            for issue in self._check_value(task, metric, values[metric.key], complexity, context)
        ]
        return ValidationResult.from_issues(issues)

    def _limit(self, metric: Metric, context: ValidationContext) -> float:
        base = getattr(context.policy, metric.policy_field)
        if metric.policy_field in LIMIT_OPTIONS:
            base = context.option(metric.policy_field, base)
        return float(base)

    def _check_value(
        self, task: Task, metric: Metric, value: float, complexity: Complexity, context: ValidationContext
    ) -> list[ValidationError]:
        limit = self._limit(metric, context)
        if metric.minimum:
            if value < limit:
                return [
                    ValidationError.invalid_kpi_value(
                        task.id, metric.label, _number(value), _number(limit), minimum=True
                    )
                ]
            return []

        if metric.scaled:
            limit = scaled_limit(limit, complexity)
        if value > limit:
            return [
                ValidationError.invalid_kpi_value(
                    task.id, metric.label, _number(value), _number(limit), complexity=complexity.value
                )
            ]
        return []
