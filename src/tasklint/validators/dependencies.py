"""Dependency declaration, existence and cycle checks.

A task declares its dependencies as::

    **Dependencies**
    SSH0002, SSH0003

``None`` (or an empty value) means no dependencies, and so does a
``{{def-no-dependencies}}`` reference in place of the section.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence

from tasklint.models.result import ValidationError, ValidationResult
from tasklint.models.task import Task
from tasklint.parsing import patterns
from tasklint.parsing.fields import extract_field
from tasklint.validators.base import ValidationContext, Validator
from tasklint.validators.content import has_section, own_lines, used_references

logger = logging.getLogger(__name__)

DEPENDENCY_REFERENCE = re.compile(r"^(def-no-dependencies|no-dependencies|DEF:no-dependencies)$")
_NO_DEPENDENCIES = {"", "none", "n/a", "-"}


def parse_dependencies(value: str | None) -> list[str]:
    """Split a Dependencies value into ids; placeholders and ``None`` yield nothing."""
    if value is None:
        return []
    text = patterns.REFERENCE_USAGE.sub("", value).strip()
    if text.lower() in _NO_DEPENDENCIES or text.startswith("**"):
        return []
    return [item.strip(" `") for item in text.split(",") if item.strip(" `")]


def declared_dependencies(task: Task, references: Mapping[str, Sequence[str]]) -> list[str]:
    """Dependency ids declared by ``task``, inline or in a referenced block."""
    lines = own_lines(task)
    inline = parse_dependencies(extract_field(lines, "Dependencies"))
    if inline:
        return inline
    for name in used_references(lines):
        if DEPENDENCY_REFERENCE.match(name):
            continue
        block = references.get(name)
        if block is not None and has_section(block, "Dependencies"):
            return parse_dependencies(extract_field(block, "Dependencies"))
    return []


def find_cycle(start: str, graph: Mapping[str, Sequence[str]]) -> list[str] | None:
    """Return a dependency path from ``start`` back to itself, or ``None``.

    The returned path begins and ends with ``start``, e.g.
    ``["A", "B", "C", "A"]``.
    """
    stack: list[tuple[str, list[str]]] = [(start, [start])]
    visited: set[str] = set()
    while stack:
        node, path = stack.pop()
        for dependency in graph.get(node, ()):
            if dependency == start:
                return [*path, start]
            if dependency not in visited:
                visited.add(dependency)
                stack.append((dependency, [*path, dependency]))
    return None


class DependencyValidator(Validator):
    """Requires a Dependencies declaration and checks the declared graph.

    Options:
        validate_existence: Check that every dependency id exists (default
            ``True``).
    """

    name = "dependency"

    def priority(self) -> int:
        return 40

    def validate(self, task: Task, context: ValidationContext) -> ValidationResult:
        references = context.references
        lines = own_lines(task)
        dependency_refs = [name for name in used_references(lines) if DEPENDENCY_REFERENCE.match(name)]

        if not has_section(lines, "Dependencies") and not dependency_refs:
            return ValidationResult.failure(ValidationError.missing_dependencies_section(task.id))

        issues: list[ValidationError] = []
        undefined = [name for name in dependency_refs if name not in references]
        if undefined:
            issues.append(ValidationError.missing_dependency_reference(task.id, undefined))

        dependencies = declared_dependencies(task, references)
        if context.option("validate_existence", True):
            known = set(context.task_list.task_ids())
            unknown = [dependency for dependency in dependencies if dependency not in known]
            if unknown:
                issues.append(ValidationError.invalid_dependency_reference(task.id, unknown))

        if task.id in dependencies:
            issues.append(ValidationError.circular_dependency(task.id, [task.id, task.id]))
        else:
            graph = {candidate.id: declared_dependencies(candidate, references) for candidate in context.all_tasks()}
            graph[task.id] = dependencies
            cycle = find_cycle(task.id, graph)
            if cycle is not None:
                logger.debug("dependency cycle through %s: %s", task.id, " -> ".join(cycle))
                issues.append(ValidationError.circular_dependency(task.id, cycle))

        return ValidationResult.from_issues(issues)
