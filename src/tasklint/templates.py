"""Starter task list documents, one per category.

Every rendered template passes validation with the default policy: it has a
Current Tasks table (an In Progress task with two numbered subtasks and a
Planned task), a Completed Tasks table, detailed sections carrying the
category's required sections, and the reference definitions the sections use.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from tasklint.config.policy import Policy
from tasklint.exceptions import ConfigError


@dataclass(frozen=True)
class CategoryTemplate:
    """Wording used to fill in a category's template."""

    title: str
    tasks: tuple[str, str, str]
    sections: dict[str, list[str]] = field(default_factory=dict)


CATEGORY_TEMPLATES: dict[str, CategoryTemplate] = {
    "stateful_worker": CategoryTemplate(
        title="Session Worker",
        tasks=("Implement session worker", "Add idle timeout handling", "Scaffold worker supervision tree"),
        sections={
            "Process Design": ["- One worker per session, registered by session id"],
            "State Management": ["- State holds the session id, last activity and pending requests"],
            "Supervision Strategy": ["- Restart transient workers one for one, at most 3 times in 5 seconds"],
        },
    ),
    "web_layer": CategoryTemplate(
        title="Account Pages",
        tasks=("Build account settings page", "Add profile avatar upload", "Add account routes"),
        sections={
            "Route Design": ["- `GET /account` renders settings, `POST /account` saves them"],
            "Context Integration": ["- Calls the accounts context only, never the repository directly"],
            "Template/Component Strategy": ["- One form component shared by create and edit views"],
        },
    ),
    "business_logic": CategoryTemplate(
        title="Billing Rules",
        tasks=("Implement invoice calculation", "Add discount rules", "Define billing context API"),
        sections={
            "API Design": ["- `create_invoice(account, items)` returns the invoice or a validation error"],
            "Data Access": ["- Reads prices through the catalog repository"],
            "Validation Strategy": ["- Reject empty item lists and negative quantities before pricing"],
        },
    ),
    "data_layer": CategoryTemplate(
        title="Order Storage",
        tasks=("Create orders schema", "Add order search queries", "Add initial migrations"),
        sections={
            "Schema Design": ["- `orders` table with customer id, status and total columns"],
            "Migration Strategy": ["- Additive migrations only, backfills run as separate jobs"],
            "Query Optimization": ["- Index on (customer_id, inserted_at) for the order history query"],
        },
    ),
    "infrastructure": CategoryTemplate(
        title="Release Pipeline",
        tasks=("Configure production release", "Add health check endpoint", "Set up build image"),
        sections={
            "Release Configuration": ["- Single release artifact built once per commit"],
            "Environment Variables": ["- `DATABASE_URL` and `SECRET_KEY` are required at boot"],
            "Deployment Strategy": ["- Rolling deploy, one instance at a time behind the load balancer"],
        },
    ),
    "testing": CategoryTemplate(
        title="Checkout Tests",
        tasks=("Write checkout integration tests", "Add payment failure scenarios", "Set up test fixtures"),
        sections={
            "Test Strategy": ["- Integration tests drive checkout through the public API"],
            "Coverage Requirements": ["- Every checkout error branch has at least one test"],
        },
    ),
}

DEFAULT_SECTION_BODY = ["- Describe the approach for this section"]

REFERENCE_DEFINITIONS = """## Reference Definitions

## #{{error-handling}}
**Error Handling**
**Core Principles**
- Let unexpected errors propagate to the caller
- Return explicit error values for expected failures
**Error Implementation**
- Wrap lower-level errors with the failing operation's context
**Error Examples**
- Missing input returns a validation error naming the field
**Framework Specifics**
- Failures are logged once at the boundary that handles them

## #{{error-handling-subtask}}
**Error Handling**
**Task-Specific Approach**
- Follow the parent task's error handling principles
**Error Reporting**
- Report failures with the subtask id in the log context

## #{{standard-kpis}}
**Code Quality KPIs**
- Functions per module: 5
- Lines per function: 12
- Call depth: 2

## #{{def-no-dependencies}}
**Dependencies**
None
"""


def semantic_prefix_for(category: str, policy: Policy) -> str:
    """First prefix the policy maps to ``category``.

    Raises:
        ConfigError: If no semantic prefix maps to ``category``.
    """
    for prefix, mapped in policy.semantic_prefixes.items():
        if mapped == category:
            return prefix
    raise ConfigError(f"no semantic prefix maps to category '{category}'")


def _field(label: str, value: str) -> list[str]:
    return [f"**{label}**", value, ""]


def _category_sections(template: CategoryTemplate, names: list[str]) -> list[str]:
    lines: list[str] = []
    for name in names:
        lines.extend([f"**{name}**", *template.sections.get(name, DEFAULT_SECTION_BODY), ""])
    return lines


def _subtask(number: int, parent_id: str, description: str, status: str, rating: str | None) -> list[str]:
    lines = [f"#### {number}. {description} ({parent_id}-{number})", ""]
    lines += _field("Description", description)
    lines += _field("Status", status)
    if rating is not None:
        lines += _field("Review Rating", rating)
    lines += ["**Error Handling**", "{{error-handling-subtask}}", ""]
    return lines


def render_template(
    category: str,
    prefix: str = "PRJ",
    *,
    semantic: bool = False,
    policy: Policy | None = None,
) -> str:
    """Render a complete, valid task list for ``category``.

    Args:
        category: Category name from the policy's range table.
        prefix: Id prefix, 2-4 uppercase letters.
        semantic: Use the category's semantic prefix instead of ``prefix``.
        policy: Policy supplying ranges, sections and prefixes.

    Raises:
        ConfigError: If the category is unknown.
    """
    policy = policy or Policy()
    if category not in policy.category_ranges:
        known = ", ".join(policy.category_ranges)
        raise ConfigError(f"unknown category '{category}' (expected one of: {known})")

    if semantic:
        prefix = semantic_prefix_for(category, policy)
    template = CATEGORY_TEMPLATES.get(
        category,
        CategoryTemplate(title=category.replace("_", " ").title(), tasks=("Implement core", "Extend core", "Scaffold")),
    )
    low, _ = policy.category_ranges[category]
    active_id, planned_id, done_id = (f"{prefix}{low + offset:04d}" for offset in range(3))
    active, planned, done = template.tasks
    category_lines = _category_sections(template, policy.sections_for_category(category))

    lines = [
        f"# {template.title} Task List",
        "",
        "## Current Tasks",
        "| ID | Description | Status | Priority |",
        "|----|-------------|--------|----------|",
        f"| {active_id} | {active} | In Progress | High |",
        f"| {planned_id} | {planned} | Planned | Medium |",
        "",
        "## Completed Tasks",
        "| ID | Description | Status | Priority | Review Rating |",
        "|----|-------------|--------|----------|---------------|",
        f"| {done_id} | {done} | Completed | Medium | 4.5 |",
        "",
        "## Task Details",
        "",
        f"### {active_id}: {active}",
        "",
        *_field("Description", f"{active} for the {template.title.lower()} area."),
        *_field("Status", "In Progress"),
        *_field("Priority", "High"),
        "**Requirements**",
        f"- {active} end to end",
        "",
        *category_lines,
        "**Error Handling**",
        "{{error-handling}}",
        "",
        *_field("Dependencies", "None"),
        "**Code Quality KPIs**",
        "{{standard-kpis}}",
        "",
        *_subtask(1, active_id, "Define the public interface", "Completed", "4.0"),
        *_subtask(2, active_id, "Implement the main flow", "In Progress", None),
        f"### {planned_id}: {planned}",
        "",
        *_field("Description", f"{planned}."),
        *_field("Status", "Planned"),
        *_field("Priority", "Medium"),
        "**Requirements**",
        f"- {planned} without changing existing behaviour",
        "",
        *category_lines,
        "**Error Handling**",
        "{{error-handling}}",
        "",
        *_field("Dependencies", active_id),
        "**Code Quality KPIs**",
        "{{standard-kpis}}",
        "",
        f"### {done_id}: {done}",
        "",
        *_field("Description", f"{done}."),
        *_field("Status", "Completed"),
        *_field("Priority", "Medium"),
        *_field("Review Rating", "4.5"),
        "**Requirements**",
        f"- {done} so later tasks can build on it",
        "",
        *category_lines,
        "**Error Handling**",
        "{{error-handling}}",
        "",
        "{{def-no-dependencies}}",
        "",
        "**Code Quality KPIs**",
        "- Functions per module: 4",
        "- Lines per function: 10",
        "- Call depth: 2",
        "",
        *_field("Implementation Notes", "- Kept the first version small and documented the public entry points"),
        "**Complexity Assessment**: Simple - one module with no shared state",
        "",
        *_field("Maintenance Impact", "- Low, no other task depends on internal details"),
        *_field("Error Handling Implementation", "- Inputs are validated up front and failures are logged once"),
        REFERENCE_DEFINITIONS,
    ]
    return "\n".join(lines)
