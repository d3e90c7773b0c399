"""Shared test fixtures for tasklint tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from tasklint.config import Policy

ERROR_HANDLING_REFERENCES = """## #{{error-handling}}
**Error Handling**
**Core Principles**
- Let unexpected errors crash the session process
**Error Implementation**
- Wrap key lookup failures with the session id
**Error Examples**
- Unknown key type returns an authentication failure
**Supervisor Specifics**
- The session supervisor restarts crashed sessions

## #{{error-handling-subtask}}
**Error Handling**
**Task-Specific Approach**
- Reject malformed keys before lookup
**Error Reporting**
- Log rejected keys with the session id
"""

SUBTASK_BLOCK = """#### 1. Validate public keys (SSH0001-1)

**Status**
Planned

**Error Handling**
{{error-handling-subtask}}
"""

SAMPLE_TEMPLATE = """# SSH Task List

## Current Tasks
| ID | Description | Status | Priority |
|----|-------------|--------|----------|
| SSH0001 | Auth | In Progress | High |

### SSH0001: Auth

**Description**
Authenticate incoming SSH sessions

**Status**
In Progress

**Priority**
High

**Process Design**
- One process per connection

**State Management**
- Session keys live in process state

**Supervision Strategy**
- Restart crashed sessions, never the listener

**Error Handling**
{{error-handling}}

**Dependencies**
None

**Code Quality KPIs**
- Functions per module: 5
- Lines per function: 12
- Call depth: 2

{subtasks}
{references}"""


def build_sample(*, with_subtask: bool = True) -> str:
    subtasks = SUBTASK_BLOCK if with_subtask else ""
    return SAMPLE_TEMPLATE.replace("{subtasks}", subtasks).replace("{references}", ERROR_HANDLING_REFERENCES)


@pytest.fixture
def policy() -> Policy:
    """The default policy."""
    return Policy()


@pytest.fixture
def sample_document() -> str:
    """A valid one-task document with a numbered subtask."""
    return build_sample()


@pytest.fixture
def sample_document_without_subtask() -> str:
    """The sample document with its only subtask removed."""
    return build_sample(with_subtask=False)


@pytest.fixture
def sample_file(tmp_path: Path, sample_document: str) -> Path:
    """The sample document written to disk."""
    path = tmp_path / "tasks.md"
    path.write_text(sample_document, encoding="utf-8")
    return path
