"""Validator contract and the shared context every validator reads.

Each concrete validator checks one axis of correctness for a single task and
must be correct on its own: validator sets are configurable, so no validator
may rely on another having run first.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar

from pydantic import BaseModel, Field

from tasklint.config.policy import Policy
from tasklint.models.result import ValidationResult
from tasklint.models.task import Task, TaskList

DEFAULT_PRIORITY = 50


class ValidationContext(BaseModel):
    """Read-only inputs shared by all validators during one run.

    Attributes:
        policy: Active validation policy.
        task_list: The whole parsed document.
        validator_options: Options for the validator currently running; the
            pipeline swaps these per validator.
    """

    policy: Policy = Field(default_factory=Policy)
    task_list: TaskList = Field(default_factory=TaskList)
    validator_options: dict[str, Any] = Field(default_factory=dict)

    model_config = {"frozen": True}

    @property
    def references(self) -> dict[str, list[str]]:
        return self.task_list.references

    def all_tasks(self) -> list[Task]:
        return self.task_list.all_tasks()

    def option(self, name: str, default: Any = None) -> Any:
        return self.validator_options.get(name, default)

    def with_options(self, options: dict[str, Any]) -> ValidationContext:
        return self.model_copy(update={"validator_options": dict(options)})


class Validator(ABC):
    """A single, independently substitutable check over one task.

    Subclasses set :attr:`name` (the short name used by
    :func:`tasklint.engine.pipeline.build_validators`) and may override
    :meth:`priority`; higher priorities run earlier.
    """

    name: ClassVar[str] = ""

    @abstractmethod
    def validate(self, task: Task, context: ValidationContext) -> ValidationResult:
        """Check ``task`` and return every issue found.

        Malformed input is reported, never raised.
        """

    def priority(self) -> int:
        return DEFAULT_PRIORITY

    def __repr__(self) -> str:
        return f"{type(self).__name__}(priority={self.priority()})"
