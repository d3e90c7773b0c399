"""Progress reporting for validation runs.

A run has two phases. ``References`` checks that every ``{{name}}`` usage in
the document has a definition; it has no item count. ``Tasks`` runs the
validator pipeline once per main task and reports each task as it finishes,
together with the number of issues the pipeline raised for it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

REFERENCES_PHASE = "References"
TASKS_PHASE = "Tasks"


class ValidationProgress(ABC):
    """Observer for the engine's phases and per-task results."""

    @abstractmethod
    def phase_start(self, phase: str, total: int | None = None) -> None:
        """*phase* begins; *total* is the number of main tasks, or ``None``."""
        ...  # pragma: no cover

    @abstractmethod
    def task_checked(self, task_id: str, issues: int) -> None:
        """The pipeline finished *task_id* with *issues* errors and warnings."""
        ...  # pragma: no cover

    @abstractmethod
    def phase_done(self, phase: str, issues: int) -> None:
        """*phase* finished; *issues* counts everything it reported."""
        ...  # pragma: no cover

    @abstractmethod
    def phase_error(self, phase: str, error: BaseException) -> None:
        """*phase* was interrupted by *error*, which the engine re-raises."""
        ...  # pragma: no cover


class NullValidationProgress(ValidationProgress):
    """Discards every event."""

    def phase_start(self, phase: str, total: int | None = None) -> None:
        pass

    def task_checked(self, task_id: str, issues: int) -> None:
        pass

    def phase_done(self, phase: str, issues: int) -> None:
        pass

    def phase_error(self, phase: str, error: BaseException) -> None:
        pass
