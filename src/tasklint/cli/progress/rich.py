"""Rich progress display for ``tasklint validate``."""

from __future__ import annotations

from types import TracebackType
from typing import ClassVar

from rich.console import Console
from rich.markup import escape
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.progress import TaskID as RichTaskID

from tasklint.engine.progress import TASKS_PHASE, ValidationProgress


def _issues(count: int) -> str:
    return f"{count} issue" if count == 1 else f"{count} issues"


class RichValidationProgress(ValidationProgress):
    """Per-phase progress bars on stderr.

    The ``Tasks`` bar shows the main task that was checked last and keeps a
    running issue tally; a finished phase shows ``clean`` or its issue count::

        with RichValidationProgress() as progress:
            result = validate_file(path, policy, progress=progress)
    """

    _PHASE_LABELS: ClassVar[dict[str, str]] = {
        "References": "[cyan]References[/]",
        "Tasks": "[green]Tasks[/]",
    }

    def __init__(self, console: Console | None = None) -> None:
        self._progress = Progress(
            SpinnerColumn(finished_text="[green]✓[/green]"),
            TextColumn("{task.description:>12}"),
            BarColumn(bar_width=24),
            MofNCompleteColumn(),
            TextColumn("{task.fields[detail]}"),
            TimeElapsedColumn(),
            console=console or Console(stderr=True),
        )
        self._bars: dict[str, RichTaskID] = {}
        self._tally = 0

    def __enter__(self) -> RichValidationProgress:
        self._progress.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self._progress.stop()

    def phase_start(self, phase: str, total: int | None = None) -> None:
        label = self._PHASE_LABELS.get(phase, phase)
        self._bars[phase] = self._progress.add_task(label, total=total, detail="")
        if phase == TASKS_PHASE:
            self._tally = 0

    def task_checked(self, task_id: str, issues: int) -> None:
        bar = self._bars.get(TASKS_PHASE)
        if bar is None:
            return
        self._tally += issues
        style = "yellow" if issues else "dim"
        detail = f"[{style}]{task_id}[/]" + (f" ({_issues(self._tally)} so far)" if self._tally else "")
        self._progress.update(bar, advance=1, detail=detail)

    def phase_done(self, phase: str, issues: int) -> None:
        bar = self._bars.get(phase)
        if bar is None:
            return
        detail = f"[yellow]{_issues(issues)}[/]" if issues else "[green]clean[/]"
        total = self._progress.tasks[bar].total
        if total is None:
            self._progress.update(bar, total=1, completed=1, detail=detail)
        else:
            self._progress.update(bar, completed=total, detail=detail)

    def phase_error(self, phase: str, error: BaseException) -> None:
        bar = self._bars.get(phase)
        if bar is None:
            return
        message = escape(f"{type(error).__name__}: {error}")
        self._progress.update(bar, description=f"[red]✗ {phase}[/]", detail=f"[red]{message}[/]")
