"""Tests for RichValidationProgress and NullValidationProgress."""

from __future__ import annotations

import io

from rich.console import Console

from tasklint.cli.progress.rich import RichValidationProgress
from tasklint.engine import validate_text
from tasklint.engine.progress import REFERENCES_PHASE, TASKS_PHASE, NullValidationProgress, ValidationProgress


def _console() -> tuple[Console, io.StringIO]:
    buffer = io.StringIO()
    return Console(file=buffer, width=120, force_terminal=False, color_system=None), buffer


class TestNullValidationProgress:
    def test_implements_protocol(self) -> None:
        assert issubclass(NullValidationProgress, ValidationProgress)

    def test_accepts_every_event(self) -> None:
        progress = NullValidationProgress()
        progress.phase_start(TASKS_PHASE, total=2)
        progress.task_checked("SSH0001", 0)
        progress.phase_done(TASKS_PHASE, 0)
        progress.phase_error(TASKS_PHASE, RuntimeError("boom"))


class TestRichValidationProgress:
    """RichValidationProgress renders one bar per engine phase."""

    def test_context_manager(self) -> None:
        progress = RichValidationProgress()
        with progress as entered:
            assert entered is progress

    def test_clean_run_reports_clean_phases(self, sample_document: str) -> None:
        console, buffer = _console()

        with RichValidationProgress(console) as progress:
            validate_text(sample_document, progress=progress)

        output = buffer.getvalue()
        assert "References" in output
        assert "Tasks" in output
        assert "1/1" in output
        assert output.count("clean") == 2

    def test_issue_tally_names_the_last_task(self) -> None:
        console, buffer = _console()

        with RichValidationProgress(console) as progress:
            progress.phase_start(TASKS_PHASE, total=3)
            progress.task_checked("SSH0001", 0)
            progress.task_checked("SSH0002", 2)
            progress.task_checked("SSH0003", 1)

        output = buffer.getvalue()
        assert "3/3" in output
        assert "SSH0003 (3 issues so far)" in output

    def test_phase_done_shows_issue_count(self) -> None:
        console, buffer = _console()

        with RichValidationProgress(console) as progress:
            progress.phase_start(REFERENCES_PHASE)
            progress.phase_done(REFERENCES_PHASE, 1)

        assert "1 issue" in buffer.getvalue()

    def test_events_for_unstarted_phases_are_ignored(self) -> None:
        with RichValidationProgress(_console()[0]) as progress:
            progress.task_checked("SSH0001", 4)
            progress.phase_done(TASKS_PHASE, 4)
            progress.phase_error(REFERENCES_PHASE, RuntimeError("boom"))

    def test_phase_error_shows_the_exception(self) -> None:
        console, buffer = _console()

        with RichValidationProgress(console) as progress:
            progress.phase_start(TASKS_PHASE, total=2)
            progress.phase_error(TASKS_PHASE, ValueError("bad [input]"))

        output = buffer.getvalue()
        assert "✗ Tasks" in output
        assert "ValueError: bad [input]" in output
