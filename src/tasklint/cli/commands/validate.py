"""Validate command."""

from __future__ import annotations

import argparse

from tasklint.cli.progress.rich import RichValidationProgress
from tasklint.models.result import ValidationResult


def run_validate(args: argparse.Namespace) -> ValidationResult:
    import tasklint.cli as cli

    policy = cli.load_policy(args.config) if args.config else cli.Policy()

    if not args.verbose:
        with RichValidationProgress() as progress:
            result = cli.validate_file(args.path, policy, args.preset, progress)
    else:
        result = cli.validate_file(args.path, policy, args.preset)

    print(cli.format_result(result))
    return result


__all__ = ["run_validate"]
