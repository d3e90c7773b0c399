"""CLI parser construction."""

from __future__ import annotations

import argparse
from importlib.metadata import PackageNotFoundError, version

from tasklint.engine.pipeline import PRESETS


def _package_version() -> str:
    try:
        return version("tasklint")
    except PackageNotFoundError:
        return "0.0.0"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tasklint")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_package_version()}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    validate_parser = subparsers.add_parser("validate", help="Validate a task list document")
    validate_parser.add_argument("path", help="Path to the task list markdown file")
    validate_parser.add_argument("--config", default=None, help="Path to a JSON or TOML policy file")
    validate_parser.add_argument(
        "--preset",
        choices=sorted(PRESETS),
        default="default",
        help="Validator set to run (default: default)",
    )
    validate_parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    template_parser = subparsers.add_parser("template", help="Generate a starter task list")
    template_parser.add_argument(
        "--category",
        default="stateful_worker",
        help="Task category to generate (default: stateful_worker)",
    )
    template_parser.add_argument("--prefix", default="PRJ", help="Task id prefix (default: PRJ)")
    template_parser.add_argument(
        "--semantic",
        action="store_true",
        help="Use the category's semantic prefix instead of --prefix",
    )
    template_parser.add_argument("--output", "-o", default=None, help="Write to this file instead of stdout")
    template_parser.add_argument("--config", default=None, help="Path to a JSON or TOML policy file")
    template_parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    refs_parser = subparsers.add_parser("refs", help="Show reference usage statistics")
    refs_parser.add_argument("path", help="Path to the task list markdown file")
    refs_parser.add_argument("--config", default=None, help="Path to a JSON or TOML policy file")
    refs_parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    return parser


__all__ = ["build_parser"]
