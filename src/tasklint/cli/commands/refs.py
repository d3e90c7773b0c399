"""Refs command: reference usage statistics as a table."""

from __future__ import annotations

import argparse
from typing import Any

from rich.console import Console
from rich.table import Table


def build_refs_table(stats: dict[str, Any]) -> Table:
    table = Table(title="Reference usage")
    table.add_column("Reference", style="cyan")
    table.add_column("Usages", justify="right")
    for name, count in sorted(stats["usage_counts"].items(), key=lambda item: (-item[1], item[0])):
        table.add_row(name, str(count) if count else "[yellow]unused[/]")
    for name in stats["undefined_references"]:
        table.add_row(name, "[red]undefined[/]")
    return table


def format_refs_summary(stats: dict[str, Any]) -> str:
    most_used = stats["most_used"]
    lines = [
        f"  References:  {stats['total_references']} defined, {stats['total_usages']} usages",
        f"  Unused:      {', '.join(stats['unused_references']) or 'none'}",
        f"  Undefined:   {', '.join(stats['undefined_references']) or 'none'}",
    ]
    if most_used is not None:
        lines.append(f"  Most used:   {most_used['name']} ({most_used['count']})")
    return "\n".join(lines)


def run_refs(args: argparse.Namespace, console: Console | None = None) -> dict[str, Any]:
    import tasklint.cli as cli

    policy = cli.load_policy(args.config) if args.config else cli.Policy()
    stats = cli.reference_stats(cli.parse_file(args.path, policy))

    console = console or Console()
    console.print(build_refs_table(stats))
    console.print(format_refs_summary(stats), highlight=False)
    return stats


__all__ = ["build_refs_table", "format_refs_summary", "run_refs"]
