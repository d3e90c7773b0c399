"""Template command."""

from __future__ import annotations

import argparse
from pathlib import Path

from tasklint.exceptions import TaskLintError


def run_template(args: argparse.Namespace) -> str:
    import tasklint.cli as cli

    policy = cli.load_policy(args.config) if args.config else cli.Policy()
    document = cli.render_template(args.category, args.prefix, semantic=args.semantic, policy=policy)

    if args.output is None:
        print(document)
        return document

    output = Path(args.output)
    try:
        output.write_text(document + "\n", encoding="utf-8")
    except OSError as exc:
        raise TaskLintError(f"failed to write template: {output}") from exc
    print(f"Template for '{args.category}' written to {output}")
    return document


__all__ = ["run_template"]
