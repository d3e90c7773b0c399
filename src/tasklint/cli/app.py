"""CLI app entrypoint and error mapping."""

from __future__ import annotations

import sys

from tasklint.exceptions import ConfigError, DocumentLoadError, ParseError, TaskLintError


def main(argv: list[str] | None = None) -> int:
    import tasklint.cli as cli

    parser = cli.build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        cli.logging.basicConfig(level=cli.logging.DEBUG, format="%(name)s %(message)s", stream=sys.stderr)

    try:
        if args.command == "validate":
            result = cli._run_validate(args)
            return 0 if result.valid else 1
        if args.command == "template":
            cli._run_template(args)
        elif args.command == "refs":
            cli._run_refs(args)
        return 0
    except (ConfigError, DocumentLoadError, ParseError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 3
    except (TaskLintError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except Exception as exc:  # pragma: no cover
        print(f"error: {exc}", file=sys.stderr)
        return 1


__all__ = ["main"]
