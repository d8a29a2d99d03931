"""Command line interface for the expglob matcher."""
from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from . import __version__, io
from .engine.explain import explain_dict, explain_text, result_dict, result_text, summarize_text
from .engine.matcher import compile_pattern
from .engine.models import MatchAborted, MatchOptions

EXIT_MATCH = 0
EXIT_NO_MATCH = 1
EXIT_ABORTED = 3

logger = logging.getLogger(__name__)


def _non_negative(value: str) -> int:
    """Parse a non-negative integer flag."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value}") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative: {value}")
    return number


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="expglob", description="Anchored glob matching CLI")
    parser.add_argument("-V", "--version", action="version", version=f"expglob {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", default=False, help="enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    search = sub.add_parser("search", help="search text for a pattern")
    search.add_argument("--pattern", required=True)
    source = search.add_mutually_exclusive_group(required=True)
    source.add_argument("--text")
    source.add_argument("--input", help="file of items (lines, .jsonl or .csv); '-' for stdin")
    search.add_argument("--nocase", action="store_true", default=False)
    search.add_argument("--max-steps", type=_non_negative)
    search.add_argument("--max-depth", type=int, default=MatchOptions.max_depth)
    search.add_argument("--out", default="-")
    search.add_argument("--format", choices=["text", "json"], default="text")

    explain = sub.add_parser("explain", help="show how a pattern is tokenized")
    explain.add_argument("--pattern", required=True)
    explain.add_argument("--format", choices=["text", "json"], default="text")
    explain.add_argument("--out", default="-")
    return parser


def _build_options(args: argparse.Namespace) -> MatchOptions:
    return MatchOptions(
        case_insensitive=args.nocase,
        max_steps=args.max_steps,
        max_depth=args.max_depth,
    )


def _command_search(args: argparse.Namespace, parser: argparse.ArgumentParser) -> int:
    if args.max_depth < 1:
        parser.error("--max-depth must be at least 1")
    options = _build_options(args)
    items = [args.text] if args.text is not None else io.read_items(args.input)
    compiled = compile_pattern(args.pattern)
    results = []
    for item in items:
        try:
            results.append((item, compiled.search(item, options=options)))
        except MatchAborted as exc:
            logger.warning("matching %r against %r aborted: %s", args.pattern, item, exc.reason)
            sys.stderr.write(f"expglob: aborted on {item!r}: {exc.reason}\n")
            return EXIT_ABORTED
    if args.format == "json":
        io.write_json([result_dict(item, result) for item, result in results], args.out)
    else:
        lines = [result_text(item, result) for item, result in results]
        if len(results) > 1:
            lines.append(summarize_text([result for _, result in results]))
        io.write_text("\n".join(lines) + "\n", args.out)
    return EXIT_MATCH if any(result for _, result in results) else EXIT_NO_MATCH


def _command_explain(args: argparse.Namespace) -> int:
    if args.format == "json":
        io.write_json(explain_dict(args.pattern), args.out)
    else:
        io.write_text(explain_text(args.pattern) + "\n", args.out)
    return EXIT_MATCH


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    command = args.command
    if command == "search":
        return _command_search(args, parser)
    if command == "explain":
        return _command_explain(args)
    parser.error(f"unknown command {command}")
    return 2


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
