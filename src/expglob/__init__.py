"""expglob anchored glob matching toolkit."""

from collections.abc import Sequence

__version__ = "0.1.0"

from .engine.matcher import GlobPattern, compile_pattern, core_match, match_all, search  # noqa: E402
from .engine.models import NO_MATCH, ExpglobError, MatchAborted, Matched, MatchOptions, NoMatch  # noqa: E402
from .engine.tokens import Token, TokenKind, tokenize  # noqa: E402


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point mirroring :func:`expglob.cli.main`."""

    from .cli import main as cli_main

    return cli_main(argv)


__all__ = [
    "GlobPattern",
    "ExpglobError",
    "MatchAborted",
    "MatchOptions",
    "Matched",
    "NO_MATCH",
    "NoMatch",
    "Token",
    "TokenKind",
    "compile_pattern",
    "core_match",
    "main",
    "match_all",
    "search",
    "tokenize",
]
