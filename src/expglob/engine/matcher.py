"""Anchored glob matching with longest-match ``*`` and match-length reporting."""
from __future__ import annotations

import dataclasses
import logging
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from functools import lru_cache

from .models import NO_MATCH, MatchAborted, Matched, MatchOptions, MatchResult
from .tokens import Token, TokenKind, fold, tokenize

logger = logging.getLogger(__name__)

_MISSING = object()

# match, _scan and _longest each hold a frame per nested `*` run
_FRAMES_PER_LEVEL = 3


@dataclass(frozen=True)
class GlobPattern:
    """A tokenized pattern ready for repeated searches."""

    source: str
    tokens: tuple[Token, ...]

    @property
    def anchored(self) -> bool:
        return bool(self.tokens) and self.tokens[0].kind is TokenKind.FRONT_ANCHOR

    @property
    def leading_star(self) -> bool:
        return bool(self.tokens) and self.tokens[0].kind is TokenKind.ANY_RUN

    @property
    def valid(self) -> bool:
        return not any(token.kind is TokenKind.INVALID for token in self.tokens)

    @property
    def body(self) -> tuple[Token, ...]:
        """Tokens with the front anchor stripped."""
        return self.tokens[1:] if self.anchored else self.tokens

    def search(
        self, text: str, case_insensitive: bool = False, *, options: MatchOptions | None = None
    ) -> MatchResult:
        """Find the leftmost offset at which the pattern matches a prefix of ``text[offset:]``.

        Front-anchored patterns and patterns starting with ``*`` are only
        tried at offset 0. Other patterns are retried at offsets
        ``1 .. len(text) - 1``. Malformed patterns never match.

        Raises :class:`MatchAborted` when a budget in ``options`` runs out.
        """
        opts = _resolve_options(case_insensitive, options)
        if not self.valid:
            logger.debug("pattern %r is malformed; reporting no match", self.source)
            return NO_MATCH
        matcher = _Matcher(text, len(text), self.body, opts)
        try:
            length = matcher.start(0)
            if length is not None:
                return Matched(length, 0)
            if self.anchored or self.leading_star:
                return NO_MATCH
            if not text:
                return NO_MATCH
            for offset in range(1, len(text)):
                length = matcher.start(offset)
                if length is not None:
                    return Matched(length, offset)
        except MatchAborted as exc:
            logger.debug(
                "search for %r aborted after %d steps (depth %d): %s",
                self.source,
                exc.steps,
                exc.depth,
                exc.reason,
            )
            raise
        return NO_MATCH


class _Matcher:
    """Matches one token sequence against one string.

    Results are memoized per ``(token_index, position)`` for the lifetime
    of the instance, so retrying offsets and nested ``*`` runs never repeat
    a sub-match.
    """

    __slots__ = ("text", "stop", "tokens", "nocase", "max_steps", "max_depth", "steps", "depth", "_memo")

    def __init__(self, text: str, stop: int, tokens: Sequence[Token], options: MatchOptions) -> None:
        self.text = text
        self.stop = stop
        self.tokens = tokens
        self.nocase = options.case_insensitive
        self.max_steps = options.max_steps
        self.max_depth = min(options.max_depth, _depth_ceiling())
        self.steps = 0
        self.depth = 0
        self._memo: dict[tuple[int, int], int | None] = {}

    def _tick(self) -> None:
        self.steps += 1
        if self.max_steps is not None and self.steps > self.max_steps:
            raise MatchAborted("step budget exceeded", self.steps, self.depth)

    def _fold(self, ch: str) -> str:
        return fold(ch) if self.nocase else ch

    def _in_class(self, token: Token, ch: str) -> bool:
        ch = self._fold(ch)
        for low, high in token.ranges:
            low = self._fold(low)
            high = self._fold(high)
            if low <= ch <= high or high <= ch <= low:
                return True
        return False

    def start(self, pos: int) -> int | None:
        """Match the whole token sequence at ``pos``, aborting instead of overflowing the stack."""
        try:
            return self.match(0, pos)
        except RecursionError:
            raise MatchAborted("recursion limit reached", self.steps, self.depth) from None

    def match(self, index: int, pos: int) -> int | None:
        """Length matched by ``tokens[index:]`` anchored at ``pos``, or ``None``."""
        key = (index, pos)
        cached = self._memo.get(key, _MISSING)
        if cached is not _MISSING:
            return cached
        result = self._scan(index, pos)
        self._memo[key] = result
        return result

    def _scan(self, index: int, pos: int) -> int | None:
        tokens = self.tokens
        count = len(tokens)
        matched = 0
        while True:
            self._tick()
            if index == count:
                return matched
            token = tokens[index]
            kind = token.kind
            if kind is TokenKind.END_ANCHOR:
                return matched if pos == self.stop else None
            if kind is TokenKind.ANY_RUN:
                index += 1
                if index == count:
                    return matched + (self.stop - pos)
                tail = self._longest(index, pos)
                return None if tail is None else matched + tail
            if kind is TokenKind.FRONT_ANCHOR:
                index += 1
                continue
            if kind is TokenKind.INVALID:
                return None
            # every remaining token consumes exactly one character
            if pos >= self.stop:
                return None
            ch = self.text[pos]
            if kind is TokenKind.CLASS:
                if not self._in_class(token, ch):
                    return None
            elif kind is not TokenKind.ANY_CHAR:
                if self._fold(ch) != self._fold(token.value):
                    return None
            index += 1
            pos += 1
            matched += 1

    def _longest(self, index: int, pos: int) -> int | None:
        """Resolve a ``*`` run at ``pos`` followed by ``tokens[index:]``.

        Split points are tried from the end of the string back to ``pos``
        so the run takes the longest span that still lets the rest match.
        """
        self.depth += 1
        if self.depth > self.max_depth:
            raise MatchAborted("wildcard nesting too deep", self.steps, self.depth)
        try:
            following = self.tokens[index]
            if following.is_literal:
                # cruise to split points whose character can start the rest
                target = self._fold(following.value)
                for split in range(self.stop - 1, pos - 1, -1):
                    self._tick()
                    if self._fold(self.text[split]) != target:
                        continue
                    rest = self.match(index, split)
                    if rest is not None:
                        return (split - pos) + rest
                return None
            for split in range(self.stop, pos - 1, -1):
                rest = self.match(index, split)
                if rest is not None:
                    return (split - pos) + rest
            return None
        finally:
            self.depth -= 1


def _depth_ceiling() -> int:
    """Deepest ``*`` nesting that fits under the interpreter recursion limit."""
    return max(1, sys.getrecursionlimit() // (_FRAMES_PER_LEVEL + 1))


def _resolve_options(case_insensitive: bool, options: MatchOptions | None) -> MatchOptions:
    if options is None:
        return MatchOptions(case_insensitive=case_insensitive)
    if case_insensitive and not options.case_insensitive:
        return dataclasses.replace(options, case_insensitive=True)
    return options


@lru_cache(maxsize=4096)
def compile_pattern(pattern: str) -> GlobPattern:
    return GlobPattern(pattern, tokenize(pattern))


def search(
    text: str, pattern: str, case_insensitive: bool = False, *, options: MatchOptions | None = None
) -> MatchResult:
    """Search ``text`` for ``pattern``; see :meth:`GlobPattern.search`."""
    return compile_pattern(pattern).search(text, case_insensitive, options=options)


def core_match(
    text: str,
    start: int,
    stop: int,
    pattern: str,
    case_insensitive: bool = False,
    *,
    options: MatchOptions | None = None,
) -> int | None:
    """Match ``pattern`` anchored at ``text[start]`` without looking past ``stop``.

    Returns the number of characters matched, which may be 0, or ``None``.
    A leading ``^`` is accepted and has no further effect.
    """
    if not 0 <= start <= stop <= len(text):
        raise ValueError(f"invalid bounds start={start} stop={stop} for text of length {len(text)}")
    opts = _resolve_options(case_insensitive, options)
    compiled = compile_pattern(pattern)
    if not compiled.valid:
        return None
    return _Matcher(text, stop, compiled.body, opts).start(start)


def match_all(
    texts: Sequence[str], pattern: str, case_insensitive: bool = False, *, options: MatchOptions | None = None
) -> list[MatchResult]:
    compiled = compile_pattern(pattern)
    return [compiled.search(text, case_insensitive, options=options) for text in texts]
