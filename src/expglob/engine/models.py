"""Data models shared across the expglob engine."""
from __future__ import annotations

from dataclasses import dataclass


class ExpglobError(Exception):
    """Base class for errors raised by expglob."""


class MatchAborted(ExpglobError, RuntimeError):
    """Matching stopped before a verdict because a budget ran out.

    This is distinct from :data:`NO_MATCH`: the pattern may or may not
    match, the search simply did not finish.
    """

    def __init__(self, reason: str, steps: int = 0, depth: int = 0) -> None:
        super().__init__(reason)
        self.reason = reason
        self.steps = steps
        self.depth = depth


class NoMatch:
    """The pattern does not match anywhere in the input."""

    __slots__ = ()
    _instance: NoMatch | None = None

    def __new__(cls) -> NoMatch:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NO_MATCH"

    def to_json(self) -> dict[str, object]:
        return {"matched": False}


NO_MATCH = NoMatch()


@dataclass(frozen=True)
class Matched:
    """A successful match of ``length`` characters starting at ``start_offset``."""

    length: int
    start_offset: int

    def __post_init__(self) -> None:
        if self.length < 0 or self.start_offset < 0:
            raise ValueError("length and start_offset must be non-negative")

    def __bool__(self) -> bool:
        return True

    @property
    def end(self) -> int:
        return self.start_offset + self.length

    def span(self) -> tuple[int, int]:
        return self.start_offset, self.end

    def slice(self, text: str) -> str:
        return text[self.start_offset:self.end]

    def to_json(self) -> dict[str, object]:
        return {"matched": True, "length": self.length, "start_offset": self.start_offset}


MatchResult = NoMatch | Matched


@dataclass(frozen=True)
class MatchOptions:
    """Knobs for a single search.

    max_steps: Upper bound on pattern-token steps across the whole search.
        ``None`` means unlimited.
    max_depth: Upper bound on nested ``*`` resolution. Each ``*`` run that is
        followed by more pattern adds one level while it is resolved, so a
        pattern with more such runs than this can raise
        :class:`MatchAborted` even against a short input, for example 250
        ``a*`` runs against 250 ``a`` characters at the default of 200.
        The effective bound is also capped below the interpreter recursion
        limit (250 levels at the default limit of 1000).
    """

    case_insensitive: bool = False
    max_steps: int | None = None
    max_depth: int = 200

    def __post_init__(self) -> None:
        if self.max_steps is not None and self.max_steps < 0:
            raise ValueError("max_steps must be non-negative or None")
        if self.max_depth < 1:
            raise ValueError("max_depth must be at least 1")
