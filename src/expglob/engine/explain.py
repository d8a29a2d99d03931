"""Explanation helpers for patterns and match results."""
from __future__ import annotations

from collections.abc import Sequence

from .matcher import GlobPattern, compile_pattern
from .models import MatchResult
from .tokens import describe


def _as_pattern(pattern: GlobPattern | str) -> GlobPattern:
    return pattern if isinstance(pattern, GlobPattern) else compile_pattern(pattern)


def explain_dict(pattern: GlobPattern | str) -> dict[str, object]:
    compiled = _as_pattern(pattern)
    return {
        "pattern": compiled.source,
        "anchored": compiled.anchored,
        "leading_star": compiled.leading_star,
        "valid": compiled.valid,
        "tokens": [
            {
                "kind": token.kind.value,
                "value": token.value,
                "index": token.index,
                **({"ranges": [list(pair) for pair in token.ranges]} if token.ranges else {}),
            }
            for token in compiled.tokens
        ],
    }


def explain_text(pattern: GlobPattern | str) -> str:
    compiled = _as_pattern(pattern)
    if compiled.anchored:
        header = "anchored at offset 0"
    elif compiled.leading_star:
        header = "leading wildcard, tried at offset 0 only"
    else:
        header = "unanchored, leftmost offset wins"
    lines = [f"PATTERN: {compiled.source!r} ({header})"]
    for token in compiled.tokens:
        lines.append(f"  {token.index:>3}  {describe(token)}")
    if not compiled.valid:
        lines.append("  malformed: never matches")
    return "\n".join(lines)


def result_dict(text: str, result: MatchResult) -> dict[str, object]:
    payload: dict[str, object] = {"text": text}
    payload.update(result.to_json())
    if result:
        payload["match"] = result.slice(text)
    return payload


def result_text(text: str, result: MatchResult) -> str:
    if not result:
        return f"{text!r}: no match"
    return f"{text!r}: offset={result.start_offset} length={result.length} match={result.slice(text)!r}"


def summarize_text(results: Sequence[MatchResult]) -> str:
    hits = sum(1 for result in results if result)
    return f"{hits} of {len(results)} items matched."
