"""Pattern tokenization helpers."""
from __future__ import annotations

import enum
from dataclasses import dataclass

SENTINEL = "\0"


class TokenKind(str, enum.Enum):
    LITERAL = "literal"
    ESCAPED = "escaped"
    ANY_CHAR = "any_char"
    ANY_RUN = "any_run"
    CLASS = "class"
    FRONT_ANCHOR = "front_anchor"
    END_ANCHOR = "end_anchor"
    INVALID = "invalid"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: str = ""
    ranges: tuple[tuple[str, str], ...] = ()
    index: int = 0

    @property
    def is_literal(self) -> bool:
        return self.kind in (TokenKind.LITERAL, TokenKind.ESCAPED)

    def __repr__(self) -> str:  # pragma: no cover - debug convenience
        return f"Token({self.kind.value}, {self.value!r}, {self.index})"


def fold(ch: str) -> str:
    """Lower-case a single code point, keeping it unchanged if lowering expands it."""
    lowered = ch.lower()
    return lowered if len(lowered) == 1 else ch


def _terminate(pattern: str) -> str:
    cut = pattern.find(SENTINEL)
    return pattern if cut == -1 else pattern[:cut]


def _read_class(pattern: str, pos: int) -> tuple[Token, int]:
    """Read the members of a class whose ``[`` sits at ``pos - 1``.

    Members are ``c`` or ``a-b``; the first ``]`` that is not a range end
    closes the class. Returns the token and the index after the ``]``.
    """
    start = pos - 1
    ranges: list[tuple[str, str]] = []
    size = len(pattern)
    while True:
        if pos >= size:
            return Token(TokenKind.INVALID, "unterminated class", index=start), size
        ch = pattern[pos]
        if ch == "]":
            if not ranges:
                return Token(TokenKind.INVALID, "empty class", index=start), size
            return Token(TokenKind.CLASS, pattern[start:pos + 1], tuple(ranges), start), pos + 1
        pos += 1
        if pos < size and pattern[pos] == "-":
            pos += 1
            if pos >= size:
                return Token(TokenKind.INVALID, "range without end", index=start), size
            ranges.append((ch, pattern[pos]))
            pos += 1
        else:
            ranges.append((ch, ch))


def tokenize(pattern: str) -> tuple[Token, ...]:
    """Split ``pattern`` into tokens.

    ``^`` is an anchor only as the first character and ``$`` only as the
    last; elsewhere both are literals. Runs of ``*`` collapse into a single
    token. A malformed fragment becomes an ``INVALID`` token and ends the
    tokenization.
    """
    pattern = _terminate(pattern)
    tokens: list[Token] = []
    pos = 0
    size = len(pattern)
    if size and pattern[0] == "^":
        tokens.append(Token(TokenKind.FRONT_ANCHOR, "^", index=0))
        pos = 1
    while pos < size:
        ch = pattern[pos]
        if ch == "*":
            run_start = pos
            while pos < size and pattern[pos] == "*":
                pos += 1
            tokens.append(Token(TokenKind.ANY_RUN, pattern[run_start:pos], index=run_start))
            continue
        if ch == "$" and pos == size - 1:
            tokens.append(Token(TokenKind.END_ANCHOR, "$", index=pos))
        elif ch == "?":
            tokens.append(Token(TokenKind.ANY_CHAR, "?", index=pos))
        elif ch == "[":
            token, pos = _read_class(pattern, pos + 1)
            tokens.append(token)
            if token.kind is TokenKind.INVALID:
                break
            continue
        elif ch == "\\":
            if pos + 1 >= size:
                tokens.append(Token(TokenKind.INVALID, "dangling escape", index=pos))
                break
            pos += 1
            tokens.append(Token(TokenKind.ESCAPED, pattern[pos], index=pos - 1))
        else:
            tokens.append(Token(TokenKind.LITERAL, ch, index=pos))
        pos += 1
    return tuple(tokens)


def describe(token: Token) -> str:
    """Short human-readable label for a token."""
    if token.kind is TokenKind.CLASS:
        members = ", ".join(low if low == high else f"{low}-{high}" for low, high in token.ranges)
        return f"class [{members}]"
    if token.kind is TokenKind.INVALID:
        return f"invalid ({token.value})"
    if token.is_literal:
        return f"{token.kind.value} {token.value!r}"
    return token.kind.value.replace("_", " ")
