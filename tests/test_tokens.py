"""Tokenization tests."""

import pytest

from expglob.engine import tokens
from expglob.engine.tokens import TokenKind


def _kinds(pattern: str) -> list[TokenKind]:
    return [tok.kind for tok in tokens.tokenize(pattern)]


def test_tokenize_basic_kinds() -> None:
    assert _kinds("^a?[bc]*\\*d$") == [
        TokenKind.FRONT_ANCHOR,
        TokenKind.LITERAL,
        TokenKind.ANY_CHAR,
        TokenKind.CLASS,
        TokenKind.ANY_RUN,
        TokenKind.ESCAPED,
        TokenKind.LITERAL,
        TokenKind.END_ANCHOR,
    ]


def test_star_runs_collapse() -> None:
    result = tokens.tokenize("a***b")
    assert [tok.kind for tok in result] == [TokenKind.LITERAL, TokenKind.ANY_RUN, TokenKind.LITERAL]
    assert result[1].value == "***"
    assert [tok.index for tok in result] == [0, 1, 4]


def test_anchors_only_at_edges() -> None:
    assert _kinds("a^b$c") == [TokenKind.LITERAL] * 5
    assert _kinds("\\$") == [TokenKind.ESCAPED]
    assert _kinds("$") == [TokenKind.END_ANCHOR]
    assert _kinds("^") == [TokenKind.FRONT_ANCHOR]
    assert _kinds("^$") == [TokenKind.FRONT_ANCHOR, TokenKind.END_ANCHOR]


def test_class_ranges() -> None:
    (token,) = tokens.tokenize("[a-cxz-y]")
    assert token.kind is TokenKind.CLASS
    assert token.ranges == (("a", "c"), ("x", "x"), ("z", "y"))
    assert token.value == "[a-cxz-y]"


def test_class_range_end_may_be_bracket() -> None:
    (token,) = tokens.tokenize("[a-]]")
    assert token.ranges == (("a", "]"),)


@pytest.mark.parametrize(
    "pattern,reason",
    [
        ("[a", "unterminated class"),
        ("[]", "empty class"),
        ("[a-", "range without end"),
        ("ab\\", "dangling escape"),
    ],
)
def test_malformed_fragments(pattern: str, reason: str) -> None:
    result = tokens.tokenize(pattern)
    assert result[-1].kind is TokenKind.INVALID
    assert result[-1].value == reason


def test_tokenize_stops_after_invalid() -> None:
    result = tokens.tokenize("[]abc")
    assert len(result) == 1


def test_nul_ends_pattern() -> None:
    assert _kinds("ab\0*") == [TokenKind.LITERAL, TokenKind.LITERAL]


def test_fold_keeps_single_code_points() -> None:
    assert tokens.fold("A") == "a"
    assert tokens.fold("7") == "7"
    # lowering U+0130 produces two code points
    assert tokens.fold("İ") == "İ"


def test_describe() -> None:
    (cls,) = tokens.tokenize("[a-c_]")
    assert tokens.describe(cls) == "class [a-c, _]"
    assert tokens.describe(tokens.tokenize("*")[0]) == "any run"
    assert tokens.describe(tokens.tokenize("\\?")[0]) == "escaped '?'"
