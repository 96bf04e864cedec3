"""Tests for the location and token classifiers."""

from __future__ import annotations

import pytest

from spelcpp.analyzers.location import is_in_scope, is_system_position
from spelcpp.analyzers.tokens import classify
from spelcpp.models import LexicalTag, SourcePosition, TokenKind
from tests._fixtures.fake_unit import FakeToken, FakeUnit, pos

MAIN = "/work/src/main.cpp"


def test_primary_file_position_is_in_scope() -> None:
    unit = FakeUnit(primary_file=MAIN)
    assert is_in_scope(pos(MAIN, 3), unit) is True


def test_equivalent_spelling_of_primary_path_is_in_scope() -> None:
    unit = FakeUnit(primary_file=MAIN)
    assert is_in_scope(pos("/work/src/../src/main.cpp", 3), unit) is True


def test_system_header_is_out_of_scope() -> None:
    unit = FakeUnit(primary_file=MAIN)
    assert is_in_scope(pos("/usr/include/stdio.h", 10, system=True), unit) is False


def test_project_header_is_out_of_scope() -> None:
    unit = FakeUnit(primary_file=MAIN)
    assert is_in_scope(pos("/work/src/main.h", 10), unit) is False


@pytest.mark.parametrize("position", [None, SourcePosition("", 1, 1)])
def test_unresolvable_position_is_out_of_scope(position: SourcePosition | None) -> None:
    unit = FakeUnit(primary_file=MAIN)
    assert is_in_scope(position, unit) is False


def test_system_position_predicate() -> None:
    assert is_system_position(pos("/usr/include/vector", 1, system=True)) is True
    assert is_system_position(pos("/work/src/main.h", 1)) is False
    assert is_system_position(None) is False


def test_comment_keeps_delimiters() -> None:
    token = FakeToken(LexicalTag.COMMENT, "/* spelling mistkae */", pos(MAIN, 1))
    assert classify(token) == (TokenKind.COMMENT, "/* spelling mistkae */")


def test_double_quoted_literal_is_string_literal() -> None:
    token = FakeToken(LexicalTag.LITERAL, '"hello"', pos(MAIN, 5))
    assert classify(token) == (TokenKind.STRING_LITERAL, '"hello"')


@pytest.mark.parametrize("spelling", ["42", "3.14f", "'a'", 'L"wide"', 'u8"utf"', 'R"(raw)"'])
def test_other_literals_are_not_string_literals(spelling: str) -> None:
    token = FakeToken(LexicalTag.LITERAL, spelling, pos(MAIN, 5))
    kind, _ = classify(token)
    assert kind is TokenKind.OTHER


@pytest.mark.parametrize(
    "tag", [LexicalTag.IDENTIFIER, LexicalTag.KEYWORD, LexicalTag.PUNCTUATION]
)
def test_non_literal_tags_are_other(tag: LexicalTag) -> None:
    token = FakeToken(tag, '"', pos(MAIN, 1))
    assert classify(token)[0] is TokenKind.OTHER


def test_origin_file_decides_scope_over_line_directive_name() -> None:
    unit = FakeUnit(primary_file=MAIN)
    renamed = SourcePosition("renamed.cpp", 200, 5, origin_file=MAIN)
    borrowed = SourcePosition(MAIN, 3, 1, origin_file="/work/src/main.h")

    assert is_in_scope(renamed, unit) is True
    assert is_in_scope(borrowed, unit) is False
