"""Tests for the parser combinator toolkit."""

import pytest

from strict_html_parser.grammar.combinators import (
    Cursor,
    alt,
    char,
    delimited,
    label,
    literal,
    many0,
    many1,
    map_value,
    multispace0,
    none_of,
    run_rule,
    satisfy,
    sequence,
    take_while,
    take_while1,
)
from strict_html_parser.shared.errors import ParseFailure


class TestCursor:
    """Test the immutable input cursor."""

    def test_defaults(self) -> None:
        cursor = Cursor("abc")
        assert cursor.offset == 0
        assert cursor.depth == 0
        assert cursor.remaining == "abc"
        assert not cursor.at_end

    def test_advance_returns_new_cursor(self) -> None:
        cursor = Cursor("abc")
        moved = cursor.advance(2)
        assert moved.remaining == "c"
        assert cursor.remaining == "abc"

    def test_peek_at_end(self) -> None:
        cursor = Cursor("ab", 2)
        assert cursor.at_end
        assert cursor.peek() == ""

    def test_descend_and_ascend(self) -> None:
        cursor = Cursor("x")
        assert cursor.descend().depth == 1
        assert cursor.descend().ascend() == cursor

    def test_fail_builds_parse_failure(self) -> None:
        failure = Cursor("ab\ncd", 4).fail("thing")
        assert isinstance(failure, ParseFailure)
        assert failure.rule == "thing"
        assert failure.offset == 4
        assert failure.line == 2
        assert failure.column == 2


class TestCharacterMatchers:
    """Test single character and literal matchers."""

    def test_satisfy(self) -> None:
        digit = satisfy(str.isdigit, "digit")
        assert run_rule(digit, "7a") == ("a", "7")
        with pytest.raises(ParseFailure):
            run_rule(digit, "a7")

    def test_satisfy_on_empty_input(self) -> None:
        with pytest.raises(ParseFailure):
            run_rule(satisfy(lambda ch: True, "any"), "")

    def test_none_of(self) -> None:
        rule = none_of("xy", "not_xy")
        assert run_rule(rule, "ax") == ("x", "a")
        with pytest.raises(ParseFailure):
            run_rule(rule, "xa")

    def test_char(self) -> None:
        assert run_rule(char("<"), "<a") == ("a", "<")
        with pytest.raises(ParseFailure):
            run_rule(char("<"), ">")

    def test_literal(self) -> None:
        assert run_rule(literal("</"), "</a>") == ("a>", "</")
        with pytest.raises(ParseFailure) as exc_info:
            run_rule(literal("/>"), "/ >")
        assert exc_info.value.offset == 0


class TestRepetition:
    """Test take_while and many combinators."""

    def test_take_while_may_match_nothing(self) -> None:
        assert run_rule(take_while(str.isdigit), "abc") == ("abc", "")

    def test_take_while1_requires_a_match(self) -> None:
        assert run_rule(take_while1(str.isdigit, "digits"), "123a") == ("a", "123")
        with pytest.raises(ParseFailure):
            run_rule(take_while1(str.isdigit, "digits"), "a123")

    def test_multispace0(self) -> None:
        assert run_rule(multispace0, " \t\r\nx ") == ("x ", " \t\r\n")
        assert run_rule(multispace0, "x") == ("x", "")

    def test_many0_collects_values(self) -> None:
        assert run_rule(many0(char("a")), "aaab") == ("b", ["a", "a", "a"])
        assert run_rule(many0(char("a")), "b") == ("b", [])

    def test_many0_stops_without_progress(self) -> None:
        assert run_rule(many0(take_while(str.isdigit)), "abc") == ("abc", [])

    def test_many1(self) -> None:
        assert run_rule(many1(char("a"), "as"), "aab") == ("b", ["a", "a"])
        with pytest.raises(ParseFailure) as exc_info:
            run_rule(many1(char("a"), "as"), "b")
        assert exc_info.value.rule == "as"


class TestComposition:
    """Test choice and sequencing combinators."""

    def test_alt_first_match_wins(self) -> None:
        rule = alt(literal("ab"), literal("a"), name="a_or_ab")
        assert run_rule(rule, "abc") == ("c", "ab")
        assert run_rule(rule, "ac") == ("c", "a")

    def test_alt_restarts_every_alternative_at_same_offset(self) -> None:
        rule = alt(sequence(char("a"), char("b")), sequence(char("a"), char("c")), name="ab_or_ac")
        assert run_rule(rule, "ac") == ("", ("a", "c"))

    def test_alt_failure_keeps_causes(self) -> None:
        rule = alt(sequence(char("a"), char("b")), char("x"), name="choice")
        with pytest.raises(ParseFailure) as exc_info:
            run_rule(rule, "ac")
        failure = exc_info.value
        assert failure.rule == "choice"
        assert len(failure.causes) == 2
        assert failure.furthest().offset == 1

    def test_sequence(self) -> None:
        rule = sequence(char("<"), take_while1(str.isalpha, "name"), char(">"))
        assert run_rule(rule, "<p>x") == ("x", ("<", "p", ">"))

    def test_delimited(self) -> None:
        rule = delimited(char("("), take_while(lambda ch: ch != ")"), char(")"))
        assert run_rule(rule, "(inner)rest") == ("rest", "inner")

    def test_map_value(self) -> None:
        rule = map_value(take_while1(str.isdigit, "number"), int)
        assert run_rule(rule, "42!") == ("!", 42)

    def test_label_renames_failure(self) -> None:
        rule = label("greeting", sequence(literal("he"), literal("llo")))
        with pytest.raises(ParseFailure) as exc_info:
            run_rule(rule, "help")
        assert exc_info.value.rule == "greeting"
        assert exc_info.value.offset == 0
        assert exc_info.value.furthest().offset == 2
