"""Tests for errors, diagnostics and logging helpers."""

import logging

import pytest

from strict_html_parser.shared import (
    DiagnosticEntry,
    DiagnosticSeverity,
    MarkupError,
    NestingDepthError,
    ParseFailure,
    PerformanceMetrics,
    TagMismatchError,
    get_logger,
)
from strict_html_parser.shared.errors import line_column


class TestLineColumn:
    """Test offset to line/column conversion."""

    @pytest.mark.parametrize(
        "offset,expected",
        [(0, (1, 1)), (2, (1, 3)), (3, (2, 1)), (5, (2, 3)), (99, (2, 4))],
    )
    def test_positions(self, offset: int, expected) -> None:
        assert line_column("ab\ncde", offset) == expected


class TestErrors:
    """Test the exception hierarchy."""

    def test_hierarchy(self) -> None:
        assert issubclass(ParseFailure, MarkupError)
        assert issubclass(NestingDepthError, MarkupError)
        assert issubclass(TagMismatchError, MarkupError)
        assert not issubclass(NestingDepthError, ParseFailure)

    def test_parse_failure_message(self) -> None:
        failure = ParseFailure("end_tag", "<a>\n  </a", 9)
        assert failure.line == 2
        assert failure.column == 6
        assert str(failure) == "2:6 parse error: expected end_tag"

    def test_furthest_prefers_outermost_on_tie(self) -> None:
        inner = ParseFailure("'<'", "abc", 1)
        outer = ParseFailure("start_tag", "abc", 1, (inner,))
        assert outer.furthest() is outer

    def test_furthest_descends_into_causes(self) -> None:
        deepest = ParseFailure("'>'", "abcdef", 5)
        middle = ParseFailure("end_tag", "abcdef", 3, (deepest,))
        other = ParseFailure("self_closing_element", "abcdef", 0)
        outer = ParseFailure("html_element", "abcdef", 0, (middle, other))
        assert outer.furthest() is deepest

    def test_nesting_depth_messages(self) -> None:
        assert "maximum depth of 3" in str(NestingDepthError(3, 12))
        assert "recursion limit" in str(NestingDepthError(None, 0))

    def test_tag_mismatch_message(self) -> None:
        error = TagMismatchError("div", "other")
        assert str(error) == "Start and end tag are not equal. Start tag: div, end tag: other"


class TestResultTypes:
    """Test diagnostic and metric types."""

    def test_diagnostic_validation(self) -> None:
        with pytest.raises(ValueError, match="Diagnostic message cannot be empty"):
            DiagnosticEntry(DiagnosticSeverity.ERROR, "", "grammar")
        with pytest.raises(ValueError, match="Diagnostic component cannot be empty"):
            DiagnosticEntry(DiagnosticSeverity.ERROR, "boom", "")

    def test_diagnostic_to_dict(self) -> None:
        entry = DiagnosticEntry(DiagnosticSeverity.WARNING, "careful", "grammar", {"offset": 1})
        assert entry.to_dict() == {
            "severity": "WARNING",
            "message": "careful",
            "component": "grammar",
            "position": {"offset": 1},
            "details": None,
        }

    def test_performance_rates(self) -> None:
        metrics = PerformanceMetrics(
            processing_time_ms=2.0,
            characters_processed=100,
            characters_consumed=80,
        )
        assert metrics.characters_per_second == 50000.0
        assert metrics.consumption_ratio == 0.8

    def test_performance_rates_without_data(self) -> None:
        metrics = PerformanceMetrics()
        assert metrics.characters_per_second == 0.0
        assert metrics.consumption_ratio == 0.0


class TestCorrelationLogger:
    """Test correlation-aware logging."""

    def test_component_defaults_to_module_name(self) -> None:
        assert get_logger("strict_html_parser.api.parser").component == "parser"

    def test_records_carry_correlation_info(self, caplog) -> None:
        logger = get_logger("strict_html_parser.test", "corr-7", "unit")
        with caplog.at_level(logging.INFO, logger="strict_html_parser.test"):
            logger.info("hello", extra={"answer": 42})

        record = caplog.records[-1]
        assert record.getMessage() == "hello"
        assert record.component == "unit"
        assert record.correlation_id == "corr-7"
        assert record.answer == 42
