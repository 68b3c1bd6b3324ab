"""High level parsing API for strict HTML parsing.

Runs the grammar and the structural analyzer over a complete input string
and reports the outcome as a ``ParseResult``. Markup errors never escape from
this layer: syntax failures, depth violations and tag mismatches all end up
in ``ParseResult.error`` and its diagnostics.
"""

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from strict_html_parser.grammar import MarkupGrammar
from strict_html_parser.shared import (
    DiagnosticEntry,
    DiagnosticSeverity,
    MarkupError,
    NestingDepthError,
    ParseFailure,
    ParserConfig,
    PerformanceMetrics,
    get_logger,
)
from strict_html_parser.shared.errors import line_column
from strict_html_parser.tree import (
    AnalysisResult,
    Element,
    StructureAnalyzer,
    element_depth,
    iter_elements,
    to_dict,
)

MS_PER_SECOND = 1000
PREVIEW_LENGTH = 40


class TrailingInputError(MarkupError):
    """Non-whitespace input follows the top-level element."""

    def __init__(self, text: str, offset: int) -> None:
        self.text = text
        self.offset = offset
        self.line, self.column = line_column(text, offset)
        preview = text[offset:offset + PREVIEW_LENGTH]
        super().__init__(
            f"{self.line}:{self.column} unexpected trailing input: {preview!r}"
        )


@dataclass
class ParseResult:
    """Outcome of parsing and analyzing one document."""

    success: bool = False
    element: Optional[Element] = None
    remaining: str = ""
    error: Optional[Exception] = None
    analysis: Optional[AnalysisResult] = None
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    performance: PerformanceMetrics = field(default_factory=PerformanceMetrics)
    correlation_id: Optional[str] = None

    @property
    def is_well_formed(self) -> bool:
        """True if a tree was parsed and the analyzer accepted it."""
        return (
            self.element is not None
            and self.analysis is not None
            and self.analysis.success
        )

    @property
    def has_trailing_input(self) -> bool:
        return bool(self.remaining.strip(" \t\r\n"))

    @property
    def error_message(self) -> Optional[str]:
        if self.error is not None:
            return str(self.error)
        if self.analysis is not None and not self.analysis.success:
            return self.analysis.message
        return None

    def add_diagnostic(
        self,
        severity: DiagnosticSeverity,
        message: str,
        component: str,
        position: Optional[Dict[str, int]] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        self.diagnostics.append(
            DiagnosticEntry(
                severity=severity,
                message=message,
                component=component,
                position=position,
                details=details,
                correlation_id=self.correlation_id,
            )
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert the result to a JSON-compatible dictionary."""
        return {
            "success": self.success,
            "element": to_dict(self.element) if self.element is not None else None,
            "remaining": self.remaining,
            "error": self.error_message,
            "analysis": self.analysis.to_dict() if self.analysis else None,
            "diagnostics": [d.to_dict() for d in self.diagnostics],
            "performance": self.performance.to_dict(),
        }


def _failure_position(error: Exception) -> Optional[Dict[str, int]]:
    if isinstance(error, ParseFailure):
        return {"offset": error.offset, "line": error.line, "column": error.column}
    if isinstance(error, TrailingInputError):
        return {"offset": error.offset, "line": error.line, "column": error.column}
    if isinstance(error, NestingDepthError):
        return {"offset": error.offset}
    return None


class StrictHTMLParser:
    """Reusable parser holding a configuration and usage statistics.

    Examples:
        >>> parser = StrictHTMLParser()
        >>> result = parser.parse("<div><h1>Title</h1><div/></div>")
        >>> result.success
        True

        >>> parser = StrictHTMLParser(ParserConfig.strict())
        >>> parser.parse("<p>x</p> trailing").success
        False
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.config = config or ParserConfig.lenient()
        self.correlation_id = correlation_id or self.config.correlation_id
        self.logger = get_logger(__name__, self.correlation_id, "strict_html_parser")

        self._grammar = MarkupGrammar(self.config.max_depth)
        self._analyzer = StructureAnalyzer(self.correlation_id)

        self._parse_count = 0
        self._successful_parses = 0
        self._total_processing_time = 0.0

    def parse(self, text: str) -> ParseResult:
        """Parse ``text`` and analyze the resulting tree.

        Args:
            text: Complete markup document

        Returns:
            ParseResult; ``success`` is False on any syntax, depth, trailing
            input or tag mismatch error
        """
        start_time = time.time()
        result = ParseResult(correlation_id=self.correlation_id)
        result.performance.characters_processed = len(text)

        self.logger.info(
            "Starting parse",
            extra={"input_length": len(text), "max_depth": self.config.max_depth}
        )

        try:
            result.remaining, result.element = self._grammar.parse(text)
        except ParseFailure as e:
            result.error = e.furthest()
        except NestingDepthError as e:
            result.error = e
        except RecursionError:
            result.error = NestingDepthError(None, 0, text)
            self.logger.error(
                "Input nests deeper than the interpreter stack allows",
                extra={"characters": len(text)},
                exc_info=False
            )

        if result.element is not None:
            consumed = len(text) - len(result.remaining)
            result.performance.characters_consumed = consumed
            result.performance.elements_parsed = sum(1 for _ in iter_elements(result.element))
            result.performance.max_depth = element_depth(result.element)

            if not self.config.allow_trailing_input and result.has_trailing_input:
                offset = consumed + (len(result.remaining) - len(result.remaining.lstrip(" \t\r\n")))
                result.error = TrailingInputError(text, offset)

            if self.config.analyze:
                result.analysis = self._analyzer.analyze(result.element)

        self._finalize(result, start_time)
        return result

    def _finalize(self, result: ParseResult, start_time: float) -> None:
        result.success = result.error is None and (
            result.analysis is None or result.analysis.success
        )

        if self.config.enable_diagnostics:
            if result.error is not None:
                result.add_diagnostic(
                    DiagnosticSeverity.ERROR,
                    str(result.error),
                    "grammar",
                    position=_failure_position(result.error),
                    details={"error_type": type(result.error).__name__},
                )
            if result.analysis is not None and not result.analysis.success:
                result.add_diagnostic(
                    DiagnosticSeverity.ERROR,
                    result.analysis.message or "Tag mismatch",
                    "structure_analyzer",
                    details={
                        "start_name": result.analysis.start_name,
                        "end_name": result.analysis.end_name,
                    },
                )
            if result.success and result.has_trailing_input:
                result.add_diagnostic(
                    DiagnosticSeverity.INFO,
                    f"{len(result.remaining)} characters left unconsumed",
                    "strict_html_parser",
                )

        processing_time = (time.time() - start_time) * MS_PER_SECOND
        result.performance.processing_time_ms = processing_time

        self._parse_count += 1
        self._total_processing_time += processing_time
        if result.success:
            self._successful_parses += 1
            self.logger.info(
                "Parse completed",
                extra={
                    "elements_parsed": result.performance.elements_parsed,
                    "processing_time_ms": processing_time
                }
            )
        else:
            self.logger.warning(
                "Parse failed",
                extra={
                    "error": result.error_message,
                    "position": _failure_position(result.error) if result.error else None
                }
            )

    def parse_file(self, path: Union[str, Path], encoding: str = "utf-8") -> ParseResult:
        """Read ``path`` and parse its content.

        Raises:
            OSError: If the file cannot be read
        """
        text = Path(path).read_text(encoding=encoding)
        return self.parse(text)

    def reconfigure(self, config: ParserConfig) -> None:
        """Replace the configuration used by later parses."""
        self.config = config
        self._grammar = MarkupGrammar(config.max_depth)
        self.logger.info("Parser reconfigured", extra={"max_depth": config.max_depth})

    @property
    def statistics(self) -> Dict[str, Any]:
        """Get parser usage statistics."""
        return {
            "total_parses": self._parse_count,
            "successful_parses": self._successful_parses,
            "success_rate": (
                self._successful_parses / self._parse_count
                if self._parse_count > 0 else 0.0
            ),
            "total_processing_time_ms": self._total_processing_time,
            "average_processing_time_ms": (
                self._total_processing_time / self._parse_count
                if self._parse_count > 0 else 0.0
            ),
            "correlation_id": self.correlation_id,
        }

    def reset_statistics(self) -> None:
        self._parse_count = 0
        self._successful_parses = 0
        self._total_processing_time = 0.0


def parse(
    text: str,
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None
) -> ParseResult:
    """Parse and analyze a markup string.

    Examples:
        >>> result = parse("<div>This works as well!</other>")
        >>> result.success
        False
        >>> result.error_message
        'Start and end tag are not equal. Start tag: div, end tag: other'
    """
    return StrictHTMLParser(config, correlation_id).parse(text)


def parse_file(
    path: Union[str, Path],
    config: Optional[ParserConfig] = None,
    encoding: str = "utf-8",
    correlation_id: Optional[str] = None
) -> ParseResult:
    """Parse and analyze the markup stored in ``path``."""
    return StrictHTMLParser(config, correlation_id).parse_file(path, encoding)
