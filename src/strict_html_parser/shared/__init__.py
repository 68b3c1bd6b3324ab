"""Shared utilities for strict HTML parsing.

This module provides the configuration object, exception hierarchy,
diagnostic/metric result types and logging helpers used by every layer.
"""

from .config import ParserConfig
from .errors import (
    MarkupError,
    NestingDepthError,
    ParseFailure,
    TagMismatchError,
)
from .logging import CorrelationLogger, get_logger
from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    PerformanceMetrics,
)

__all__ = [
    "ParserConfig",
    "MarkupError",
    "NestingDepthError",
    "ParseFailure",
    "TagMismatchError",
    "CorrelationLogger",
    "get_logger",
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "PerformanceMetrics",
]
