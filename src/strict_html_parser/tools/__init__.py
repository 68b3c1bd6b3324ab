"""Developer tools for Strict HTML Parser.

This module provides performance profiling of the parse and analysis stages.
"""

from .profiling import (
    PerformanceProfiler,
    PerformanceReport,
    ProfilingSession,
    StagePerformance,
)

__all__ = [
    "PerformanceProfiler",
    "PerformanceReport",
    "ProfilingSession",
    "StagePerformance",
]
