"""Performance profiling tools for strict HTML parsing.

Measures wall time and resident memory of the two processing stages, the
grammar (``parse``) and the structural analyzer (``analyze``), per session.
"""

import json
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import psutil

from strict_html_parser.grammar import MarkupGrammar
from strict_html_parser.shared import MarkupError, NestingDepthError, ParserConfig
from strict_html_parser.shared.logging import get_logger
from strict_html_parser.tree import StructureAnalyzer, iter_elements


@dataclass
class StagePerformance:
    """Performance metrics for one processing stage."""

    stage_name: str
    start_time: float
    end_time: float = 0.0
    memory_start: int = 0  # bytes
    memory_end: int = 0  # bytes
    operations_count: int = 0

    @property
    def duration_ms(self) -> float:
        """Processing duration in milliseconds."""
        return (self.end_time - self.start_time) * 1000

    @property
    def memory_delta(self) -> int:
        """Resident memory change in bytes."""
        return self.memory_end - self.memory_start

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stage_name": self.stage_name,
            "duration_ms": self.duration_ms,
            "memory_delta": self.memory_delta,
            "operations_count": self.operations_count,
        }


@dataclass
class ProfilingSession:
    """Container for one profiled document."""

    session_id: str
    start_time: float
    end_time: float = 0.0
    input_size: int = 0  # characters
    stages: List[StagePerformance] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def total_duration_ms(self) -> float:
        return (self.end_time - self.start_time) * 1000

    @property
    def characters_per_second(self) -> float:
        duration_s = self.end_time - self.start_time
        if duration_s <= 0:
            return 0.0
        return self.input_size / duration_s

    def get_stage(self, stage_name: str) -> Optional[StagePerformance]:
        for stage in self.stages:
            if stage.stage_name == stage_name:
                return stage
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "session_id": self.session_id,
            "input_size": self.input_size,
            "total_duration_ms": self.total_duration_ms,
            "characters_per_second": self.characters_per_second,
            "metadata": self.metadata,
            "stages": [stage.to_dict() for stage in self.stages],
        }


@dataclass
class PerformanceReport:
    """Summary over all sessions recorded by a profiler."""

    sessions: List[ProfilingSession]
    generation_time: float

    @property
    def session_count(self) -> int:
        return len(self.sessions)

    @property
    def average_duration_ms(self) -> float:
        if not self.sessions:
            return 0.0
        return sum(s.total_duration_ms for s in self.sessions) / len(self.sessions)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "generation_time": self.generation_time,
            "summary": {
                "session_count": self.session_count,
                "average_duration_ms": self.average_duration_ms,
            },
            "sessions": [session.to_dict() for session in self.sessions],
        }


class PerformanceProfiler:
    """Profiler for parse and analysis stages.

    Examples:
        >>> profiler = PerformanceProfiler()
        >>> session = profiler.profile_document("<p>text</p>")
        >>> session.get_stage("parse").duration_ms >= 0
        True

        Manual stages:
        >>> from strict_html_parser.grammar import parse_element
        >>> with profiler.profile_parsing("manual", input_size=11) as session:
        ...     with profiler.profile_stage(session, "parse"):
        ...         parse_element("<p>text</p>")
    """

    def __init__(self, enable_memory_tracking: bool = True) -> None:
        self.enable_memory_tracking = enable_memory_tracking
        self.sessions: List[ProfilingSession] = []
        self.logger = get_logger(__name__, None, "performance_profiler")
        self._process = psutil.Process() if enable_memory_tracking else None

    def current_memory(self) -> int:
        """Resident set size of this process in bytes, 0 when not tracking."""
        if self._process is None:
            return 0
        return self._process.memory_info().rss

    def start_session(self, session_id: str, input_size: int = 0) -> ProfilingSession:
        session = ProfilingSession(
            session_id=session_id,
            start_time=time.time(),
            input_size=input_size
        )
        self.logger.debug(
            "Started profiling session",
            extra={"session_id": session_id, "input_size": input_size}
        )
        return session

    def end_session(self, session: ProfilingSession) -> None:
        session.end_time = time.time()
        self.sessions.append(session)
        self.logger.info(
            "Ended profiling session",
            extra={
                "session_id": session.session_id,
                "duration_ms": session.total_duration_ms,
                "stage_count": len(session.stages)
            }
        )

    def profile_stage(self, session: ProfilingSession, stage_name: str) -> "StageProfiler":
        """Return a context manager recording ``stage_name`` into ``session``."""
        return StageProfiler(self, session, stage_name)

    def profile_parsing(self, session_id: str, input_size: int = 0) -> "ParsingProfiler":
        """Return a context manager wrapping one complete profiling session."""
        return ParsingProfiler(self, session_id, input_size)

    def profile_document(
        self,
        text: str,
        config: Optional[ParserConfig] = None,
        session_id: Optional[str] = None
    ) -> ProfilingSession:
        """Parse and analyze ``text``, recording both stages.

        Markup errors and interpreter stack exhaustion do not propagate; the
        outcome is stored in the session metadata under ``success`` and
        ``error``.
        """
        config = config or ParserConfig.lenient()
        grammar = MarkupGrammar(config.max_depth)
        analyzer = StructureAnalyzer(config.correlation_id)
        session_id = session_id or f"session_{len(self.sessions) + 1}"

        with self.profile_parsing(session_id, input_size=len(text)) as session:
            session.metadata["success"] = False
            try:
                with self.profile_stage(session, "parse") as stage:
                    _, element = grammar.parse(text)
                    stage.operations_count = sum(1 for _ in iter_elements(element))
            except MarkupError as e:
                session.metadata["error"] = str(e)
                return session
            except RecursionError:
                session.metadata["error"] = str(NestingDepthError(None, 0, text))
                return session

            with self.profile_stage(session, "analyze") as stage:
                analysis = analyzer.analyze(element)
                stage.operations_count = analysis.elements_checked

            session.metadata["success"] = analysis.success
            if not analysis.success:
                session.metadata["error"] = analysis.message

        return session

    def generate_report(self) -> PerformanceReport:
        return PerformanceReport(sessions=list(self.sessions), generation_time=time.time())

    def save_report(self, report: PerformanceReport, output_path: Path) -> None:
        """Write ``report`` to ``output_path`` as JSON."""
        output_path.write_text(json.dumps(report.to_dict(), indent=2))
        self.logger.info(
            "Saved performance report",
            extra={"output_path": str(output_path), "session_count": report.session_count}
        )


class StageProfiler:
    """Context manager for profiling one stage."""

    def __init__(
        self,
        profiler: PerformanceProfiler,
        session: ProfilingSession,
        stage_name: str
    ) -> None:
        self.profiler = profiler
        self.session = session
        self.stage_name = stage_name
        self.stage: Optional[StagePerformance] = None

    def __enter__(self) -> StagePerformance:
        self.stage = StagePerformance(
            stage_name=self.stage_name,
            start_time=time.time(),
            memory_start=self.profiler.current_memory()
        )
        return self.stage

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stage.end_time = time.time()
        self.stage.memory_end = self.profiler.current_memory()
        self.session.stages.append(self.stage)


class ParsingProfiler:
    """Context manager for profiling a complete session."""

    def __init__(self, profiler: PerformanceProfiler, session_id: str, input_size: int) -> None:
        self.profiler = profiler
        self.session_id = session_id
        self.input_size = input_size
        self.session: Optional[ProfilingSession] = None

    def __enter__(self) -> ProfilingSession:
        self.session = self.profiler.start_session(self.session_id, self.input_size)
        return self.session

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.profiler.end_session(self.session)
