"""Structural analysis of parsed markup trees.

The grammar accepts ``<a>...</b>``; this module rejects it. Every element
with children must close with the same name it opened with, compared
case-insensitively. Analysis stops at the first mismatch found in a
depth-first, left-to-right walk.
"""

import time
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

from strict_html_parser.shared import TagMismatchError, get_logger
from strict_html_parser.tree.nodes import (
    Child,
    Element,
    ElementWithChildren,
    SelfClosingElement,
    iter_elements,
)


def analyze_tree(tree: Element) -> None:
    """Check that start and end tag names match throughout ``tree``.

    Args:
        tree: Parsed element

    Raises:
        TagMismatchError: For the first element whose end tag name differs
            from its start tag name
    """
    if isinstance(tree, SelfClosingElement):
        return
    if isinstance(tree, ElementWithChildren):
        start_name = tree.start_tag.name
        end_name = tree.end_tag.name
        if start_name.lower() != end_name.lower():
            raise TagMismatchError(start_name, end_name)
        analyze_children(tree.children)
        return
    raise TypeError(f"Expected an element, got {type(tree).__name__}")


def analyze_children(children: Sequence[Child]) -> None:
    """Analyze element children in order; text children are skipped."""
    for child in children:
        if isinstance(child, (SelfClosingElement, ElementWithChildren)):
            analyze_tree(child)


@dataclass
class AnalysisResult:
    """Outcome of analyzing one tree."""

    success: bool = True
    message: Optional[str] = None
    start_name: Optional[str] = None
    end_name: Optional[str] = None
    elements_checked: int = 0
    processing_time_ms: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "message": self.message,
            "start_name": self.start_name,
            "end_name": self.end_name,
            "elements_checked": self.elements_checked,
        }


class StructureAnalyzer:
    """Runs ``analyze_tree`` and reports the verdict as an ``AnalysisResult``.

    Tag mismatches are reported in the result rather than raised.
    """

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "structure_analyzer")

    def analyze(self, tree: Element) -> AnalysisResult:
        """Analyze ``tree`` and return the verdict."""
        start_time = time.time()
        result = AnalysisResult(elements_checked=sum(1 for _ in iter_elements(tree)))

        try:
            analyze_tree(tree)
        except TagMismatchError as e:
            result.success = False
            result.message = str(e)
            result.start_name = e.start_name
            result.end_name = e.end_name
            self.logger.info(
                "Tag mismatch found",
                extra={"start_name": e.start_name, "end_name": e.end_name}
            )

        result.processing_time_ms = (time.time() - start_time) * 1000
        self.logger.debug(
            "Structure analysis completed",
            extra={
                "success": result.success,
                "elements_checked": result.elements_checked,
                "processing_time_ms": result.processing_time_ms
            }
        )
        return result
