"""Exception hierarchy for strict HTML parsing.

Syntax failures are raised by the grammar, semantic failures by the
structural analyzer. Both derive from ``MarkupError`` so callers can treat
every markup problem uniformly.
"""

from typing import Optional, Sequence, Tuple


def line_column(text: str, offset: int) -> Tuple[int, int]:
    """Determine the 1-based line and column of an offset in ``text``."""
    offset = max(0, min(offset, len(text)))
    line = text.count("\n", 0, offset) + 1
    last_newline = text.rfind("\n", 0, offset)
    return line, offset - last_newline


class MarkupError(Exception):
    """Base class for all markup parsing and analysis errors."""


class ParseFailure(MarkupError):
    """The input does not match a grammar rule at the current position.

    Failures are raised constantly while the grammar backtracks, so the
    line/column and the message are only computed when asked for.
    """

    def __init__(
        self,
        rule: str,
        text: str,
        offset: int,
        causes: Sequence["ParseFailure"] = ()
    ) -> None:
        super().__init__(rule, offset)
        self.rule = rule
        self.text = text
        self.offset = offset
        self.causes = tuple(causes)

    @property
    def line(self) -> int:
        return line_column(self.text, self.offset)[0]

    @property
    def column(self) -> int:
        return line_column(self.text, self.offset)[1]

    @property
    def message(self) -> str:
        return f"{self.line}:{self.column} parse error: expected {self.rule}"

    def furthest(self) -> "ParseFailure":
        """Return the failure that got deepest into the input.

        Ties keep the outermost failure, which carries the more descriptive
        rule name.
        """
        best = self
        for cause in self.causes:
            candidate = cause.furthest()
            if candidate.offset > best.offset:
                best = candidate
        return best

    def __str__(self) -> str:
        return self.message


class NestingDepthError(MarkupError):
    """Markup nests deeper than the configured maximum depth."""

    def __init__(
        self,
        max_depth: Optional[int],
        offset: int,
        text: Optional[str] = None
    ) -> None:
        self.max_depth = max_depth
        self.offset = offset
        self.text = text
        if max_depth is None:
            message = "Element nesting exceeds the interpreter recursion limit"
        else:
            message = (
                f"Element nesting exceeds the maximum depth of {max_depth} "
                f"at offset {offset}"
            )
        super().__init__(message)


class TagMismatchError(MarkupError):
    """A start tag and its end tag carry different names."""

    def __init__(self, start_name: str, end_name: str) -> None:
        self.start_name = start_name
        self.end_name = end_name
        super().__init__(
            f"Start and end tag are not equal. Start tag: {start_name}, "
            f"end tag: {end_name}"
        )
