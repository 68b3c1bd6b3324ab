"""Parser combinators over an immutable input cursor.

A rule is any callable taking a ``Cursor`` and returning ``(cursor, value)``
where the returned cursor is positioned after the consumed input. A rule that
does not match raises ``ParseFailure``. Because the cursor is an immutable
value, a caller that catches the failure still holds its own cursor and can
try another alternative from exactly where it started.
"""

from typing import Any, Callable, Iterable, List, NamedTuple, Tuple

from strict_html_parser.shared.errors import ParseFailure

WHITESPACE = frozenset(" \t\n\r")


class Cursor(NamedTuple):
    """Position in the input text plus the current element nesting depth."""

    text: str
    offset: int = 0
    depth: int = 0

    @property
    def remaining(self) -> str:
        return self.text[self.offset:]

    @property
    def at_end(self) -> bool:
        return self.offset >= len(self.text)

    def peek(self) -> str:
        """Return the next character, or an empty string at end of input."""
        return self.text[self.offset:self.offset + 1]

    def startswith(self, prefix: str) -> bool:
        return self.text.startswith(prefix, self.offset)

    def advance(self, count: int = 1) -> "Cursor":
        return self._replace(offset=self.offset + count)

    def descend(self) -> "Cursor":
        return self._replace(depth=self.depth + 1)

    def ascend(self) -> "Cursor":
        return self._replace(depth=self.depth - 1)

    def fail(self, rule: str, causes: Iterable[ParseFailure] = ()) -> ParseFailure:
        """Build a failure for ``rule`` at this position."""
        return ParseFailure(rule, self.text, self.offset, tuple(causes))


Rule = Callable[[Cursor], Tuple[Cursor, Any]]


def satisfy(predicate: Callable[[str], bool], name: str) -> Rule:
    """Match one character accepted by ``predicate``."""

    def rule(cursor: Cursor) -> Tuple[Cursor, str]:
        ch = cursor.peek()
        if ch and predicate(ch):
            return cursor.advance(), ch
        raise cursor.fail(name)

    return rule


def none_of(excluded: str, name: str) -> Rule:
    """Match one character that is not in ``excluded``."""
    excluded_set = frozenset(excluded)
    return satisfy(lambda ch: ch not in excluded_set, name)


def char(expected: str) -> Rule:
    """Match exactly the character ``expected``."""
    return satisfy(lambda ch: ch == expected, repr(expected))


def literal(expected: str) -> Rule:
    """Match the string ``expected``."""
    name = repr(expected)

    def rule(cursor: Cursor) -> Tuple[Cursor, str]:
        if cursor.startswith(expected):
            return cursor.advance(len(expected)), expected
        raise cursor.fail(name)

    return rule


def take_while(predicate: Callable[[str], bool]) -> Rule:
    """Consume the longest run of characters accepted by ``predicate``."""

    def rule(cursor: Cursor) -> Tuple[Cursor, str]:
        text = cursor.text
        end = cursor.offset
        length = len(text)
        while end < length and predicate(text[end]):
            end += 1
        return cursor._replace(offset=end), text[cursor.offset:end]

    return rule


def take_while1(predicate: Callable[[str], bool], name: str) -> Rule:
    """Like ``take_while`` but at least one character must match."""
    inner = take_while(predicate)

    def rule(cursor: Cursor) -> Tuple[Cursor, str]:
        rest, value = inner(cursor)
        if not value:
            raise cursor.fail(name)
        return rest, value

    return rule


multispace0 = take_while(lambda ch: ch in WHITESPACE)


def many0(inner: Rule) -> Rule:
    """Apply ``inner`` until it fails, collecting values into a list.

    Stops as well when ``inner`` succeeds without consuming input, which
    would otherwise loop forever.
    """

    def rule(cursor: Cursor) -> Tuple[Cursor, List[Any]]:
        values = []
        while True:
            try:
                rest, value = inner(cursor)
            except ParseFailure:
                return cursor, values
            if rest.offset == cursor.offset:
                return cursor, values
            values.append(value)
            cursor = rest

    return rule


def many1(inner: Rule, name: str) -> Rule:
    """Like ``many0`` but ``inner`` has to match at least once."""
    repeat = many0(inner)

    def rule(cursor: Cursor) -> Tuple[Cursor, List[Any]]:
        try:
            cursor_after_first, first = inner(cursor)
        except ParseFailure as exc:
            raise cursor.fail(name, (exc,)) from exc
        rest, values = repeat(cursor_after_first)
        return rest, [first] + values

    return rule


def alt(*alternatives: Rule, name: str) -> Rule:
    """Ordered choice: the first alternative that matches wins.

    Every alternative starts from the same cursor.
    """

    def rule(cursor: Cursor) -> Tuple[Cursor, Any]:
        failures = []
        for alternative in alternatives:
            try:
                return alternative(cursor)
            except ParseFailure as exc:
                failures.append(exc)
        raise cursor.fail(name, failures)

    return rule


def sequence(*parts: Rule) -> Rule:
    """Apply ``parts`` in order, returning a tuple of their values."""

    def rule(cursor: Cursor) -> Tuple[Cursor, Tuple[Any, ...]]:
        values = []
        for part in parts:
            cursor, value = part(cursor)
            values.append(value)
        return cursor, tuple(values)

    return rule


def delimited(opening: Rule, inner: Rule, closing: Rule) -> Rule:
    """Match ``opening inner closing`` and keep only the inner value."""
    body = sequence(opening, inner, closing)

    def rule(cursor: Cursor) -> Tuple[Cursor, Any]:
        rest, (_, value, _) = body(cursor)
        return rest, value

    return rule


def map_value(inner: Rule, transform: Callable[[Any], Any]) -> Rule:
    """Transform the value produced by ``inner``."""

    def rule(cursor: Cursor) -> Tuple[Cursor, Any]:
        rest, value = inner(cursor)
        return rest, transform(value)

    return rule


def label(name: str, inner: Rule) -> Rule:
    """Report failures of ``inner`` as a failure of the rule ``name``."""

    def rule(cursor: Cursor) -> Tuple[Cursor, Any]:
        try:
            return inner(cursor)
        except ParseFailure as exc:
            raise cursor.fail(name, (exc,)) from exc

    return rule


def run_rule(rule: Rule, text: str) -> Tuple[str, Any]:
    """Apply ``rule`` to the start of ``text``.

    Returns:
        Tuple of the unconsumed remainder and the rule's value

    Raises:
        ParseFailure: If the rule does not match
    """
    rest, value = rule(Cursor(text))
    return rest.remaining, value
