"""Grammar of the strict HTML-like markup language.

Rules are built bottom-up: character classes, then text, names and quoted
values, then attributes and tags, and finally elements. Elements and their
children refer to each other, so those rules live on ``MarkupGrammar`` where
the recursion goes through bound methods and an optional depth limit can be
applied. The module-level ``html_element`` and friends belong to an
unbounded default grammar.

Nesting depth of the input translates directly into Python stack depth.
"""

from typing import Optional, Tuple

from strict_html_parser.grammar.combinators import (
    Cursor,
    WHITESPACE,
    alt,
    char,
    delimited,
    label,
    literal,
    many0,
    map_value,
    multispace0,
    none_of,
    sequence,
    take_while,
    take_while1,
)
from strict_html_parser.shared.errors import NestingDepthError
from strict_html_parser.tree.nodes import (
    Attribute,
    Child,
    Element,
    ElementWithChildren,
    EndTag,
    SelfClosingElement,
    StartTag,
    StringValue,
    Text,
)

TEXT_EXCLUDED = "{<>}"
ATTRIBUTE_EXCLUDED = "\"<>'/= \t\n\r"

_TEXT_EXCLUDED_SET = frozenset(TEXT_EXCLUDED)
_ATTRIBUTE_EXCLUDED_SET = frozenset(ATTRIBUTE_EXCLUDED)


def is_text_char(ch: str) -> bool:
    return ch not in _TEXT_EXCLUDED_SET


def is_attribute_char(ch: str) -> bool:
    return ch not in _ATTRIBUTE_EXCLUDED_SET


def is_tag_name_char(ch: str) -> bool:
    # ASCII only: str.isalnum alone would accept letters from any script.
    return ch.isascii() and ch.isalnum()


html_char = none_of(TEXT_EXCLUDED, "html_char")
attribute_char = none_of(ATTRIBUTE_EXCLUDED, "attribute_char")

html_text = map_value(take_while1(is_text_char, "html_text"), Text)
tag_name = take_while1(is_tag_name_char, "tag_name")
attribute_name = take_while1(is_attribute_char, "attribute_name")

attribute_value_double_string = label(
    "attribute_value_double_string",
    map_value(
        delimited(char('"'), take_while(lambda ch: ch != '"'), char('"')),
        StringValue,
    ),
)
attribute_value_single_string = label(
    "attribute_value_single_string",
    map_value(
        delimited(char("'"), take_while(lambda ch: ch != "'"), char("'")),
        StringValue,
    ),
)
attribute_value = alt(
    attribute_value_double_string,
    attribute_value_single_string,
    name="attribute_value",
)

# Attributes without a value are not supported: a bare name fails here.
html_attribute = label(
    "html_attribute",
    map_value(
        sequence(
            multispace0,
            attribute_name,
            multispace0,
            char("="),
            multispace0,
            attribute_value,
        ),
        lambda parts: Attribute(name=parts[1], value=parts[5]),
    ),
)
html_attributes = map_value(many0(html_attribute), tuple)

start_tag = label(
    "start_tag",
    map_value(
        sequence(multispace0, char("<"), tag_name, html_attributes, multispace0, char(">")),
        lambda parts: StartTag(name=parts[2], attributes=parts[3]),
    ),
)
end_tag = label(
    "end_tag",
    map_value(delimited(literal("</"), tag_name, char(">")), EndTag),
)
self_closing_element = label(
    "self_closing_element",
    map_value(
        sequence(char("<"), tag_name, html_attributes, multispace0, literal("/>")),
        lambda parts: SelfClosingElement(StartTag(name=parts[1], attributes=parts[2])),
    ),
)


def _opens_element(cursor: Cursor) -> bool:
    """Check whether the input at ``cursor`` starts with ``<tagname``."""
    text = cursor.text
    i = cursor.offset
    while i < len(text) and text[i] in WHITESPACE:
        i += 1
    return text.startswith("<", i) and i + 1 < len(text) and is_tag_name_char(text[i + 1])


class MarkupGrammar:
    """Element-level rules, optionally bounded in nesting depth.

    Args:
        max_depth: Deepest element nesting accepted, ``None`` for no limit.
            The top-level element is at depth 1. Exceeding the limit raises
            ``NestingDepthError``, which aborts the parse instead of letting
            the grammar backtrack.
    """

    def __init__(self, max_depth: Optional[int] = None) -> None:
        if max_depth is not None and max_depth <= 0:
            raise ValueError("max_depth must be > 0 or None")
        self.max_depth = max_depth
        self._child = alt(html_text, self._element_child, name="html_child")
        self._children = map_value(many0(self._child), tuple)
        self._element = alt(
            self.element_with_children,
            self_closing_element,
            name="html_element",
        )

    def html_element(self, cursor: Cursor) -> Tuple[Cursor, Element]:
        """Parse an element, trying the with-children form first.

        The depth check only looks for ``<`` followed by a tag name
        character, so at the limit an unfinished tag such as ``<b</a>``
        raises ``NestingDepthError`` rather than ``ParseFailure``.
        """
        if (
            self.max_depth is not None
            and cursor.depth >= self.max_depth
            and _opens_element(cursor)
        ):
            raise NestingDepthError(self.max_depth, cursor.offset, cursor.text)
        return self._element(cursor)

    def element_with_children(self, cursor: Cursor) -> Tuple[Cursor, ElementWithChildren]:
        """Parse ``start_tag children end_tag`` without comparing the names."""
        cursor, opening = start_tag(cursor)
        cursor, children = self._children(cursor.descend())
        cursor, closing = end_tag(cursor.ascend())
        return cursor, ElementWithChildren(opening, children, closing)

    def html_child(self, cursor: Cursor) -> Tuple[Cursor, Child]:
        return self._child(cursor)

    def html_children(self, cursor: Cursor) -> Tuple[Cursor, Tuple[Child, ...]]:
        return self._children(cursor)

    def _element_child(self, cursor: Cursor) -> Tuple[Cursor, Element]:
        return self.html_element(cursor)

    def parse(self, text: str) -> Tuple[str, Element]:
        """Parse one element from the start of ``text``.

        Returns:
            Tuple of the unconsumed remainder and the parsed element

        Raises:
            ParseFailure: If ``text`` does not start with an element
            NestingDepthError: If the element nests deeper than ``max_depth``
        """
        rest, element = self.html_element(Cursor(text))
        return rest.remaining, element


_default_grammar = MarkupGrammar()

html_element = _default_grammar.html_element
element_with_children = _default_grammar.element_with_children
html_child = _default_grammar.html_child
html_children = _default_grammar.html_children


def parse_element(text: str, max_depth: Optional[int] = None) -> Tuple[str, Element]:
    """Parse one element from the start of ``text``.

    Trailing input after the element is returned to the caller untouched.

    Args:
        text: Complete markup input
        max_depth: Optional nesting limit, unbounded by default

    Returns:
        Tuple of the unconsumed remainder and the parsed element

    Raises:
        ParseFailure: If ``text`` does not start with an element
        NestingDepthError: If the element nests deeper than ``max_depth``
    """
    grammar = _default_grammar if max_depth is None else MarkupGrammar(max_depth)
    return grammar.parse(text)
