"""Typed syntax tree produced by the markup grammar.

The tree is a closed set of frozen dataclasses. An element owns its children
directly, there are no parent references, and nothing is mutated after the
parse that built it.
"""

from dataclasses import dataclass
from typing import Iterator, Tuple, Union


@dataclass(frozen=True)
class StringValue:
    """Quoted attribute value, stored without its delimiters."""

    value: str


# Only one value variant exists today.
AttributeValue = StringValue


@dataclass(frozen=True)
class Attribute:
    """Single ``name=value`` pair inside a start tag."""

    name: str
    value: AttributeValue

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Attribute name cannot be empty")


@dataclass(frozen=True)
class StartTag:
    """Opening tag with its attributes in source order.

    Duplicate attribute names are kept as written; no precedence between
    them is defined.
    """

    name: str
    attributes: Tuple[Attribute, ...] = ()

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Tag name cannot be empty")


@dataclass(frozen=True)
class EndTag:
    """Closing tag."""

    name: str

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Tag name cannot be empty")


@dataclass(frozen=True)
class Text:
    """Run of character data between tags."""

    text: str

    def __post_init__(self) -> None:
        if not self.text:
            raise ValueError("Text node cannot be empty")


@dataclass(frozen=True)
class SelfClosingElement:
    """Element written as ``<name .../>``."""

    start_tag: StartTag

    @property
    def name(self) -> str:
        return self.start_tag.name

    @property
    def attributes(self) -> Tuple[Attribute, ...]:
        return self.start_tag.attributes


@dataclass(frozen=True)
class ElementWithChildren:
    """Element written as ``<name ...>children</name>``.

    The end tag name is not required to match the start tag name here;
    that check belongs to the structural analyzer.
    """

    start_tag: StartTag
    children: Tuple["Child", ...]
    end_tag: EndTag

    @property
    def name(self) -> str:
        return self.start_tag.name

    @property
    def attributes(self) -> Tuple[Attribute, ...]:
        return self.start_tag.attributes


Element = Union[SelfClosingElement, ElementWithChildren]
Child = Union[Text, SelfClosingElement, ElementWithChildren]
ELEMENT_TYPES = (SelfClosingElement, ElementWithChildren)


def is_element(node: Child) -> bool:
    """Check whether a child node is an element rather than text."""
    return isinstance(node, ELEMENT_TYPES)


def iter_elements(element: Element) -> Iterator[Element]:
    """Yield ``element`` and all descendant elements, depth-first pre-order."""
    stack = [element]
    while stack:
        current = stack.pop()
        yield current
        if isinstance(current, ElementWithChildren):
            stack.extend(
                child for child in reversed(current.children) if is_element(child)
            )


def element_depth(element: Element) -> int:
    """Return the nesting depth of ``element``; a lone element has depth 1."""
    deepest = 0
    stack = [(element, 1)]
    while stack:
        current, depth = stack.pop()
        deepest = max(deepest, depth)
        if isinstance(current, ElementWithChildren):
            stack.extend(
                (child, depth + 1) for child in current.children if is_element(child)
            )
    return deepest


def text_content(element: Element) -> str:
    """Concatenate all text below ``element`` in document order."""
    parts = []
    stack = [element]
    while stack:
        current = stack.pop()
        if isinstance(current, Text):
            parts.append(current.text)
        elif isinstance(current, ElementWithChildren):
            stack.extend(reversed(current.children))
    return "".join(parts)
