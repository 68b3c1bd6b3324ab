"""Rendering of parsed trees as dictionaries, debug outlines and markup."""

from typing import Any, Dict, List

from strict_html_parser.tree.nodes import (
    Attribute,
    Child,
    Element,
    ElementWithChildren,
    SelfClosingElement,
    StartTag,
    Text,
)

INDENT = "  "


def attribute_to_dict(attribute: Attribute) -> Dict[str, Any]:
    return {"name": attribute.name, "value": attribute.value.value}


def to_dict(node: Child) -> Dict[str, Any]:
    """Convert a node and its descendants to JSON-compatible dictionaries."""
    if isinstance(node, Text):
        return {"type": "text", "text": node.text}
    if isinstance(node, SelfClosingElement):
        return {
            "type": "self_closing_element",
            "name": node.start_tag.name,
            "attributes": [attribute_to_dict(a) for a in node.start_tag.attributes],
        }
    if isinstance(node, ElementWithChildren):
        return {
            "type": "element",
            "name": node.start_tag.name,
            "attributes": [attribute_to_dict(a) for a in node.start_tag.attributes],
            "children": [to_dict(child) for child in node.children],
            "end_name": node.end_tag.name,
        }
    raise TypeError(f"Cannot serialize {type(node).__name__}")


def _format_attributes(start_tag: StartTag) -> str:
    return ", ".join(f"{a.name}={a.value.value!r}" for a in start_tag.attributes)


def _format_node(node: Child, depth: int, lines: List[str]) -> None:
    pad = INDENT * depth
    if isinstance(node, Text):
        lines.append(f"{pad}Text({node.text!r})")
    elif isinstance(node, SelfClosingElement):
        lines.append(f"{pad}SelfClosingElement({node.start_tag.name})")
        if node.start_tag.attributes:
            lines.append(f"{pad}{INDENT}attributes: {_format_attributes(node.start_tag)}")
    elif isinstance(node, ElementWithChildren):
        lines.append(f"{pad}ElementWithChildren({node.start_tag.name})")
        if node.start_tag.attributes:
            lines.append(f"{pad}{INDENT}attributes: {_format_attributes(node.start_tag)}")
        for child in node.children:
            _format_node(child, depth + 1, lines)
        lines.append(f"{pad}EndTag({node.end_tag.name})")
    else:
        raise TypeError(f"Cannot format {type(node).__name__}")


def format_tree(element: Element) -> str:
    """Render ``element`` as an indented outline for debugging.

    Example:
        >>> print(format_tree(parse_element("<p>hi<br/></p>")[1]))
        ElementWithChildren(p)
          Text('hi')
          SelfClosingElement(br)
        EndTag(p)
    """
    lines: List[str] = []
    _format_node(element, 0, lines)
    return "\n".join(lines)


def _quote(value: str) -> str:
    if '"' not in value:
        return f'"{value}"'
    if "'" not in value:
        return f"'{value}'"
    raise ValueError(f"Attribute value contains both quote characters: {value!r}")


def _markup_start(start_tag: StartTag) -> str:
    parts = [start_tag.name]
    parts.extend(f"{a.name}={_quote(a.value.value)}" for a in start_tag.attributes)
    return "<" + " ".join(parts)


def to_markup(node: Child) -> str:
    """Serialize a node back to markup the grammar accepts.

    Attribute values use double quotes unless they contain one. Whitespace
    around attributes is normalized to single spaces; text is written as is.

    Raises:
        ValueError: If an attribute value contains both quote characters
    """
    if isinstance(node, Text):
        return node.text
    if isinstance(node, SelfClosingElement):
        return _markup_start(node.start_tag) + "/>"
    if isinstance(node, ElementWithChildren):
        inner = "".join(to_markup(child) for child in node.children)
        return f"{_markup_start(node.start_tag)}>{inner}</{node.end_tag.name}>"
    raise TypeError(f"Cannot serialize {type(node).__name__}")
