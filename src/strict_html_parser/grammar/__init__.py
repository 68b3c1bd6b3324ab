"""Grammar for the strict HTML-like markup language.

Key Components:
    Cursor: Immutable input position threaded through every rule
    MarkupGrammar: Element rules with an optional nesting depth limit
    parse_element: Parse one element and return it with the unconsumed input
"""

from .combinators import Cursor, Rule, run_rule
from .rules import (
    MarkupGrammar,
    attribute_name,
    attribute_value,
    end_tag,
    html_attribute,
    html_attributes,
    html_element,
    html_text,
    parse_element,
    self_closing_element,
    start_tag,
    tag_name,
)

__all__ = [
    "Cursor",
    "Rule",
    "run_rule",
    "MarkupGrammar",
    "attribute_name",
    "attribute_value",
    "end_tag",
    "html_attribute",
    "html_attributes",
    "html_element",
    "html_text",
    "parse_element",
    "self_closing_element",
    "start_tag",
    "tag_name",
]
