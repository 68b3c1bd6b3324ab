"""Syntax tree, structural analysis and rendering for parsed markup.

Key Components:
    SelfClosingElement / ElementWithChildren: The two element variants
    analyze_tree: Case-insensitive start/end tag name check
    StructureAnalyzer: Analysis wrapper reporting an AnalysisResult
    format_tree / to_dict / to_markup: Tree renderers
"""

from .analyzer import (
    AnalysisResult,
    StructureAnalyzer,
    analyze_children,
    analyze_tree,
)
from .nodes import (
    Attribute,
    AttributeValue,
    Child,
    Element,
    ElementWithChildren,
    EndTag,
    SelfClosingElement,
    StartTag,
    StringValue,
    Text,
    element_depth,
    is_element,
    iter_elements,
    text_content,
)
from .serialization import format_tree, to_dict, to_markup

__all__ = [
    "AnalysisResult",
    "StructureAnalyzer",
    "analyze_children",
    "analyze_tree",
    "Attribute",
    "AttributeValue",
    "Child",
    "Element",
    "ElementWithChildren",
    "EndTag",
    "SelfClosingElement",
    "StartTag",
    "StringValue",
    "Text",
    "element_depth",
    "is_element",
    "iter_elements",
    "text_content",
    "format_tree",
    "to_dict",
    "to_markup",
]
