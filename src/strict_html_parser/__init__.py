"""Strict HTML Parser.

Parses a restricted HTML-like markup language into a typed syntax tree and
checks that every start tag is closed by an end tag of the same name.

Progressive API Disclosure:
- Level 1: Simple functions - parse(), parse_file()
- Level 2: Configured parser - StrictHTMLParser class
- Level 3: Grammar rules - parse_element(), MarkupGrammar, analyze_tree()
"""

__version__ = "0.1.0"
__author__ = "Strict HTML Parser Team"

from .api import ParseResult, StrictHTMLParser, parse, parse_file
from .grammar import MarkupGrammar, parse_element
from .shared import (
    MarkupError,
    NestingDepthError,
    ParseFailure,
    ParserConfig,
    TagMismatchError,
)
from .tree import (
    ElementWithChildren,
    SelfClosingElement,
    Text,
    analyze_tree,
    format_tree,
)

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple parsing functions
    "parse",
    "parse_file",

    # Level 2: Configured parser
    "StrictHTMLParser",
    "ParseResult",
    "ParserConfig",

    # Level 3: Grammar and analysis
    "MarkupGrammar",
    "parse_element",
    "analyze_tree",
    "format_tree",

    # Tree nodes
    "ElementWithChildren",
    "SelfClosingElement",
    "Text",

    # Errors
    "MarkupError",
    "NestingDepthError",
    "ParseFailure",
    "TagMismatchError",
]
