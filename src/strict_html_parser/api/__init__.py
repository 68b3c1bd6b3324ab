"""Parsing API for strict HTML parsing.

Level 1: ``parse()`` and ``parse_file()`` module functions
Level 2: ``StrictHTMLParser`` for configured, reusable parsing
"""

from .parser import (
    ParseResult,
    StrictHTMLParser,
    TrailingInputError,
    parse,
    parse_file,
)

__all__ = [
    "ParseResult",
    "StrictHTMLParser",
    "TrailingInputError",
    "parse",
    "parse_file",
]
