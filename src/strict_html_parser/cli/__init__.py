"""Command-line interface module for Strict HTML Parser.

This module provides the ``strict-html`` tool for parsing markup, checking
files for well-formed tag structure and running the built-in demo document.
"""

from .main import main

__all__ = ["main"]
