#!/usr/bin/env python3
"""
Quick Start Guide for the Strict HTML Parser.

Walks through parsing a document, inspecting the tree, reading the first
error of a broken document, and profiling a parse.
"""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from strict_html_parser import ParserConfig, StrictHTMLParser, format_tree, parse
from strict_html_parser.tools import PerformanceProfiler
from strict_html_parser.tree import iter_elements, text_content, to_markup


def quick_start_example():
    """Quick start example showing basic usage."""

    print("🚀 QUICK START - Strict HTML Parser")
    print("=" * 40)

    # Step 1: Parse a well-formed document
    print("\n📄 Step 1: Parsing a document")
    print("-" * 30)

    result = parse("<book id='123'><title>My Book</title><cover/></book>")

    print(f"✅ Parse success: {result.success}")
    print(f"📏 Nesting depth: {result.performance.max_depth}")
    print(format_tree(result.element))

    # Step 2: Walk the tree
    print("\n🌳 Step 2: Walking the tree")
    print("-" * 30)

    for element in iter_elements(result.element):
        print(f"  - {element.name}: {text_content(element)!r}")
    print(f"🔁 Round trip: {to_markup(result.element)}")

    # Step 3: Broken documents
    print("\n🔍 Step 3: Error reporting")
    print("-" * 30)

    for broken in ["<div>This works as well!</other>", "<div>text</div"]:
        failed = parse(broken)
        print(f"❌ {broken!r}")
        print(f"   {failed.error_message}")

    # Step 4: Strict configuration
    print("\n🔒 Step 4: Strict configuration")
    print("-" * 30)

    parser = StrictHTMLParser(ParserConfig.strict())
    strict_result = parser.parse("<a/> <b/>")
    print(f"Trailing input rejected: {not strict_result.success}")
    print(f"   {strict_result.error_message}")

    # Step 5: Profiling
    print("\n⚡ Step 5: Profiling")
    print("-" * 30)

    profiler = PerformanceProfiler()
    session = profiler.profile_document("<a>" * 50 + "</a>" * 50)
    for stage in session.stages:
        print(f"  {stage.stage_name}: {stage.duration_ms:.2f}ms")

    print("\n🎉 Done!")


if __name__ == "__main__":
    quick_start_example()
