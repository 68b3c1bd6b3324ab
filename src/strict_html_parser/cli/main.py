"""Main CLI entry point for the strict-html command-line tool.

Parses markup from files, inline text or stdin and prints the tree or the
first error found, and checks files for well-formedness.
"""

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, List, Optional

from strict_html_parser import __version__
from strict_html_parser.api import ParseResult, StrictHTMLParser
from strict_html_parser.shared.config import ParserConfig
from strict_html_parser.shared.logging import get_logger
from strict_html_parser.tools.profiling import PerformanceProfiler
from strict_html_parser.tree import format_tree, to_markup

DEMO_DOCUMENT = """<div>
        Testing this out
        <h1>
            This works!
            <div class='testing' anotherOne   ='this works!'>Sub element</div>
            <div/>
        </h1>
        <div>This works as well!</other>
    </div>"""

logger = get_logger(__name__, None, "cli")


def build_config(args: argparse.Namespace) -> ParserConfig:
    """Build parser configuration from a config file and command-line overrides."""
    config_path = getattr(args, "config", None)
    if config_path:
        config = ParserConfig.from_file(config_path)
    elif getattr(args, "strict", False):
        config = ParserConfig.strict()
    else:
        config = ParserConfig.lenient()

    if getattr(args, "max_depth", None) is not None:
        config = replace(config, max_depth=args.max_depth)
    if getattr(args, "no_analyze", False):
        config = replace(config, analyze=False)
    return config


def render_result(result: ParseResult, format_type: str) -> str:
    """Render a parse result for output.

    ``debug`` and ``markup`` print the tree on success and the error message
    otherwise; ``json`` always prints the full result.
    """
    if format_type == "json":
        return json.dumps(result.to_dict(), indent=2)

    if not result.success or result.element is None:
        return result.error_message or "Parse failed"

    if format_type == "markup":
        return to_markup(result.element)
    return format_tree(result.element)


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="strict-html",
        description="Parse restricted HTML-like markup and check tag structure"
    )

    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Parse command
    parse_parser = subparsers.add_parser("parse", help="Parse markup and print the tree")
    parse_parser.add_argument(
        "paths",
        nargs="*",
        type=Path,
        help="Markup files to parse (default: read stdin)"
    )
    parse_parser.add_argument(
        "--text", "-t",
        help="Parse this markup string instead of files"
    )
    parse_parser.add_argument(
        "--format", "-f",
        choices=["debug", "json", "markup"],
        default="debug",
        help="Output format (default: debug)"
    )
    parse_parser.add_argument(
        "--max-depth",
        type=int,
        help="Maximum element nesting depth"
    )
    parse_parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject trailing input and limit nesting depth"
    )
    parse_parser.add_argument(
        "--no-analyze",
        action="store_true",
        help="Skip the start/end tag name check"
    )
    parse_parser.add_argument(
        "--profile",
        action="store_true",
        help="Print stage timings and memory use to stderr"
    )
    parse_parser.add_argument(
        "--config", "-c",
        type=Path,
        help="JSON configuration file"
    )

    # Check command
    check_parser = subparsers.add_parser("check", help="Check markup files for well-formedness")
    check_parser.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="Markup files to check"
    )
    check_parser.add_argument(
        "--format", "-f",
        choices=["text", "json"],
        default="text",
        help="Output format"
    )
    check_parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject trailing input and limit nesting depth"
    )

    # Demo command
    subparsers.add_parser("demo", help="Parse the built-in sample document")

    return parser


def _read_inputs(args: argparse.Namespace) -> List[Dict[str, str]]:
    if args.text is not None:
        return [{"source": "<text>", "content": args.text}]
    if not args.paths:
        return [{"source": "<stdin>", "content": sys.stdin.read()}]
    return [
        {"source": str(path), "content": path.read_text(encoding="utf-8")}
        for path in args.paths
    ]


def _print_profile(profiler: PerformanceProfiler, content: str, config: ParserConfig) -> None:
    session = profiler.profile_document(content, config)
    for stage in session.stages:
        print(
            f"{stage.stage_name}: {stage.duration_ms:.2f}ms, "
            f"memory delta {stage.memory_delta} bytes",
            file=sys.stderr
        )


def cmd_parse(args: argparse.Namespace) -> int:
    """Handle parse command."""
    try:
        config = build_config(args)
        inputs = _read_inputs(args)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    parser = StrictHTMLParser(config)
    profiler = PerformanceProfiler() if args.profile else None
    exit_code = 0

    for item in inputs:
        result = parser.parse(item["content"])
        if len(inputs) > 1 and args.format != "json":
            print(f"== {item['source']}")
        print(render_result(result, args.format))

        if profiler is not None:
            _print_profile(profiler, item["content"], config)
        if not result.success:
            exit_code = 1

    return exit_code


def check_file(parser: StrictHTMLParser, path: Path) -> Dict[str, Any]:
    """Check a single file and summarize the outcome."""
    try:
        result = parser.parse_file(path)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Failed to read file", extra={"file": str(path)})
        return {"file": str(path), "valid": False, "error": str(e)}

    return {
        "file": str(path),
        "valid": result.success,
        "error": result.error_message,
        "elements": result.performance.elements_parsed,
        "depth": result.performance.max_depth,
    }


def cmd_check(args: argparse.Namespace) -> int:
    """Handle check command."""
    config = ParserConfig.strict() if args.strict else ParserConfig.lenient()
    parser = StrictHTMLParser(config)
    results = [check_file(parser, path) for path in args.paths]

    if args.format == "json":
        print(json.dumps(results, indent=2))
    else:
        valid_count = sum(1 for r in results if r["valid"])
        print(f"Checked {len(results)} files, {valid_count} valid")
        print("-" * 50)
        for result in results:
            status = "OK" if result["valid"] else "FAIL"
            print(f"{status} {result['file']}")
            if not result["valid"]:
                print(f"   Error: {result['error']}")

    return 0 if all(r["valid"] for r in results) else 1


def cmd_demo(args: argparse.Namespace) -> int:
    """Handle demo command: parse the sample document and print the outcome."""
    result = StrictHTMLParser().parse(DEMO_DOCUMENT)
    print(render_result(result, "debug"))
    return 0 if result.success else 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    elif args.quiet:
        logging.basicConfig(level=logging.ERROR)

    if args.command == "parse":
        return cmd_parse(args)
    if args.command == "check":
        return cmd_check(args)
    if args.command == "demo":
        return cmd_demo(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
