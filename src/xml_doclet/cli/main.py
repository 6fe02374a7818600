"""Main CLI entry point for the xml-doclet command-line tool.

Reads an element model dump (see xml_doclet.model.loader) and writes the XML
document for it. Option names follow the doclet conventions build tools
already pass (``-d``, ``-Xfilename``, ``-Xescape``); a few standard doclet
options that have no meaning here are accepted and ignored.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from xml_doclet import __version__
from xml_doclet.doclet.driver import DocumentDriver
from xml_doclet.model.loader import load_model
from xml_doclet.shared.config import (
    DEFAULT_OUTPUT_DIR,
    DEFAULT_OUTPUT_FILENAME,
    ConfigError,
    DocletConfig,
    parse_bool,
)
from xml_doclet.shared.logging import get_logger
from xml_doclet.shared.result import DiagnosticSeverity, GenerationResult

# Accepted for compatibility with build tools, otherwise ignored
IGNORED_OPTIONS = ("-doctitle", "-windowtitle", "-notimestamp")


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="xml-doclet",
        description="Generate an XML document from a resolved source model",
        allow_abbrev=False,
    )

    parser.add_argument("--version", action="version", version=__version__)

    parser.add_argument(
        "model",
        type=Path,
        help="JSON element model produced by a source front end"
    )
    parser.add_argument(
        "-d", "--destination",
        dest="destination",
        help=f"Destination directory for output file. (Default: {DEFAULT_OUTPUT_DIR})"
    )
    parser.add_argument(
        "-Xfilename", "--filename",
        dest="filename",
        help=f"Output filename. (Default: {DEFAULT_OUTPUT_FILENAME})"
    )
    parser.add_argument(
        "-Xescape", "--escape",
        dest="escape",
        metavar="true|false",
        help=(
            "Keep escape sequences in comments as supplied (true) or decode "
            "them, e.g. \\uc548\\ub155 -> 안녕 (false). (Default: true)"
        )
    )
    parser.add_argument(
        "--sort",
        action="store_true",
        help="Sort packages, types and fields by name instead of model order"
    )
    parser.add_argument(
        "--keep-partial",
        action="store_true",
        help="Keep a partially written output file when generation fails"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Configuration file path (JSON)"
    )
    parser.add_argument(
        "--format", "-f",
        choices=["text", "json"],
        default="text",
        help="Summary output format (default: text)"
    )

    # Ignored doclet options
    parser.add_argument("-doctitle", dest="doctitle", help=argparse.SUPPRESS)
    parser.add_argument("-windowtitle", dest="windowtitle", help=argparse.SUPPRESS)
    parser.add_argument("-notimestamp", dest="notimestamp", action="store_true",
                        help=argparse.SUPPRESS)

    # Global options
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

    return parser


def build_config(args: argparse.Namespace) -> DocletConfig:
    """Combine the config file (if any) with command-line overrides."""
    config = DocletConfig.from_file(args.config) if args.config else DocletConfig()
    return config.override(
        output_dir=args.destination,
        filename=args.filename,
        escape_characters=parse_bool(args.escape) if args.escape is not None else None,
        sort_elements=True if args.sort else None,
        remove_partial_output=False if args.keep_partial else None,
    )


def format_summary(result: GenerationResult, format_type: str) -> str:
    """Format a successful generation result for output."""
    if format_type == "json":
        return json.dumps(result.summary(), indent=2)

    metrics = result.metrics
    return (
        f"Generated {result.output_path}: {metrics.packages} packages, "
        f"{metrics.types} types, {metrics.fields} fields, "
        f"{metrics.comments} comments ({metrics.bytes_written} bytes, "
        f"{metrics.processing_time_ms:.1f}ms)"
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    # Set up logging verbosity
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    else:
        level = logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")
    logger = get_logger(__name__, None, "cli")

    for option in IGNORED_OPTIONS:
        if getattr(args, option.lstrip("-")):
            logger.info(f"Option {option} is ignored")

    try:
        config = build_config(args)
        config.validate_output_dir()
        model = load_model(args.model)
    except ConfigError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    try:
        result = DocumentDriver(config).generate(model)
    except KeyboardInterrupt:
        print("\nGeneration interrupted by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT

    if not result:
        print(f"error: {result.error_message}", file=sys.stderr)
        return 1

    for diagnostic in result.diagnostics:
        if diagnostic.severity == DiagnosticSeverity.WARNING:
            print(f"warning: {diagnostic.message}", file=sys.stderr)

    if not args.quiet:
        print(format_summary(result, args.format))
    return 0


if __name__ == "__main__":
    sys.exit(main())
