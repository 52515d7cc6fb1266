# SPDX-License-Identifier: Apache-2.0
"""
PDF Annotator - CLI Tool

Applies a JSON list of annotations to a PDF without starting the HTTP service.

Usage:
    annotate-pdf <input.pdf> <annotations.json> [options]

Examples:
    annotate-pdf report.pdf notes.json
    annotate-pdf report.pdf notes.json -o ./annotated.pdf
    annotate-pdf report.pdf notes.json -v
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import NoReturn, Optional

from pdf_annotator.api.schemas import parse_annotations
from pdf_annotator.core.errors import AnnotationError
from pdf_annotator.pipeline import AnnotationPipeline

logger = logging.getLogger(__name__)

# Default output directory
DEFAULT_OUTPUT_DIR = "./output/"


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        argv: Argument list. Defaults to ``sys.argv[1:]``.

    Returns:
        Parsed argument Namespace.
    """
    parser = argparse.ArgumentParser(
        prog="annotate-pdf",
        description="Place text annotations onto existing PDF pages",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
The annotations file holds a JSON array of objects using the same keys as
the HTTP API (selectedText, pageNumber, x, y, width, height, color, ...).
An object with an "annotations" array is accepted as well.
""",
    )
    parser.add_argument("input", type=Path, help="Input PDF file")
    parser.add_argument("annotations", type=Path, help="JSON file with annotations")
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help=f"Output PDF path (default: {DEFAULT_OUTPUT_DIR}annotated_<input name>)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    return parser.parse_args(argv)


def load_annotations(path: Path) -> list:
    """Read raw annotation objects from a JSON file.

    Raises:
        ValueError: If the file is not valid JSON or has no annotation list.
    """
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("annotations")
    if not isinstance(data, list):
        raise ValueError("expected a JSON array of annotations")
    return data


def run(args: argparse.Namespace) -> int:
    """Execute the annotation pipeline.

    Args:
        args: Command line arguments.

    Returns:
        Exit code (0: success, 1: failure).
    """
    input_path: Path = args.input

    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return 1

    if input_path.suffix.lower() != ".pdf":
        print(f"Error: Not a PDF file: {input_path}", file=sys.stderr)
        return 1

    if not args.annotations.exists():
        print(f"Error: File not found: {args.annotations}", file=sys.stderr)
        return 1

    try:
        specs = parse_annotations(load_annotations(args.annotations))
    except ValueError as e:
        # Covers JSON decoding and per-annotation validation errors
        print(f"Error: Invalid annotations format: {e}", file=sys.stderr)
        return 1

    if args.output:
        output_path: Path = args.output
    else:
        output_path = Path(DEFAULT_OUTPUT_DIR) / f"annotated_{input_path.name}"

    print(f"Input: {input_path}")
    print(f"Output: {output_path}")
    print(f"Annotations: {len(specs)}")
    print()

    try:
        result = AnnotationPipeline().annotate(input_path, specs, output_path=output_path)
    except AnnotationError as e:
        print(f"Error: Annotation failed: {e}", file=sys.stderr)
        if args.verbose:
            logger.debug("Failure stage: %s", e.stage, exc_info=True)
        return 1

    stats = result.stats
    print(f"Complete: {output_path}")
    print(f"  Annotations: {stats['annotations']}")
    print(f"  Links: {stats['links']}")
    if stats["truncated"]:
        print(f"  Truncated: {stats['truncated']}")
    return 0


def main(argv: Optional[list[str]] = None) -> NoReturn:
    """Main entry point."""
    args = parse_args(argv)

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(level=log_level, format="%(levelname)s: %(message)s")

    sys.exit(run(args))


if __name__ == "__main__":
    main()
