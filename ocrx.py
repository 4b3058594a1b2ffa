#!/usr/bin/env python3
"""
Unified CLI for the image text extractor.

Usage:
    ocrx serve                           # Launch the upload web UI (port 30001)
    ocrx extract <path>                  # Print the text found in an image
    ocrx extract <path> -l deu --binarize
"""

import argparse
import logging
import sys

from logging_utils import configure_logging, add_logging_args
from cli.extract import add_extract_subparser
from cli.serve import add_serve_subparser

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ocrx",
        description="Image Text Extractor - extract text from images with OCR",
    )
    add_logging_args(parser)
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    add_serve_subparser(subparsers)
    add_extract_subparser(subparsers)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level, args.verbose, args.quiet)

    cmd = getattr(args, "_cmd", None)
    if cmd is None:
        parser.print_help()
        return 1
    return cmd(args)


if __name__ == "__main__":
    sys.exit(main())
