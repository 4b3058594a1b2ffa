"""Extract command CLI parsing and control flow."""

from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path

from config import DEFAULT_LANGUAGE
from recognition import BACKEND_NAMES, LANGUAGE_CODES, RecognitionOptions, extract_text, get_engine_factory

logger = logging.getLogger(__name__)


def add_extract_subparser(subparsers: argparse._SubParsersAction) -> None:
    extract_parser = subparsers.add_parser(
        "extract",
        help="Extract text from a local image file",
    )
    extract_parser.add_argument(
        "source",
        help="Image file path",
    )
    extract_parser.add_argument(
        "--language", "-l",
        choices=LANGUAGE_CODES,
        default=DEFAULT_LANGUAGE,
        help=f"Recognition language (default: {DEFAULT_LANGUAGE})",
    )
    extract_parser.add_argument(
        "--binarize",
        action="store_true",
        help="Binarize instead of stretching contrast before OCR",
    )
    extract_parser.add_argument(
        "--backend",
        choices=BACKEND_NAMES,
        help="OCR backend (default: config.OCR_BACKEND)",
    )
    extract_parser.set_defaults(_cmd=cmd_extract)


def cmd_extract(args: argparse.Namespace) -> int:
    path = Path(args.source)
    if not path.is_file():
        logger.error("File not found: %s", path)
        return 1

    options = RecognitionOptions.from_form(args.language, args.binarize)
    factory = get_engine_factory(args.backend)
    result = asyncio.run(
        extract_text(path.read_bytes(), options, factory=factory, filename=path.name)
    )

    if not result.ok:
        logger.error("%s", result.error)
        return 1

    print(result.text)
    return 0
