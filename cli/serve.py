"""Serve command CLI parsing."""

from __future__ import annotations

import argparse
import logging

from config import SERVER_HOST, SERVER_PORT
from recognition import BACKEND_NAMES


def add_serve_subparser(subparsers: argparse._SubParsersAction) -> None:
    serve_parser = subparsers.add_parser(
        "serve",
        help=f"Launch the upload web UI (port {SERVER_PORT})",
    )
    serve_parser.add_argument("--host", default=SERVER_HOST, help=f"Bind address (default: {SERVER_HOST})")
    serve_parser.add_argument("--port", type=int, default=SERVER_PORT, help=f"Port (default: {SERVER_PORT})")
    serve_parser.add_argument(
        "--backend",
        choices=BACKEND_NAMES,
        help="OCR backend (default: config.OCR_BACKEND)",
    )
    serve_parser.set_defaults(_cmd=cmd_serve)


def cmd_serve(args: argparse.Namespace) -> int:
    """Launch the web server."""
    from web.app import serve

    serve(args.host, args.port, args.backend, logging.getLogger().getEffectiveLevel())
    return 0
