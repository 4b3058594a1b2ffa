"""Logging setup shared by `ocrx` and the web server.

Both entry points accept the same verbosity flags and end up with the same
root logger configuration. Third-party libraries that log per image (Pillow
plugins, the multipart parser, EasyOCR's model loader) are held at WARNING
unless debug output was requested.
"""

from __future__ import annotations

import logging
import sys

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%H:%M:%S"

# Loggers that are only interesting when debugging a single upload
NOISY_LOGGERS = ("PIL", "multipart", "python_multipart", "easyocr")

# Net -v/-q offset → level; offsets beyond the ends clamp to them
_OFFSET_LEVELS = {
    1: logging.DEBUG,
    0: logging.INFO,
    -1: logging.WARNING,
    -2: logging.ERROR,
}


def add_logging_args(parser) -> None:
    """Add --log-level, -v and -q to an argparse parser."""
    group = parser.add_argument_group("logging")
    group.add_argument(
        "--log-level",
        choices=tuple(LOG_LEVELS),
        help="Set log verbosity explicitly (overrides -v/-q)",
    )
    group.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="More output; -v also shows decode, preprocessing and engine detail",
    )
    group.add_argument(
        "-q", "--quiet",
        action="count",
        default=0,
        help="Less output; -qq shows errors only",
    )


def resolve_log_level(
    log_level: str | None = None,
    verbose: int = 0,
    quiet: int = 0,
) -> int:
    """Pick the numeric level from --log-level, else from the -v/-q balance."""
    if log_level:
        return LOG_LEVELS[log_level.lower()]

    offset = max(min(verbose - quiet, 1), -2)
    return _OFFSET_LEVELS[offset]


def uvicorn_log_level(level: int) -> str:
    """Translate a numeric level into the lowercase name uvicorn expects."""
    for name, value in LOG_LEVELS.items():
        if value == level:
            return name
    return "info"


def configure_logging(
    log_level: str | None = None,
    verbose: int = 0,
    quiet: int = 0,
) -> int:
    """Configure root logging and return the active level.

    If handlers are already installed (for example by pytest or uvicorn),
    only their levels are adjusted.
    """
    level = resolve_log_level(log_level=log_level, verbose=verbose, quiet=quiet)
    root_logger = logging.getLogger()

    if root_logger.handlers:
        root_logger.setLevel(level)
        for handler in root_logger.handlers:
            handler.setLevel(level)
    else:
        logging.basicConfig(
            level=level,
            format=LOG_FORMAT,
            datefmt=LOG_DATEFMT,
            stream=sys.stderr,
        )

    library_level = level if level <= logging.DEBUG else max(level, logging.WARNING)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)

    return level
