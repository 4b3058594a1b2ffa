"""
FastAPI application for the image text extractor.
"""

import argparse
import asyncio
import logging
from pathlib import Path

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.staticfiles import StaticFiles
from starlette.responses import JSONResponse

from config import SERVER_HOST, SERVER_PORT
from logging_utils import add_logging_args, configure_logging, uvicorn_log_level
from recognition import BACKEND_NAMES, EngineFactory, get_engine_factory
from web.routes import api_router, ui_router

logger = logging.getLogger(__name__)

_STATIC_DIR = Path(__file__).parent / "static"


def create_app(engine_factory: EngineFactory | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        engine_factory: Builds one OCR engine per request. Defaults to the
            backend named by ``config.OCR_BACKEND``.
    """
    app = FastAPI(title="Image Text Extractor", version="0.1.0", docs_url="/docs", redoc_url="/redoc")

    app.state.engine_factory = engine_factory or get_engine_factory()
    app.state.recognition_lock = asyncio.Lock()

    app.mount("/static", StaticFiles(directory=str(_STATIC_DIR)), name="static")

    app.include_router(api_router)
    app.include_router(ui_router, include_in_schema=False)

    # Return 400 for request validation errors (missing/invalid form fields)
    @app.exception_handler(RequestValidationError)
    async def _validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": str(exc)})

    return app


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=f"Launch the image text extractor web UI (port {SERVER_PORT})."
    )
    parser.add_argument("--host", default=SERVER_HOST, help=f"Bind address (default: {SERVER_HOST})")
    parser.add_argument("--port", type=int, default=SERVER_PORT, help=f"Port (default: {SERVER_PORT})")
    parser.add_argument(
        "--backend",
        choices=BACKEND_NAMES,
        help="OCR backend (default: config.OCR_BACKEND)",
    )
    add_logging_args(parser)
    return parser


def serve(
    host: str = SERVER_HOST,
    port: int = SERVER_PORT,
    backend: str | None = None,
    level: int = logging.INFO,
) -> None:
    """Build the app for `backend` and serve it with uvicorn until interrupted."""
    app = create_app(get_engine_factory(backend))

    logger.info("Starting Image Text Extractor...")
    logger.info("Open http://%s:%s in your browser", host, port)
    logger.info("Press Ctrl+C to stop")
    uvicorn.run(app, host=host, port=port, log_level=uvicorn_log_level(level))


def main(argv: list[str] | None = None) -> int:
    """Run the web server."""
    parser = build_parser()
    args = parser.parse_args(argv)
    level = configure_logging(args.log_level, args.verbose, args.quiet)
    serve(args.host, args.port, args.backend, level)
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
