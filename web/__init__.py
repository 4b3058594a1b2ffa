"""
Web interface for the image text extractor.

Provides a FastAPI app with an upload page and a small JSON API for
extracting text from a single image.
"""

from .app import create_app, main

__all__ = ["create_app", "main"]
