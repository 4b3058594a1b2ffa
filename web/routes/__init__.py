"""HTTP routes: JSON API and the HTML page."""

from .api import api_router
from .ui import ui_router

__all__ = ["api_router", "ui_router"]
