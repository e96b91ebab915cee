"""FastAPI REST API for fabric roll nesting.

This module provides a REST API for computing layouts, rendering them as
SVG and fetching the default request.

Usage:
    fabricnest serve --reload
    uvicorn fabricnest.web:app --reload
"""

from fabricnest.web.app import app, create_app

__all__ = ["app", "create_app"]
