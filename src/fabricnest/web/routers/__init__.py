"""API routers for the REST API."""

from fabricnest.web.routers.nest import router as nest_router

__all__ = ["nest_router"]
