"""API routers package."""

from .plugins import create_router

__all__ = ["create_router"]
