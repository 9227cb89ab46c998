"""API routes package.

This package contains all API route handlers for the application.
"""
from . import layouts
from . import boards
from . import games

__all__ = [
    "layouts",
    "boards",
    "games",
]
