"""
Routes module - contains all API route handlers
"""

from .scripts import router as scripts_router
from .videos import router as videos_router

__all__ = [
    "scripts_router",
    "videos_router",
]
