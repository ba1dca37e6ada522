"""
API route modules.

Each module defines routes for one domain area.
"""

from routes.imports import router as imports_router
from routes.proposals import router as proposals_router
from routes.dashboard import router as dashboard_router

__all__ = [
    "imports_router",
    "proposals_router",
    "dashboard_router",
]
