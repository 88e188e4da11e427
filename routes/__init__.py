"""
API route modules.

Each module defines routes for one domain area.
"""

from routes.attributes import router as attributes_router
from routes.variants import router as variants_router

__all__ = [
    "attributes_router",
    "variants_router",
]
