"""
API - Superfície HTTP (FastAPI) do parser.
"""

from .router import router as parsing_router

__all__ = ["parsing_router"]
