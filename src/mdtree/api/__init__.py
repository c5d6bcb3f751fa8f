"""API route modules."""

from mdtree.api.convert import router as convert_router
from mdtree.api.notes import router as notes_router
from mdtree.api.validate import router as validate_router

__all__ = ["convert_router", "notes_router", "validate_router"]
