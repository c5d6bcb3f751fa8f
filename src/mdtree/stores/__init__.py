"""Storage modules for conversions and notes."""

from mdtree.stores.conversions import ConversionStore
from mdtree.stores.notes import NoteStore

__all__ = ["ConversionStore", "NoteStore"]
