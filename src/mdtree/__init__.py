"""mdtree: convert markdown notes into structured JSON documents."""

__version__ = "0.1.0"
