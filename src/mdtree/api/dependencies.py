"""FastAPI dependency injection for shared resources."""

from functools import lru_cache
from pathlib import Path

from mdtree.config import Settings
from mdtree.converter.document import Clock, utc_now
from mdtree.stores.conversions import ConversionStore
from mdtree.stores.notes import NoteStore


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


@lru_cache
def get_data_path() -> Path:
    """Get the data directory path."""
    settings = get_settings()
    data_path = Path(settings.data_path) if settings.data_path else Path("data")
    data_path.mkdir(parents=True, exist_ok=True)
    return data_path


@lru_cache
def get_conversion_store() -> ConversionStore:
    """Get cached conversion store instance."""
    settings = get_settings()
    return ConversionStore(get_data_path() / settings.db_name)


@lru_cache
def get_note_store() -> NoteStore:
    """Get cached note store instance."""
    settings = get_settings()
    return NoteStore(get_data_path() / settings.db_name)


def get_clock() -> Clock:
    """Clock used for default note timestamps; overridden in tests."""
    return utc_now
