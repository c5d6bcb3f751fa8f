"""Shared test fixtures."""

from datetime import UTC, datetime

import pytest
from fastapi.testclient import TestClient

from mdtree.api.dependencies import get_clock, get_conversion_store, get_note_store, get_settings
from mdtree.config import Settings
from mdtree.main import app
from mdtree.stores.conversions import ConversionStore
from mdtree.stores.notes import NoteStore

FIXED_NOW = datetime(2024, 3, 15, 12, 30, 45, 123000, tzinfo=UTC)
FIXED_NOW_ISO = "2024-03-15T12:30:45.123Z"


def fixed_clock() -> datetime:
    return FIXED_NOW


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(data_path=tmp_path, max_upload_bytes=1024)


@pytest.fixture
def conversion_store(tmp_path):
    store = ConversionStore(tmp_path / "test.db")
    yield store
    store.close()


@pytest.fixture
def note_store(tmp_path):
    store = NoteStore(tmp_path / "test.db")
    yield store
    store.close()


@pytest.fixture
def client(settings, conversion_store, note_store):
    """TestClient wired to temporary stores, small upload limit and a fixed clock."""
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_conversion_store] = lambda: conversion_store
    app.dependency_overrides[get_note_store] = lambda: note_store
    app.dependency_overrides[get_clock] = lambda: fixed_clock
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
