"""Shared fixtures for the catalog tests."""

from pathlib import Path
from typing import Any, Dict, List

import pytest
from fastapi.testclient import TestClient

from app.catalog.router import get_store
from app.main import app
from app.storage import JsonFileStore, MemoryStore


@pytest.fixture
def sample_books() -> List[Dict[str, Any]]:
    """Records with the field shapes found in real data files.

    Sorted by downloads the ids come out as 2, 4, 1, 3, 5.
    """
    return [
        {
            "id": 1,
            "title": "Pride and Prejudice",
            "author": ["Austen, Jane"],
            "languages": ["en"],
            "formats": [{"mime_type": "text/html"}, {"mime_type": "application/epub+zip"}],
            "subjects": ["Courtship -- Fiction"],
            "bookshelves": ["Best Books Ever Listings"],
            "downloads": 500,
        },
        {
            "id": 2,
            "title": "Frankenstein",
            "author": "Shelley, Mary",
            "languages": ["EN", 7],
            "formats": [{"mime_type": "text/plain"}],
            "subjects": ["Science fiction", None],
            "bookshelves": ["Gothic Fiction"],
            "downloads": 900,
        },
        {
            "id": 3,
            "title": "Les Misérables",
            "author": "Hugo, Victor",
            "languages": "fr",
            "formats": [{"mime_type": "TEXT/HTML"}, "junk", {"mime_type": 5}],
            "subjects": "France -- History",
            "downloads": "abc",
        },
        {
            "id": 4,
            "title": ["Faust", "Part One"],
            "author": None,
            "languages": 42,
            "formats": None,
            "bookshelves": ["Drama"],
            "downloads": 900,
            "extra": {"nested": True},
        },
        {
            "id": 5,
            "title": "Jane Eyre",
            "author": ["Brontë, Charlotte"],
            "languages": ["en"],
            "subjects": ["Governesses -- Fiction"],
        },
    ]


@pytest.fixture
def memory_store(sample_books: List[Dict[str, Any]]) -> MemoryStore:
    return MemoryStore(sample_books)


@pytest.fixture
def json_store(tmp_path: Path, sample_books: List[Dict[str, Any]]) -> JsonFileStore:
    """A file-backed store pre-loaded with the sample books."""
    store = JsonFileStore(tmp_path / "data" / "books.json")
    store.save(sample_books)
    return store


@pytest.fixture
def client(json_store: JsonFileStore):
    """Test client whose routes read and write ``json_store``."""
    app.dependency_overrides[get_store] = lambda: json_store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
