"""
Runtime settings for the catalog service.

Values are read once from the environment when the module is imported.
``CATALOG_DATA_FILE`` points at the JSON document holding the book
collection; when unset, ``data/books.json`` next to the ``app`` package
is used. ``CATALOG_LOG_LEVEL`` controls the root logging level.
"""

import logging
import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parents[1]

DATA_FILE = Path(
    os.environ.get("CATALOG_DATA_FILE") or BASE_DIR / "data" / "books.json"
)


def resolve_log_level(name: str) -> str:
    """Upper-cased level name, or ``"INFO"`` when logging does not know it."""
    level = (name or "").strip().upper()
    if isinstance(logging.getLevelName(level), int):
        return level
    return "INFO"


LOG_LEVEL = resolve_log_level(os.environ.get("CATALOG_LOG_LEVEL", "INFO"))

# Fixed page size for /books listings.
PER_PAGE = 25
