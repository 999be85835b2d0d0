"""
Catalog package for the book catalog API.

This package exposes a REST API over a collection of book records
kept in a single JSON file. Clients can filter by id, language, MIME
type, topic, title and author, get results sorted by download count
and paginated 25 at a time, and add, update or delete books. The
filtering and mutation logic lives in ``filters``, ``normalize`` and
``store``; ``router`` only translates HTTP requests into those calls.
"""

from .router import router as catalog_router  # noqa: F401
