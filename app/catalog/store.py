"""
Book operations for the catalogue API.

Every function takes the store to work on and loads the collection
fresh; nothing is cached between calls. Listings filter, sort by
download count and slice a fixed-size page. Mutations read the whole
collection, change it in memory and write it back while holding the
store's lock, so two concurrent writers in this process cannot lose
each other's changes.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from ..config import PER_PAGE
from .filters import BookFilters, apply_filters
from .normalize import as_int, downloads_of

logger = logging.getLogger(__name__)


class BookNotFound(KeyError):
    """No record carries the requested id."""

    def __init__(self, book_id: int) -> None:
        super().__init__(book_id)
        self.book_id = book_id


def _book_id(book: Any) -> Optional[int]:
    if not isinstance(book, dict):
        return None
    return as_int(book.get("id"))


def _find_index(books: List[Any], book_id: int) -> Optional[int]:
    for index, book in enumerate(books):
        if _book_id(book) == book_id:
            return index
    return None


def sort_by_downloads(books: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Most downloaded first; equal counts keep their relative order."""
    return sorted(books, key=downloads_of, reverse=True)


def clamp_page(page: Any) -> int:
    """Coerce a requested page number to an int of at least 1.

    Decimal values are truncated (``"2.7"`` is page 2).
    """
    text = str(page).strip()
    try:
        p = int(text)
    except ValueError:
        try:
            p = int(float(text))
        except (ValueError, OverflowError):
            return 1
    return max(1, p)


def paginate(books: List[Dict[str, Any]], page: Any = 1) -> Dict[str, Any]:
    p = clamp_page(page)
    start = (p - 1) * PER_PAGE
    return {
        "total": len(books),
        "page": p,
        "per_page": PER_PAGE,
        "books": books[start:start + PER_PAGE],
    }


def query_books(store, filters: Optional[BookFilters] = None, page: Any = 1) -> Dict[str, Any]:
    """Filter, sort and paginate the collection.

    Parameters
    ----------
    store
        Object with ``load()`` returning the list of records.
    filters : Optional[BookFilters]
        Requested filters. ``None`` applies no filter.
    page : Any
        1-indexed page number; invalid or non-positive values mean 1.

    Returns
    -------
    Dict[str, Any]
        ``total`` matching records, effective ``page``, ``per_page``
        and the ``books`` on that page.
    """
    books = [b for b in store.load() if isinstance(b, dict)]
    if filters is not None:
        books = apply_filters(books, filters)
    return paginate(sort_by_downloads(books), page)


def get_book(store, book_id: int) -> Dict[str, Any]:
    books = store.load()
    index = _find_index(books, book_id)
    if index is None:
        raise BookNotFound(book_id)
    return books[index]


def next_id(books: List[Any]) -> int:
    """One more than the highest integer id in ``books`` (1 when empty)."""
    ids = [i for i in (_book_id(b) for b in books) if i is not None]
    return max(ids, default=0) + 1


def create_book(store, fields: Dict[str, Any]) -> Dict[str, Any]:
    """Append a new record and return it with its assigned ``id``.

    A caller-supplied ``id`` is replaced by the assigned one.
    """
    with store.lock:
        books = store.load()
        book = dict(fields)
        book["id"] = next_id(books)
        books.append(book)
        store.save(books)
    logger.info("Created book %s", book["id"])
    return book


def update_book(store, book_id: int, fields: Dict[str, Any]) -> Dict[str, Any]:
    """Merge ``fields`` over the record with ``book_id``.

    Caller values win on conflicting keys; keys the caller omits are
    kept. The ``id`` itself cannot be changed and is ignored in
    ``fields``.

    Raises
    ------
    BookNotFound
        If no record has ``book_id``.
    """
    changes = {k: v for k, v in fields.items() if k != "id"}
    if "id" in fields and as_int(fields["id"]) != book_id:
        logger.warning("Ignoring id change %r on book %s", fields["id"], book_id)
    with store.lock:
        books = store.load()
        index = _find_index(books, book_id)
        if index is None:
            raise BookNotFound(book_id)
        book = {**books[index], **changes}
        books[index] = book
        store.save(books)
    logger.info("Updated book %s", book_id)
    return book


def delete_book(store, book_id: int) -> None:
    """Remove every record with ``book_id``. Missing ids are not an error."""
    with store.lock:
        books = store.load()
        remaining = [b for b in books if _book_id(b) != book_id]
        store.save(remaining)
    removed = len(books) - len(remaining)
    if removed:
        logger.info("Deleted book %s", book_id)
    else:
        logger.info("Delete of book %s matched no record", book_id)
