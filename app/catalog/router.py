"""
Route definitions for the catalogue API.

Endpoints under /api:
- GET    /books             : list books with filters, sorted by downloads, 25 per page
- GET    /books/{book_id}   : get one book
- POST   /books             : add a book (id assigned by the server)
- PUT    /books/{book_id}   : merge fields into an existing book (PATCH accepted too)
- DELETE /books/{book_id}   : delete a book
- GET    /debug/store       : debug the backing data file
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query

from ..config import DATA_FILE
from ..storage import JsonFileStore
from .filters import BookFilters
from .schemas import Book, BookEnvelope, Message, PaginatedBooks, StoreInfo
from .store import (
    BookNotFound,
    create_book,
    delete_book,
    get_book,
    query_books,
    update_book,
)

router = APIRouter(prefix="/api", tags=["catalog"])

_store = JsonFileStore(DATA_FILE)


def get_store():
    """Store used by the routes; tests override this dependency."""
    return _store


@router.get("/books", response_model=PaginatedBooks)
def list_books(
    id: Optional[str] = Query(default=None, description="Comma-separated book ids"),
    languages: Optional[str] = Query(default=None, description="Language codes, e.g. en,fr"),
    mime_type: Optional[str] = Query(default=None, description="Format MIME types"),
    topic: Optional[str] = Query(default=None, description="Substring of a subject or bookshelf"),
    q: Optional[str] = Query(default=None, description="Text search in title or author"),
    title: Optional[str] = Query(default=None, description="Text search in title (ignored with q)"),
    author: Optional[str] = Query(default=None, description="Text search in author (ignored with q)"),
    page: Optional[str] = Query(default=None, description="Page number (1-indexed)"),
    store=Depends(get_store),
) -> Dict[str, Any]:
    """
    Returns a page of books matching every supplied filter.

    Each filter takes comma-separated, case-insensitive terms and
    matches when any term matches. ``page`` values that are not
    positive integers fall back to the first page.
    """
    filters = BookFilters.from_params(
        id=id,
        languages=languages,
        mime_type=mime_type,
        topic=topic,
        q=q,
        title=title,
        author=author,
    )
    return query_books(store, filters, page if page is not None else 1)


@router.get("/books/{book_id}", response_model=Book)
def read_book(book_id: int, store=Depends(get_store)) -> Dict[str, Any]:
    try:
        return get_book(store, book_id)
    except BookNotFound:
        raise HTTPException(status_code=404, detail="Book not found")


@router.post("/books", response_model=BookEnvelope, status_code=201)
def add_book(
    payload: Dict[str, Any] = Body(default={}),
    store=Depends(get_store),
) -> Dict[str, Any]:
    book = create_book(store, payload)
    return {"message": "Book added", "book": book}


@router.api_route("/books/{book_id}", methods=["PUT", "PATCH"], response_model=BookEnvelope)
def edit_book(
    book_id: int,
    payload: Dict[str, Any] = Body(default={}),
    store=Depends(get_store),
) -> Dict[str, Any]:
    try:
        book = update_book(store, book_id, payload)
    except BookNotFound:
        raise HTTPException(status_code=404, detail="Book not found")
    return {"message": "Book updated", "book": book}


@router.delete("/books/{book_id}", response_model=Message)
def remove_book(book_id: int, store=Depends(get_store)) -> Dict[str, str]:
    """Delete a book. Deleting an unknown id still succeeds."""
    delete_book(store, book_id)
    return {"message": "Book deleted"}


@router.get("/debug/store", response_model=StoreInfo)
def debug_store(store=Depends(get_store)) -> Dict[str, Any]:
    """
    Debug endpoint to verify which data file is served and how many
    records it holds.
    Visit: http://127.0.0.1:8000/api/debug/store
    """
    path = getattr(store, "path", None)
    return {
        "path": str(path) if path is not None else "",
        "exists": bool(path is not None and path.exists()),
        "count": len(store.load()),
    }
