"""
Pydantic schema definitions for the catalog module.

Book records are free-form JSON objects: besides ``id`` the service
only looks at a handful of fields (title, author, languages, formats,
subjects, bookshelves, downloads) and passes every other key through
untouched. They are therefore typed as plain dictionaries rather than
a fixed model, so that a record read from disk is returned exactly as
stored. The models below describe the response envelopes.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, Field

Book = Dict[str, Any]


class PaginatedBooks(BaseModel):
    """A page of results returned from the ``/books`` endpoint."""

    total: int
    page: int
    per_page: int
    books: List[Book] = Field(default_factory=list)


class BookEnvelope(BaseModel):
    message: str
    book: Book


class Message(BaseModel):
    message: str


class StoreInfo(BaseModel):
    path: str
    exists: bool
    count: int
