"""
Query filters for the ``/books`` listing.

Each query parameter is a comma-separated list of case-insensitive
terms. A record must satisfy every filter kind that was requested
(AND across kinds) and any one term within a kind (OR within a kind).
A kind whose parameter is absent, or which holds no usable term, is
``None`` on ``BookFilters`` and contributes no predicate at all.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Set

from .normalize import as_int, field_text, field_tokens, mime_types

Predicate = Callable[[Dict[str, Any]], bool]

TOPIC_FIELDS = ("subjects", "bookshelves")


def parse_terms(raw: Optional[str]) -> Optional[List[str]]:
    """Split a comma-separated parameter into lowercase terms.

    Blank terms (``"a,,b"``, trailing commas) are dropped. Returns
    ``None`` when the parameter is absent or holds no term.
    """
    if raw is None:
        return None
    terms = [t.strip().lower() for t in str(raw).split(",")]
    terms = [t for t in terms if t]
    return terms or None


def parse_ids(raw: Optional[str]) -> Optional[Set[int]]:
    """Parse a comma-separated list of integer ids.

    Tokens that are not integers are ignored. A parameter holding only
    invalid tokens gives an empty set, which matches no record; one
    holding no token at all is treated as absent.
    """
    tokens = parse_terms(raw)
    if tokens is None:
        return None
    ids: Set[int] = set()
    for token in tokens:
        value = as_int(token)
        if value is not None:
            ids.add(value)
    return ids


def _contains_any(text: str, terms: Iterable[str]) -> bool:
    return any(t in text for t in terms)


def _id_predicate(ids: Set[int]) -> Predicate:
    def _match(book: Dict[str, Any]) -> bool:
        return as_int(book.get("id")) in ids
    return _match


def _languages_predicate(terms: List[str]) -> Predicate:
    wanted = set(terms)

    def _match(book: Dict[str, Any]) -> bool:
        return any(lang in wanted for lang in field_tokens(book, "languages"))
    return _match


def _mime_type_predicate(terms: List[str]) -> Predicate:
    wanted = set(terms)

    def _match(book: Dict[str, Any]) -> bool:
        return any(mt in wanted for mt in mime_types(book))
    return _match


def _topic_predicate(terms: List[str]) -> Predicate:
    def _match(book: Dict[str, Any]) -> bool:
        return any(
            _contains_any(value, terms)
            for value in field_tokens(book, *TOPIC_FIELDS)
        )
    return _match


def _title_author_predicate(title_terms: List[str], author_terms: List[str]) -> Predicate:
    def _match(book: Dict[str, Any]) -> bool:
        if title_terms and _contains_any(field_text(book, "title"), title_terms):
            return True
        if author_terms and _contains_any(field_text(book, "author"), author_terms):
            return True
        return False
    return _match


@dataclass
class BookFilters:
    """Requested filter terms, one optional collection per filter kind."""

    ids: Optional[Set[int]] = None
    languages: Optional[List[str]] = None
    mime_types: Optional[List[str]] = None
    topics: Optional[List[str]] = None
    title_terms: Optional[List[str]] = None
    author_terms: Optional[List[str]] = None

    @classmethod
    def from_params(
        cls,
        id: Optional[str] = None,
        languages: Optional[str] = None,
        mime_type: Optional[str] = None,
        topic: Optional[str] = None,
        q: Optional[str] = None,
        title: Optional[str] = None,
        author: Optional[str] = None,
    ) -> "BookFilters":
        """Build filters from raw query-string values.

        When ``q`` is given it searches both title and author, and the
        separate ``title``/``author`` parameters are ignored.
        """
        if q is not None:
            title_terms = author_terms = parse_terms(q)
        else:
            title_terms = parse_terms(title)
            author_terms = parse_terms(author)
        return cls(
            ids=parse_ids(id),
            languages=parse_terms(languages),
            mime_types=parse_terms(mime_type),
            topics=parse_terms(topic),
            title_terms=title_terms,
            author_terms=author_terms,
        )

    def predicates(self) -> List[Predicate]:
        preds: List[Predicate] = []
        if self.ids is not None:
            preds.append(_id_predicate(self.ids))
        if self.languages is not None:
            preds.append(_languages_predicate(self.languages))
        if self.mime_types is not None:
            preds.append(_mime_type_predicate(self.mime_types))
        if self.topics is not None:
            preds.append(_topic_predicate(self.topics))
        if self.title_terms or self.author_terms:
            preds.append(
                _title_author_predicate(self.title_terms or [], self.author_terms or [])
            )
        return preds


def apply_filters(books: Iterable[Dict[str, Any]], filters: BookFilters) -> List[Dict[str, Any]]:
    """Return the books passing every active filter, in their original order."""
    preds = filters.predicates()
    return [b for b in books if all(p(b) for p in preds)]
