"""
Book collection service.

Every operation loads the ``books`` document from the
:class:`~bookstore.storage.CollectionStore`; nothing is kept in memory
between calls. Write operations run inside ``store.mutate("books")`` so
the load-modify-save sequence for the collection is serialized.

Book ids are decimal strings of increasing integers. A new book gets
``max(existing ids) + 1`` and an update can never change a book's id.
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from ..errors import NotFoundError, ValidationError
from ..storage import CollectionStore

logger = logging.getLogger(__name__)

COLLECTION = "books"
TOP_RATED_LIMIT = 10
_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

Book = Dict[str, Any]


def _today() -> str:
    return date.today().isoformat()


def _norm(s: Any) -> str:
    """Lowercase and strip ``s`` for case-insensitive comparison.

    Non-string values (``None``, numbers) normalize to an empty string
    so they never match a search term.
    """
    if not isinstance(s, str):
        return ""
    return s.strip().lower()


def _number(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return value


def _parse_published(value: Any) -> Optional[date]:
    """Return the calendar date of a ``datePublished`` value.

    Full ISO datetimes are accepted by looking at the date part only.
    ``None`` is returned for missing or unparsable values.
    """
    if not isinstance(value, str):
        return None
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        return None


def _parse_query_date(value: str, name: str) -> date:
    value = value.strip()
    if not _DATE_RE.match(value):
        raise ValidationError(f"'{name}' must be a date in YYYY-MM-DD form")
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError as exc:
        raise ValidationError(f"'{name}' is not a valid calendar date") from exc


def _next_id(books: List[Book]) -> str:
    highest = 0
    for book in books:
        try:
            highest = max(highest, int(str(book.get("id"))))
        except (TypeError, ValueError):
            continue
    return str(highest + 1)


class BookService:
    """Queries and mutations over the ``books`` collection."""

    def __init__(self, store: CollectionStore):
        self.store = store

    def _books(self) -> List[Book]:
        return self.store.load(COLLECTION)[COLLECTION]

    def list_books(self) -> List[Book]:
        return self._books()

    def list_featured(self) -> List[Book]:
        return [b for b in self._books() if b.get("featured") is True]

    def search(self, q: Optional[str]) -> List[Book]:
        """Case-insensitive substring search over title, author and tags.

        Parameters
        ----------
        q : Optional[str]
            Search term. Required; surrounding whitespace is ignored.

        Returns
        -------
        List[Book]
            Matching books in storage order. An empty list is a valid
            result.

        Raises
        ------
        ValidationError
            If ``q`` is missing or blank.
        """
        nq = _norm(q)
        if not nq:
            raise ValidationError("Query parameter 'q' is required")

        def _matches(book: Book) -> bool:
            if nq in _norm(book.get("title")) or nq in _norm(book.get("author")):
                return True
            tags = book.get("tags")
            if isinstance(tags, list):
                return any(nq in _norm(t) for t in tags)
            return False

        return [b for b in self._books() if _matches(b)]

    def date_range(self, start: Optional[str], end: Optional[str]) -> List[Book]:
        """Books whose ``datePublished`` falls within ``[start, end]``.

        Both bounds are inclusive ``YYYY-MM-DD`` dates. Books without a
        parsable ``datePublished`` are left out.
        """
        if not start or not end:
            raise ValidationError("Please provide start and end dates (YYYY-MM-DD)")
        start_date = _parse_query_date(start, "start")
        end_date = _parse_query_date(end, "end")

        results = []
        for book in self._books():
            published = _parse_published(book.get("datePublished"))
            if published is not None and start_date <= published <= end_date:
                results.append(book)
        return results

    def top_rated(self, limit: int = TOP_RATED_LIMIT) -> List[Book]:
        """Return the highest scoring books, best first.

        The score is ``rating * reviewCount`` with missing values counted
        as zero. Each returned entry is a copy of the book with the
        computed ``score`` added; the stored books are not modified. Ties
        keep storage order.
        """
        scored = [
            {**b, "score": _number(b.get("rating")) * _number(b.get("reviewCount"))}
            for b in self._books()
        ]
        scored.sort(key=lambda b: b["score"], reverse=True)
        return scored[:limit]

    def get_book(self, book_id: str) -> Book:
        for book in self._books():
            if book.get("id") == book_id:
                return book
        raise NotFoundError("Book not found")

    def create_book(self, payload: Dict[str, Any]) -> Book:
        """Append a new book and return it.

        The id is always server-assigned; an ``id`` in ``payload`` is
        discarded. ``datePublished`` defaults to today's date.
        """
        with self.store.mutate(COLLECTION) as document:
            books = document[COLLECTION]
            book: Book = {"id": _next_id(books)}
            book.update({k: v for k, v in payload.items() if k != "id"})
            if book.get("datePublished") is None:
                book["datePublished"] = _today()
            books.append(book)
        logger.info("Created book %s", book["id"])
        return book

    def update_book(self, book_id: str, payload: Dict[str, Any]) -> Book:
        """Shallow-merge ``payload`` into the book with ``book_id``.

        Fields in ``payload`` win over stored ones, except ``id`` which
        stays equal to ``book_id``.
        """
        with self.store.mutate(COLLECTION) as document:
            books = document[COLLECTION]
            for index, existing in enumerate(books):
                if existing.get("id") == book_id:
                    merged = {**existing, **payload, "id": book_id}
                    books[index] = merged
                    break
            else:
                raise NotFoundError("Book not found")
        logger.info("Updated book %s", book_id)
        return merged

    def delete_book(self, book_id: str) -> Dict[str, str]:
        with self.store.mutate(COLLECTION) as document:
            books = document[COLLECTION]
            remaining = [b for b in books if b.get("id") != book_id]
            if len(remaining) == len(books):
                raise NotFoundError("Book not found")
            document[COLLECTION] = remaining
        logger.info("Deleted book %s", book_id)
        return {"message": "Book deleted", "id": book_id}
