"""
Route definitions for the catalog API.

Endpoints under /api/books:
- GET    /                   : all books
- GET    /featured           : books flagged ``featured``
- GET    /search?q=          : substring search on title, author, tags
- GET    /top-rated          : ten best books by rating x reviewCount
- GET    /date-range?start=&end= : books published in an inclusive range
- GET    /{book_id}          : one book
- POST   /                   : create (gated)
- PUT    /{book_id}          : merge-update (gated, PATCH accepted too)
- DELETE /{book_id}          : delete (gated)

Endpoints under /api/reviews:
- GET    /                   : all reviews
- GET    /book/{book_id}     : reviews of one book
- POST   /                   : create (gated)
- PUT    /{review_id}        : merge-update (gated, PATCH accepted too)
- DELETE /{review_id}        : delete (gated)

Routes are matched in declaration order, so every literal path
(``/featured``, ``/search``, ``/top-rated``, ``/date-range``) must be
declared above ``/{book_id}``; otherwise the parameter would capture
the literal segment as an id. ``tests/test_routes.py`` checks this.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, Request, status

from .auth import require_api_key
from .books import BookService
from .reviews import ReviewService
from .schemas import BookPayload, DeleteConfirmation, ReviewPayload

books_router = APIRouter(prefix="/api/books", tags=["books"])
reviews_router = APIRouter(prefix="/api/reviews", tags=["reviews"])

gated = [Depends(require_api_key)]


def get_book_service(request: Request) -> BookService:
    return BookService(request.app.state.store)


def get_review_service(request: Request) -> ReviewService:
    return ReviewService(request.app.state.store)


# ---------------------------------------------------------------------------
# Books: literal paths first


@books_router.get("", response_model=List[Dict[str, Any]])
def list_books(books: BookService = Depends(get_book_service)):
    return books.list_books()


@books_router.get("/featured", response_model=List[Dict[str, Any]])
def list_featured(books: BookService = Depends(get_book_service)):
    return books.list_featured()


@books_router.get("/search", response_model=List[Dict[str, Any]])
def search_books(
    q: Optional[str] = Query(default=None, description="Text matched against title, author and tags"),
    books: BookService = Depends(get_book_service),
):
    return books.search(q)


@books_router.get("/top-rated", response_model=List[Dict[str, Any]])
def top_rated(books: BookService = Depends(get_book_service)):
    return books.top_rated()


@books_router.get("/date-range", response_model=List[Dict[str, Any]])
def books_in_date_range(
    start: Optional[str] = Query(default=None, description="First day, YYYY-MM-DD"),
    end: Optional[str] = Query(default=None, description="Last day, YYYY-MM-DD"),
    books: BookService = Depends(get_book_service),
):
    return books.date_range(start, end)


@books_router.post(
    "",
    response_model=Dict[str, Any],
    status_code=status.HTTP_201_CREATED,
    dependencies=gated,
)
def create_book(payload: BookPayload, books: BookService = Depends(get_book_service)):
    return books.create_book(payload.sent_fields())


# Books: parameterized paths


@books_router.get("/{book_id}", response_model=Dict[str, Any])
def get_book(book_id: str, books: BookService = Depends(get_book_service)):
    return books.get_book(book_id)


@books_router.api_route(
    "/{book_id}",
    methods=["PUT", "PATCH"],
    response_model=Dict[str, Any],
    dependencies=gated,
)
def update_book(book_id: str, payload: BookPayload, books: BookService = Depends(get_book_service)):
    return books.update_book(book_id, payload.sent_fields())


@books_router.delete("/{book_id}", response_model=DeleteConfirmation, dependencies=gated)
def delete_book(book_id: str, books: BookService = Depends(get_book_service)):
    return books.delete_book(book_id)


# ---------------------------------------------------------------------------
# Reviews


@reviews_router.get("", response_model=List[Dict[str, Any]])
def list_reviews(reviews: ReviewService = Depends(get_review_service)):
    return reviews.list_reviews()


@reviews_router.get("/book/{book_id}", response_model=List[Dict[str, Any]])
def list_reviews_for_book(book_id: str, reviews: ReviewService = Depends(get_review_service)):
    return reviews.list_for_book(book_id)


@reviews_router.post(
    "",
    response_model=Dict[str, Any],
    status_code=status.HTTP_201_CREATED,
    dependencies=gated,
)
def create_review(payload: ReviewPayload, reviews: ReviewService = Depends(get_review_service)):
    return reviews.create_review(payload.sent_fields())


@reviews_router.api_route(
    "/{review_id}",
    methods=["PUT", "PATCH"],
    response_model=Dict[str, Any],
    dependencies=gated,
)
def update_review(
    review_id: str,
    payload: ReviewPayload,
    reviews: ReviewService = Depends(get_review_service),
):
    return reviews.update_review(review_id, payload.sent_fields())


@reviews_router.delete("/{review_id}", response_model=DeleteConfirmation, dependencies=gated)
def delete_review(review_id: str, reviews: ReviewService = Depends(get_review_service)):
    return reviews.delete_review(review_id)
