"""
Review collection service.

Reviews reference a book through ``bookId`` but the reference is not
checked against the books collection. Ids have the form
``review-<epoch millis>`` and, together with ``timestamp``, are fixed
at creation time: updates merge every other field from the payload.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List

from ..errors import NotFoundError, ValidationError
from ..storage import CollectionStore

logger = logging.getLogger(__name__)

COLLECTION = "reviews"
PINNED_FIELDS = ("id", "timestamp")
REQUIRED_FIELDS = ("bookId", "rating")

Review = Dict[str, Any]


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _iso_timestamp(moment: datetime) -> str:
    # 2024-05-01T12:30:00.123Z
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _unique_id(reviews: List[Review], millis: int) -> str:
    taken = {r.get("id") for r in reviews}
    while f"review-{millis}" in taken:
        millis += 1
    return f"review-{millis}"


class ReviewService:
    """Queries and mutations over the ``reviews`` collection."""

    def __init__(self, store: CollectionStore):
        self.store = store

    def _reviews(self) -> List[Review]:
        return self.store.load(COLLECTION)[COLLECTION]

    def list_reviews(self) -> List[Review]:
        return self._reviews()

    def list_for_book(self, book_id: str) -> List[Review]:
        return [r for r in self._reviews() if r.get("bookId") == book_id]

    def create_review(self, payload: Dict[str, Any]) -> Review:
        """Append a new review built from ``payload`` and return it.

        The server fills in ``id``, ``timestamp`` and ``verified`` (false)
        before the payload is merged over them. The payload may override
        ``verified`` but not the two identity fields. The merged review
        must have a ``bookId`` and a ``rating``.

        Raises
        ------
        ValidationError
            If ``bookId`` or ``rating`` is missing from the merged review.
        """
        missing = [f for f in REQUIRED_FIELDS if payload.get(f) is None]
        if missing:
            raise ValidationError(f"Missing required field(s): {', '.join(missing)}")

        moment = _now()
        with self.store.mutate(COLLECTION) as document:
            reviews = document[COLLECTION]
            review: Review = {
                "id": _unique_id(reviews, int(moment.timestamp() * 1000)),
                "timestamp": _iso_timestamp(moment),
                "verified": False,
            }
            review.update({k: v for k, v in payload.items() if k not in PINNED_FIELDS})
            reviews.append(review)
        logger.info("Created review %s for book %s", review["id"], review["bookId"])
        return review

    def update_review(self, review_id: str, payload: Dict[str, Any]) -> Review:
        with self.store.mutate(COLLECTION) as document:
            reviews = document[COLLECTION]
            for index, existing in enumerate(reviews):
                if existing.get("id") == review_id:
                    merged = {**existing, **payload}
                    for field in PINNED_FIELDS:
                        if field in existing:
                            merged[field] = existing[field]
                        else:
                            merged.pop(field, None)
                    reviews[index] = merged
                    break
            else:
                raise NotFoundError("Review not found")
        logger.info("Updated review %s", review_id)
        return merged

    def delete_review(self, review_id: str) -> Dict[str, str]:
        with self.store.mutate(COLLECTION) as document:
            reviews = document[COLLECTION]
            remaining = [r for r in reviews if r.get("id") != review_id]
            if len(remaining) == len(reviews):
                raise NotFoundError("Review not found")
            document[COLLECTION] = remaining
        logger.info("Deleted review %s", review_id)
        return {"message": "Review deleted", "id": review_id}
