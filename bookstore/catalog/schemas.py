"""
Pydantic schema definitions for the catalog module.

The payload models describe the fields the API knows about, but every
field is optional and unknown fields are kept, so clients can store
arbitrary extra attributes on a book or review. Services only merge the
fields a client actually sent (``model_dump(exclude_unset=True)``),
which is what makes ``PUT`` behave as a partial update.

Field types are documentation only: values are stored exactly as the
client sent them, so a string ``reviewCount`` stays a string.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class Payload(BaseModel):
    model_config = ConfigDict(extra="allow")

    def sent_fields(self) -> Dict[str, Any]:
        """Return only the fields present in the request body."""
        sent = self.model_dump(exclude_unset=True)
        sent.update(self.model_extra or {})
        return sent


class BookPayload(Payload):
    """Body of ``POST /api/books`` and ``PUT /api/books/{id}``.

    ``datePublished`` is an ISO date (``YYYY-MM-DD``). ``rating`` and
    ``reviewCount`` feed the top-rated score. Any ``id`` sent by the
    client is ignored by the service.
    """

    title: Optional[Any] = Field(default=None, description="Book title")
    author: Optional[Any] = Field(default=None, description="Author name")
    tags: Optional[Any] = Field(default=None, description="List of tag strings")
    rating: Optional[Any] = Field(default=None, description="Average rating, 0 or more")
    reviewCount: Optional[Any] = Field(default=None, description="Number of reviews, 0 or more")
    featured: Optional[Any] = Field(default=None, description="Shown under /featured when true")
    datePublished: Optional[Any] = Field(default=None, description="YYYY-MM-DD, defaults to today")


class ReviewPayload(Payload):
    """Body of ``POST /api/reviews`` and ``PUT /api/reviews/{id}``.

    ``bookId`` and ``rating`` are required when creating a review, but
    that check happens on the merged entity inside the service, so the
    model itself leaves them optional.
    """

    bookId: Optional[Any] = Field(default=None, description="Id of the reviewed book")
    rating: Optional[Any] = Field(default=None, description="Reader rating")
    verified: Optional[Any] = Field(default=None, description="Defaults to false")
    comment: Optional[Any] = None


class DeleteConfirmation(BaseModel):
    message: str
    id: str
