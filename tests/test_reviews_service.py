from datetime import datetime, timezone

import pytest

from bookstore.catalog import reviews as reviews_module
from bookstore.catalog.reviews import ReviewService
from bookstore.errors import NotFoundError, ValidationError

from .conftest import read_collection

FIXED_NOW = datetime(2024, 5, 1, 12, 30, 0, 123000, tzinfo=timezone.utc)
FIXED_MILLIS = int(FIXED_NOW.timestamp() * 1000)


@pytest.fixture
def service(seeded_store, monkeypatch):
    monkeypatch.setattr(reviews_module, "_now", lambda: FIXED_NOW)
    return ReviewService(seeded_store)


def test_list_reviews(service):
    assert len(service.list_reviews()) == 3


def test_list_for_book_filters_by_exact_book_id(service):
    assert [r["id"] for r in service.list_for_book("1")] == ["review-1700000000000", "review-1700000900000"]
    assert service.list_for_book("01") == []


def test_create_review_fills_server_fields(service, data_dir):
    created = service.create_review({"bookId": "2", "rating": 4, "comment": "Solid"})

    assert created == {
        "id": f"review-{FIXED_MILLIS}",
        "timestamp": "2024-05-01T12:30:00.123Z",
        "verified": False,
        "bookId": "2",
        "rating": 4,
        "comment": "Solid",
    }
    assert read_collection(data_dir, "reviews")[-1] == created


def test_create_review_lets_payload_override_verified_only(service):
    created = service.create_review(
        {"bookId": "2", "rating": 4, "verified": True, "id": "review-1", "timestamp": "yesterday"}
    )

    assert created["verified"] is True
    assert created["id"] == f"review-{FIXED_MILLIS}"
    assert created["timestamp"] == "2024-05-01T12:30:00.123Z"


def test_create_review_ids_stay_unique_within_one_millisecond(service):
    first = service.create_review({"bookId": "1", "rating": 5})
    second = service.create_review({"bookId": "1", "rating": 3})

    assert first["id"] == f"review-{FIXED_MILLIS}"
    assert second["id"] == f"review-{FIXED_MILLIS + 1}"


@pytest.mark.parametrize(
    "payload",
    [{"rating": 4}, {"bookId": "1"}, {"bookId": "1", "rating": None}, {}],
)
def test_create_review_requires_book_id_and_rating(service, data_dir, payload):
    with pytest.raises(ValidationError):
        service.create_review(payload)
    assert len(read_collection(data_dir, "reviews")) == 3


def test_update_review_merges_and_pins_identity(service, data_dir):
    updated = service.update_review(
        "review-1700000500000",
        {"rating": 5, "comment": "Changed my mind", "id": "review-evil", "timestamp": "now"},
    )

    assert updated["id"] == "review-1700000500000"
    assert updated["timestamp"] == "2023-11-14T22:21:40.000Z"
    assert updated["rating"] == 5
    assert updated["comment"] == "Changed my mind"
    assert updated["bookId"] == "2"
    assert read_collection(data_dir, "reviews")[1] == updated


def test_update_missing_review(service):
    with pytest.raises(NotFoundError):
        service.update_review("review-0", {"rating": 1})


def test_delete_review(service, data_dir):
    assert service.delete_review("review-1700000000000") == {
        "message": "Review deleted",
        "id": "review-1700000000000",
    }
    assert len(read_collection(data_dir, "reviews")) == 2
    with pytest.raises(NotFoundError):
        service.delete_review("review-1700000000000")
