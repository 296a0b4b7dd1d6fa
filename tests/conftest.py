import json

import pytest
from fastapi.testclient import TestClient

from bookstore.config import Settings
from bookstore.main import create_app
from bookstore.storage import CollectionStore

API_KEY = "test-key"


def make_settings(tmp_path, **overrides):
    options = {
        "data_dir": tmp_path / "data",
        "auth_enabled": True,
        "api_key": API_KEY,
        "log_file": "",
    }
    options.update(overrides)
    return Settings(**options)


def write_collection(data_dir, name, entities):
    data_dir.mkdir(parents=True, exist_ok=True)
    with (data_dir / f"{name}.json").open("w", encoding="utf-8") as f:
        json.dump({name: entities}, f, indent=2)


def read_collection(data_dir, name):
    with (data_dir / f"{name}.json").open("r", encoding="utf-8") as f:
        return json.load(f)[name]


SAMPLE_BOOKS = [
    {
        "id": "1",
        "title": "The Silent Harbor",
        "author": "Mara Ellison",
        "tags": ["mystery", "coastal"],
        "rating": 4.5,
        "reviewCount": 120,
        "featured": True,
        "datePublished": "2021-06-15",
    },
    {
        "id": "2",
        "title": "Numbers in the Wild",
        "author": "Samir Okafor",
        "tags": ["science"],
        "rating": 4.2,
        "reviewCount": 87,
        "featured": False,
        "datePublished": "2022-03-02",
    },
    {
        "id": "3",
        "title": "Gardens of Salt",
        "author": "Lena Varga",
        "rating": 3.9,
        "reviewCount": 45,
        "featured": True,
        "datePublished": "2022-12-31",
    },
    {
        "id": "10",
        "title": "Harbor Lights",
        "author": "Noor Hadid",
        "featured": "yes",
        "datePublished": "2023-01-01",
    },
]

SAMPLE_REVIEWS = [
    {
        "id": "review-1700000000000",
        "bookId": "1",
        "rating": 5,
        "timestamp": "2023-11-14T22:13:20.000Z",
        "verified": True,
    },
    {
        "id": "review-1700000500000",
        "bookId": "2",
        "rating": 3,
        "timestamp": "2023-11-14T22:21:40.000Z",
        "verified": False,
    },
    {
        "id": "review-1700000900000",
        "bookId": "1",
        "rating": 4,
        "timestamp": "2023-11-14T22:28:20.000Z",
        "verified": False,
    },
]


@pytest.fixture
def data_dir(tmp_path):
    return tmp_path / "data"


@pytest.fixture
def store(data_dir):
    store = CollectionStore(data_dir)
    store.initialize("books")
    store.initialize("reviews")
    return store


@pytest.fixture
def seeded_store(data_dir):
    write_collection(data_dir, "books", SAMPLE_BOOKS)
    write_collection(data_dir, "reviews", SAMPLE_REVIEWS)
    return CollectionStore(data_dir)


@pytest.fixture
def app(tmp_path):
    return create_app(make_settings(tmp_path))


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def seeded_client(tmp_path, data_dir):
    write_collection(data_dir, "books", SAMPLE_BOOKS)
    write_collection(data_dir, "reviews", SAMPLE_REVIEWS)
    return TestClient(create_app(make_settings(tmp_path)))


@pytest.fixture
def auth_headers():
    return {"x-api-key": API_KEY}
