"""Bookstore catalog API: books and reviews stored as JSON documents."""

__version__ = "1.0.0"
