"""
Catalog package for the bookstore API.

This package holds the two collection services (books and reviews),
the payload schemas, the credential gate used on mutating routes and
the routers that expose everything under ``/api``. Services are thin
wrappers over :class:`bookstore.storage.CollectionStore`; swapping the
JSON files for another backend only requires a store with the same
``load``/``save``/``mutate`` methods.
"""

from .router import books_router, reviews_router  # noqa: F401
