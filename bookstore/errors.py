"""
Error taxonomy for the bookstore catalog.

Services raise the exceptions below; ``main.py`` registers a single
handler that turns any :class:`CatalogError` into a JSON body of the
form ``{"error": "<message>"}`` with the error's ``status_code``.
"""


class CatalogError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(CatalogError):
    """A required input is missing or malformed."""

    status_code = 400


class AuthError(CatalogError):
    """A gated route was called without a valid credential."""

    status_code = 403


class NotFoundError(CatalogError):
    """No entity matches the given identifier."""

    status_code = 404


class StorageError(CatalogError):
    """A collection document could not be read, parsed or written."""

    status_code = 500
