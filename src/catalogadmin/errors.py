from __future__ import annotations


class CatalogError(Exception):
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class RepositoryError(CatalogError):
    """A database statement failed; the message is safe to show to clients."""


class StorageError(CatalogError):
    """Writing an uploaded asset to the public tree failed."""


class ConflictError(RepositoryError):
    """A write broke a uniqueness rule the caller reports as a bad request."""

    status_code = 400
