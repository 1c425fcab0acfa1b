"""Error taxonomy shared by the catalog service and its client."""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for catalog failures."""


class StorageUnavailable(CatalogError):
    """Raised when the backing database cannot be reached or queried."""


class InvalidRequest(CatalogError, ValueError):
    """Raised when a request carries a malformed genre identifier."""


class NetworkFailure(CatalogError):
    """Raised when a call to the catalog API fails or times out."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class CoordinatorNotReady(RuntimeError):
    """Raised when filters are used before the catalog has been loaded."""
