"""
Error taxonomy for catalog operations.

Every error here is caused by the client and is mapped to a 400 response
by the API layer.
"""


class CatalogError(Exception):
    """Base class for client-caused catalog errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class DecodeError(CatalogError):
    """Request body could not be decoded into a book payload."""


class ValidationError(CatalogError):
    """Payload has the wrong shape for the requested operation."""


class NotFoundError(CatalogError):
    """No book exists under the given identifier."""


class RangeError(CatalogError):
    """Offset or limit falls outside the permitted bounds."""
