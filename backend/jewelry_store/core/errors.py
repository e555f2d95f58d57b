"""Catalog error taxonomy.

Services raise these; the app translates them to JSON responses in one
exception handler (see ``jewelry_store.main``).
"""
from typing import Optional

from fastapi import status


class CatalogError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(CatalogError):
    """Bad or missing input field; rejected before any side effect."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, field: Optional[str], reason: str):
        super().__init__(reason)
        self.field = field
        self.reason = reason


class InvalidInputError(ValidationError):
    pass


class InvalidFilterError(ValidationError):
    pass


class UnsupportedMediaError(CatalogError):
    status_code = status.HTTP_415_UNSUPPORTED_MEDIA_TYPE


class SizeLimitError(CatalogError):
    status_code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE


class AuthenticationError(CatalogError):
    status_code = status.HTTP_401_UNAUTHORIZED


class NotFoundError(CatalogError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(CatalogError):
    """Caller's expected version no longer matches the stored row."""

    status_code = status.HTTP_409_CONFLICT


class StorageError(CatalogError):
    pass


class GenerationExhaustedError(CatalogError):
    pass
