"""Domain error taxonomy shared by the backend client, services and routers."""
from typing import Optional


class CatalogError(Exception):
    """Base class for all catalog errors."""

    status_code = 500

    def __init__(self, message: str, *, detail: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail or {}


class NotFound(CatalogError):
    status_code = 404


class Conflict(CatalogError):
    """A unique constraint was violated, e.g. a collaborator already linked."""

    status_code = 409


class ValidationError(CatalogError):
    """Input rejected before any storage or database call was made."""

    status_code = 422


class TransientIOError(CatalogError):
    """Database or object storage failure; the caller may retry by hand."""

    status_code = 503


class PermissionDenied(CatalogError):
    status_code = 403
