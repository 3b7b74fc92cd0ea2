"""Error taxonomy shared by services, the REST client and the API layer."""

from __future__ import annotations


class CatalogConsoleError(Exception):
    """Base for every error raised by the console core."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(CatalogConsoleError):
    """Rejected locally, before any request is sent."""

    status_code = 422


class ConflictError(CatalogConsoleError):
    """Duplicate link, or the catalog answered 409."""

    status_code = 409


class NotFoundError(CatalogConsoleError):
    """Unknown id, locally or as reported by the catalog."""

    status_code = 404

    def __init__(self, message: str, resource_id: str | None = None):
        super().__init__(message)
        self.resource_id = resource_id


class TransportError(CatalogConsoleError):
    """A repository call failed (network, timeout, non-2xx, bad body)."""

    status_code = 502

    def __init__(self, operation: str, message: str, upstream_status: int | None = None):
        super().__init__(f"{operation} failed: {message}")
        self.operation = operation
        self.upstream_status = upstream_status
