"""Request dependencies."""

from fastapi import Request

from catalog_console.clients.base import CatalogRepository


def get_repository(request: Request) -> CatalogRepository:
    """Repository created in the app lifespan (overridden in tests)."""
    return request.app.state.repository
