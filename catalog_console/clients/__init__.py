"""Catalog repository: contract and REST implementation."""

from catalog_console.clients.base import CatalogRepository
from catalog_console.clients.http import HttpCatalogRepository

__all__ = ["CatalogRepository", "HttpCatalogRepository"]
