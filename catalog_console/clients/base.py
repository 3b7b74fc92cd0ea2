"""Repository contract for the remote exercise catalog."""

from __future__ import annotations

from abc import ABC, abstractmethod

from catalog_console.schemas.equipment_link import LinkDraft, LinkOrder, LinkUpdate, OrderedLink
from catalog_console.schemas.relationship import RelationshipEdge


class CatalogRepository(ABC):
    """Async access to relationship edges and equipment links.

    Every failure surfaces as a ``CatalogConsoleError`` subclass: 404 as
    ``NotFoundError``, 409 as ``ConflictError``, anything else as
    ``TransportError``. Implementations never retry.
    """

    # ---- relationship edges ----

    @abstractmethod
    async def list_edges(self, exercise_id: str) -> list[RelationshipEdge]: ...

    @abstractmethod
    async def create_edge(self, edge: RelationshipEdge) -> RelationshipEdge: ...

    @abstractmethod
    async def update_edge(self, edge_id: str, edge: RelationshipEdge) -> RelationshipEdge: ...

    @abstractmethod
    async def delete_edge(self, edge_id: str) -> None: ...

    # ---- ordered equipment links ----

    @abstractmethod
    async def list_links(self, parent_id: str) -> list[OrderedLink]: ...

    @abstractmethod
    async def create_link(self, link: LinkDraft) -> OrderedLink: ...

    @abstractmethod
    async def update_link(self, link_id: str, fields: LinkUpdate) -> OrderedLink: ...

    @abstractmethod
    async def delete_link(self, link_id: str) -> None: ...

    @abstractmethod
    async def commit_order(self, parent_id: str, orders: list[LinkOrder]) -> None: ...

    async def ping(self) -> None:
        """Raise if the catalog is unreachable. Default: always reachable."""
        return None

    async def aclose(self) -> None:
        return None
