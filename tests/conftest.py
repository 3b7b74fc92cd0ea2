"""Shared fixtures: an in-memory catalog standing in for the REST API."""

import itertools

import pytest

from catalog_console.clients.base import CatalogRepository
from catalog_console.core.exceptions import NotFoundError, TransportError
from catalog_console.schemas.equipment_link import LinkDraft, LinkOrder, LinkUpdate, OrderedLink
from catalog_console.schemas.relationship import RelationshipEdge


class InMemoryCatalogRepository(CatalogRepository):
    """Records every call; ``fail_on`` makes named operations raise TransportError."""

    def __init__(self, edges=None, links=None):
        self.edges: dict[str, RelationshipEdge] = {e.id: e for e in edges or []}
        self.links: dict[str, OrderedLink] = {link.id: link for link in links or []}
        self.calls: list[tuple] = []
        self.commits: list[tuple[str, list[LinkOrder]]] = []
        self.fail_on: set[str] = set()
        self._ids = itertools.count(1)

    def _enter(self, operation, *args):
        self.calls.append((operation, *args))
        if operation in self.fail_on:
            raise TransportError(operation, "simulated outage", upstream_status=503)

    async def list_edges(self, exercise_id):
        self._enter("list_edges", exercise_id)
        return [e for e in self.edges.values() if e.touches(exercise_id)]

    async def create_edge(self, edge):
        self._enter("create_edge", edge)
        stored = edge.model_copy(update={"id": f"rel-{next(self._ids)}"})
        self.edges[stored.id] = stored
        return stored

    async def update_edge(self, edge_id, edge):
        self._enter("update_edge", edge_id, edge)
        if edge_id not in self.edges:
            raise NotFoundError("update_edge: resource not found", resource_id=edge_id)
        self.edges[edge_id] = edge
        return edge

    async def delete_edge(self, edge_id):
        self._enter("delete_edge", edge_id)
        if self.edges.pop(edge_id, None) is None:
            raise NotFoundError("delete_edge: resource not found", resource_id=edge_id)

    async def list_links(self, parent_id):
        self._enter("list_links", parent_id)
        return [link for link in self.links.values() if link.parent_id == parent_id]

    async def create_link(self, link: LinkDraft):
        self._enter("create_link", link)
        stored = OrderedLink(id=f"link-{next(self._ids)}", **link.model_dump())
        self.links[stored.id] = stored
        return stored

    async def update_link(self, link_id, fields: LinkUpdate):
        self._enter("update_link", link_id, fields)
        if link_id not in self.links:
            raise NotFoundError("update_link: resource not found", resource_id=link_id)
        self.links[link_id] = self.links[link_id].model_copy(update=fields.model_dump(exclude_unset=True))
        return self.links[link_id]

    async def delete_link(self, link_id):
        self._enter("delete_link", link_id)
        if self.links.pop(link_id, None) is None:
            raise NotFoundError("delete_link: resource not found", resource_id=link_id)

    async def commit_order(self, parent_id, orders):
        self._enter("commit_order", parent_id, orders)
        self.commits.append((parent_id, list(orders)))
        for o in orders:
            self.links[o.id] = self.links[o.id].model_copy(update={"order": o.order})


def make_link(link_id, child_id, order, parent_id="ex-1", is_required=True):
    return OrderedLink(id=link_id, parent_id=parent_id, child_id=child_id, order=order, is_required=is_required)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def repository():
    return InMemoryCatalogRepository()


@pytest.fixture
def four_links():
    # Stored out of order on purpose; load() sorts by order
    return [
        make_link("L3", "eq-kettlebell", 3, is_required=False),
        make_link("L1", "eq-barbell", 1),
        make_link("L4", "eq-mat", 4, is_required=False),
        make_link("L2", "eq-bench", 2),
    ]
