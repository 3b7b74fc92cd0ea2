"""Ordered equipment links of one exercise.

Adds, removals and flag edits are written through immediately. Reordering
is optimistic: ``move`` only touches the local list and marks it dirty, and
``commit`` pushes the whole order in one batch. A failed commit leaves the
list dirty with the local order intact so the same payload can be retried.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from catalog_console.clients.base import CatalogRepository
from catalog_console.core.enums import LinkListState
from catalog_console.core.exceptions import ConflictError, NotFoundError, ValidationError
from catalog_console.schemas.equipment_link import (
    LinkDraft,
    LinkOrder,
    LinkSummary,
    LinkUpdate,
    OrderedLink,
)

logger = logging.getLogger(__name__)


class OrderedLinkList:
    """One parent's links, sorted by ``order``, with a clean/dirty state."""

    def __init__(self, repository: CatalogRepository, parent_id: str):
        self.repository = repository
        self.parent_id = parent_id
        self.state = LinkListState.CLEAN
        self.is_committing = False
        self._links: list[OrderedLink] = []

    @property
    def links(self) -> list[OrderedLink]:
        return list(self._links)

    @property
    def is_dirty(self) -> bool:
        return self.state is LinkListState.DIRTY

    @property
    def summary(self) -> LinkSummary:
        required = sum(1 for link in self._links if link.is_required)
        return LinkSummary(required=required, optional=len(self._links) - required, total=len(self._links))

    def __len__(self) -> int:
        return len(self._links)

    def _index_of(self, link_id: str) -> int:
        for i, link in enumerate(self._links):
            if link.id == link_id:
                return i
        raise NotFoundError(f"Link {link_id} not found", resource_id=link_id)

    def available(self, candidate_ids: Iterable[str]) -> list[str]:
        """Children that are not linked yet."""
        linked = {link.child_id for link in self._links}
        return [c for c in candidate_ids if c not in linked]

    # ---- write-through operations ----

    async def load(self) -> list[OrderedLink]:
        links = await self.repository.list_links(self.parent_id)
        self._links = sorted(links, key=lambda link: link.order)
        self.state = LinkListState.CLEAN
        return self.links

    async def add(self, child_id: str, *, is_required: bool = True, setup_notes: str | None = None) -> OrderedLink:
        """Link a child at the end of the list (order = current max + 1)."""
        if any(link.child_id == child_id for link in self._links):
            raise ConflictError(f"{child_id} is already linked to {self.parent_id}")
        next_order = max((link.order for link in self._links), default=0) + 1
        created = await self.repository.create_link(
            LinkDraft(
                parent_id=self.parent_id,
                child_id=child_id,
                is_required=is_required,
                setup_notes=setup_notes,
                order=next_order,
            )
        )
        self._links.append(created)
        logger.debug("Linked %s to %s at order %s", child_id, self.parent_id, created.order)
        return created

    async def remove(self, link_id: str) -> None:
        """Delete a link; survivors keep their order values."""
        index = self._index_of(link_id)
        await self.repository.delete_link(link_id)
        del self._links[index]

    async def toggle_required(self, link_id: str) -> OrderedLink:
        index = self._index_of(link_id)
        current = self._links[index]
        updated = await self.repository.update_link(link_id, LinkUpdate(is_required=not current.is_required))
        # Keep the local order; only the flag comes from the catalog
        self._links[index] = current.model_copy(update={"is_required": updated.is_required})
        return self._links[index]

    async def update_setup_notes(self, link_id: str, setup_notes: str | None) -> OrderedLink:
        index = self._index_of(link_id)
        current = self._links[index]
        updated = await self.repository.update_link(link_id, LinkUpdate(setup_notes=setup_notes))
        self._links[index] = current.model_copy(update={"setup_notes": updated.setup_notes})
        return self._links[index]

    # ---- optimistic reordering ----

    def move(self, source_index: int, target_index: int) -> None:
        """Move one link locally and renumber the whole list to 1..N."""
        size = len(self._links)
        for name, index in (("source_index", source_index), ("target_index", target_index)):
            if not 0 <= index < size:
                raise ValidationError(f"{name} {index} out of range for {size} link(s)")
        if source_index == target_index:
            return
        links = list(self._links)
        moved = links.pop(source_index)
        links.insert(target_index, moved)
        self._links = [link.model_copy(update={"order": i + 1}) for i, link in enumerate(links)]
        self.state = LinkListState.DIRTY

    def drop(self, dragged_link_id: str, source_index: int, target_link_id: str, target_index: int) -> None:
        """Drag-and-drop: dropping a link onto itself does nothing."""
        if dragged_link_id == target_link_id:
            return
        self.move(source_index, target_index)

    def order_payload(self) -> list[LinkOrder]:
        return [LinkOrder(id=link.id, order=i + 1) for i, link in enumerate(self._links)]

    async def commit(self) -> None:
        """Push the local order in one batch; stays dirty if the catalog rejects it."""
        payload = self.order_payload()
        self.is_committing = True
        try:
            await self.repository.commit_order(self.parent_id, payload)
        finally:
            self.is_committing = False
        self._links = [link.model_copy(update={"order": o.order}) for link, o in zip(self._links, payload)]
        self.state = LinkListState.CLEAN
        logger.info("Committed order of %d link(s) for %s", len(payload), self.parent_id)

    async def discard(self) -> list[OrderedLink]:
        """Drop local reordering and reload what the catalog has."""
        return await self.load()
