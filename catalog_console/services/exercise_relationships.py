"""Relationship CRUD for one exercise, as loaded by one console session."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from catalog_console.clients.base import CatalogRepository
from catalog_console.core.enums import RelationshipType
from catalog_console.core.exceptions import NotFoundError
from catalog_console.schemas.relationship import (
    EdgeDirection,
    ModificationDetails,
    ProgressionPath,
    RelationshipEdge,
)
from catalog_console.services.progression import build_progression_path
from catalog_console.services.relationships import available_exercises, create_edge, resolve_direction

logger = logging.getLogger(__name__)


class ExerciseRelationships:
    """Cached edges of one exercise. Validation happens before any request."""

    def __init__(self, repository: CatalogRepository, exercise_id: str):
        self.repository = repository
        self.exercise_id = exercise_id
        self._edges: list[RelationshipEdge] = []

    @property
    def edges(self) -> list[RelationshipEdge]:
        return list(self._edges)

    def get(self, edge_id: str) -> RelationshipEdge:
        for edge in self._edges:
            if edge.id == edge_id:
                return edge
        raise NotFoundError(f"Relationship {edge_id} not found", resource_id=edge_id)

    async def load(self) -> list[RelationshipEdge]:
        self._edges = list(await self.repository.list_edges(self.exercise_id))
        return self.edges

    async def add(
        self,
        related_id: str,
        type: RelationshipType | str,
        *,
        difficulty_change: int = 0,
        bidirectional: bool = False,
        modification_details: ModificationDetails | None = None,
    ) -> RelationshipEdge:
        """Create an edge with this exercise as base."""
        draft = create_edge(
            self.exercise_id,
            related_id,
            type,
            difficulty_change=difficulty_change,
            bidirectional=bidirectional,
            modification_details=modification_details,
        )
        created = await self.repository.create_edge(draft)
        self._edges.append(created)
        logger.info(
            "Relationship %s created: %s -> %s (%s)", created.id, created.base_id, created.related_id, created.type
        )
        return created

    async def replace(
        self,
        edge_id: str,
        type: RelationshipType | str,
        *,
        difficulty_change: int = 0,
        bidirectional: bool = False,
        modification_details: ModificationDetails | None = None,
    ) -> RelationshipEdge:
        """Full-replace update; the stored endpoints and orientation are kept."""
        current = self.get(edge_id)
        replacement = create_edge(
            current.base_id,
            current.related_id,
            type,
            difficulty_change=difficulty_change,
            bidirectional=bidirectional,
            modification_details=modification_details,
            edge_id=edge_id,
        )
        updated = await self.repository.update_edge(edge_id, replacement)
        self._edges = [updated if e.id == edge_id else e for e in self._edges]
        return updated

    async def remove(self, edge_id: str) -> None:
        self.get(edge_id)
        await self.repository.delete_edge(edge_id)
        self._edges = [e for e in self._edges if e.id != edge_id]
        logger.info("Relationship %s removed", edge_id)

    def directions(self) -> list[tuple[RelationshipEdge, EdgeDirection]]:
        return [(edge, resolve_direction(edge, self.exercise_id)) for edge in self._edges]

    def progression_path(self) -> ProgressionPath:
        return build_progression_path(self._edges, self.exercise_id)

    def available(self, candidate_ids: Iterable[str]) -> list[str]:
        return available_exercises(candidate_ids, self._edges, self.exercise_id)
