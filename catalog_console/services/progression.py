"""Progression path: easier/harder exercises around one focal exercise."""

from __future__ import annotations

from collections.abc import Iterable

from catalog_console.core.enums import RelationshipType
from catalog_console.schemas.relationship import (
    ProgressionEdge,
    ProgressionGroup,
    ProgressionPath,
    RelationshipEdge,
)
from catalog_console.services.relationships import resolve_direction


def group_by_magnitude(edges: Iterable[ProgressionEdge], easier: bool) -> list[ProgressionGroup]:
    """
    Bucket edges by abs(difficulty_change).

    Easier groups run 1, 2, 3 and harder groups 3, 2, 1, so that when the two
    buckets are drawn on either side of the focal exercise the nearest steps
    sit next to it. Order inside a group is the input order.
    """
    groups: dict[int, list[ProgressionEdge]] = {}
    for edge in edges:
        if edge.magnitude == 0:
            continue
        groups.setdefault(edge.magnitude, []).append(edge)
    return [
        ProgressionGroup(magnitude=magnitude, edges=groups[magnitude])
        for magnitude in sorted(groups, reverse=not easier)
    ]


def build_progression_path(edges: Iterable[RelationshipEdge], focal_id: str) -> ProgressionPath:
    """Split the focal exercise's progression edges into easier and harder groups."""
    easier: list[ProgressionEdge] = []
    harder: list[ProgressionEdge] = []
    for edge in edges:
        if edge.type != RelationshipType.PROGRESSION or not edge.touches(focal_id):
            continue
        if edge.difficulty_change == 0:
            continue  # not an easier or harder step
        if resolve_direction(edge, focal_id).is_harder:
            harder.append(edge)
        else:
            easier.append(edge)
    return ProgressionPath(
        easier=group_by_magnitude(easier, easier=True),
        harder=group_by_magnitude(harder, easier=False),
    )
