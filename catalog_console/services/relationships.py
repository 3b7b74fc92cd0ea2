"""Relationship edges: construction and direction as seen from a focal exercise."""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import ValidationError as SchemaValidationError

from catalog_console.core.enums import DirectionIndicator, RelationshipType
from catalog_console.core.exceptions import ValidationError
from catalog_console.schemas.relationship import (
    EDGE_CLASSES,
    EdgeDirection,
    ModificationDetails,
    RelationshipEdge,
)


def create_edge(
    base_id: str,
    related_id: str,
    type: RelationshipType | str,
    *,
    difficulty_change: int = 0,
    bidirectional: bool = False,
    modification_details: ModificationDetails | None = None,
    edge_id: str | None = None,
) -> RelationshipEdge:
    """
    Build a validated edge base -> related.

    Fields that do not belong to the type are normalized away: non-progression
    edges get difficulty 0, progression edges are never bidirectional and carry
    no modification notes. Progression difficulty is clamped to [-3, 3].
    Raises ValidationError; nothing is sent anywhere.
    """
    if not base_id or not related_id:
        raise ValidationError("Both exercises must be selected")
    if base_id == related_id:
        raise ValidationError("An exercise cannot be related to itself")
    try:
        rel_type = type if isinstance(type, RelationshipType) else RelationshipType(str(type).lower())
    except ValueError:
        raise ValidationError(f"Unknown relationship type: {type!r}") from None
    if isinstance(difficulty_change, bool) or not isinstance(difficulty_change, int):
        raise ValidationError("difficulty_change must be an integer")

    fields: dict = {"id": edge_id, "base_id": base_id, "related_id": related_id}
    if rel_type is RelationshipType.PROGRESSION:
        fields["difficulty_change"] = difficulty_change
    else:
        fields["bidirectional"] = bool(bidirectional)
        fields["modification_details"] = modification_details
    try:
        return EDGE_CLASSES[rel_type](**fields)
    except SchemaValidationError as e:
        raise ValidationError(str(e)) from e


def resolve_direction(edge: RelationshipEdge, focal_id: str) -> EdgeDirection:
    """Which exercise is on the other side, and whether it is harder than the focal one."""
    other_id = edge.related_id if edge.base_id == focal_id else edge.base_id
    is_harder: bool | None = None
    if edge.type == RelationshipType.PROGRESSION:
        # difficulty_change is stored from the base's point of view
        is_harder = (edge.base_id == focal_id and edge.difficulty_change > 0) or (
            edge.related_id == focal_id and edge.difficulty_change < 0
        )
    return EdgeDirection(
        other_id=other_id,
        is_harder=is_harder,
        indicator=direction_indicator(edge, focal_id),
    )


def direction_indicator(edge: RelationshipEdge, focal_id: str) -> DirectionIndicator:
    # Variations always display as two-way, whatever the stored flag says
    if edge.bidirectional or edge.type == RelationshipType.VARIATION:
        return DirectionIndicator.BOTH
    if edge.base_id == focal_id:
        return DirectionIndicator.OUTGOING
    return DirectionIndicator.INCOMING


def group_by_type(edges: Iterable[RelationshipEdge]) -> dict[RelationshipType, list[RelationshipEdge]]:
    grouped: dict[RelationshipType, list[RelationshipEdge]] = {t: [] for t in RelationshipType}
    for edge in edges:
        grouped[RelationshipType(edge.type)].append(edge)
    return grouped


def available_exercises(
    candidate_ids: Iterable[str], edges: Iterable[RelationshipEdge], focal_id: str
) -> list[str]:
    """Candidates that are neither the focal exercise nor already related to it."""
    taken = {focal_id}
    for edge in edges:
        if edge.touches(focal_id):
            taken.add(resolve_direction(edge, focal_id).other_id)
    return [c for c in candidate_ids if c not in taken]
