"""Exercise relationships: list, create, replace, delete, progression path."""

from fastapi import APIRouter, Depends

from catalog_console.api.deps import get_repository
from catalog_console.clients.base import CatalogRepository
from catalog_console.schemas.relationship import (
    ProgressionPath,
    RelatedExerciseCandidates,
    RelationshipCreate,
    RelationshipRead,
    RelationshipReplace,
)
from catalog_console.services.exercise_relationships import ExerciseRelationships
from catalog_console.services.relationships import resolve_direction

router = APIRouter()


async def _loaded(repository: CatalogRepository, exercise_id: str) -> ExerciseRelationships:
    session = ExerciseRelationships(repository, exercise_id)
    await session.load()
    return session


@router.get("/{exercise_id}/relationships", response_model=list[RelationshipRead])
async def list_relationships(
    exercise_id: str,
    repository: CatalogRepository = Depends(get_repository),
):
    """All edges touching the exercise, each with its direction from this exercise."""
    session = await _loaded(repository, exercise_id)
    return [RelationshipRead(edge=edge, direction=direction) for edge, direction in session.directions()]


@router.post("/{exercise_id}/relationships", response_model=RelationshipRead, status_code=201)
async def create_relationship(
    exercise_id: str,
    payload: RelationshipCreate,
    repository: CatalogRepository = Depends(get_repository),
):
    """Create an edge with this exercise as base (validated before it is sent)."""
    session = ExerciseRelationships(repository, exercise_id)
    edge = await session.add(
        payload.related_id,
        payload.type,
        difficulty_change=payload.difficulty_change,
        bidirectional=payload.bidirectional,
        modification_details=payload.modification_details,
    )
    return RelationshipRead(edge=edge, direction=resolve_direction(edge, exercise_id))


@router.put("/{exercise_id}/relationships/{edge_id}", response_model=RelationshipRead)
async def replace_relationship(
    exercise_id: str,
    edge_id: str,
    payload: RelationshipReplace,
    repository: CatalogRepository = Depends(get_repository),
):
    """Full replace of type, difficulty, flags and notes; endpoints are kept."""
    session = await _loaded(repository, exercise_id)
    edge = await session.replace(
        edge_id,
        payload.type,
        difficulty_change=payload.difficulty_change,
        bidirectional=payload.bidirectional,
        modification_details=payload.modification_details,
    )
    return RelationshipRead(edge=edge, direction=resolve_direction(edge, exercise_id))


@router.delete("/{exercise_id}/relationships/{edge_id}", status_code=204)
async def delete_relationship(
    exercise_id: str,
    edge_id: str,
    repository: CatalogRepository = Depends(get_repository),
):
    """Delete an edge (no cascade)."""
    session = await _loaded(repository, exercise_id)
    await session.remove(edge_id)
    return None


@router.get("/{exercise_id}/progression-path", response_model=ProgressionPath)
async def get_progression_path(
    exercise_id: str,
    repository: CatalogRepository = Depends(get_repository),
):
    """Easier and harder progressions, grouped by difficulty step."""
    session = await _loaded(repository, exercise_id)
    return session.progression_path()


@router.post("/{exercise_id}/relationships/available", response_model=RelatedExerciseCandidates)
async def available_related_exercises(
    exercise_id: str,
    payload: RelatedExerciseCandidates,
    repository: CatalogRepository = Depends(get_repository),
):
    """Filter candidate exercises down to those not yet related to this one."""
    session = await _loaded(repository, exercise_id)
    return RelatedExerciseCandidates(candidate_ids=session.available(payload.candidate_ids))
