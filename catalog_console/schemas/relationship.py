"""Exercise relationship schemas.

An edge is stored once, oriented base -> related. The three relationship
types carry different fields, so the edge is a union tagged on
``relationshipType``: progression edges own a difficulty change and are never
bidirectional, variation/alternative edges own the bidirectional flag and the
modification notes and always report a difficulty change of 0.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter, computed_field, field_validator

from catalog_console.core.constants import MAX_DIFFICULTY_CHANGE, MIN_DIFFICULTY_CHANGE
from catalog_console.core.enums import DirectionIndicator, RelationshipType
from catalog_console.schemas.base import CamelModel


class ModificationDetails(CamelModel):
    setup_changes: str = ""
    technique_changes: str = ""
    target_muscle_impact: str = ""


class _EdgeBase(CamelModel):
    id: str | None = None  # None until the catalog has stored it
    base_id: str = Field(..., min_length=1, alias="baseExerciseId")
    related_id: str = Field(..., min_length=1, alias="relatedExerciseId")

    def touches(self, exercise_id: str) -> bool:
        return exercise_id in (self.base_id, self.related_id)


class ProgressionEdge(_EdgeBase):
    """Related exercise is ``difficulty_change`` levels harder than base."""

    type: Literal["progression"] = Field("progression", alias="relationshipType")
    difficulty_change: int = Field(0, alias="difficultyChange")

    @field_validator("difficulty_change")
    @classmethod
    def clamp_difficulty(cls, v: int) -> int:
        return max(MIN_DIFFICULTY_CHANGE, min(MAX_DIFFICULTY_CHANGE, v))

    @computed_field(alias="bidirectional")
    @property
    def bidirectional(self) -> bool:
        return False

    @property
    def magnitude(self) -> int:
        return abs(self.difficulty_change)


class _SymmetricEdgeBase(_EdgeBase):
    bidirectional: bool = False
    modification_details: ModificationDetails | None = None

    @computed_field(alias="difficultyChange")
    @property
    def difficulty_change(self) -> int:
        return 0


class VariationEdge(_SymmetricEdgeBase):
    type: Literal["variation"] = Field("variation", alias="relationshipType")


class AlternativeEdge(_SymmetricEdgeBase):
    type: Literal["alternative"] = Field("alternative", alias="relationshipType")


RelationshipEdge = Annotated[
    Union[ProgressionEdge, VariationEdge, AlternativeEdge],
    Field(discriminator="type"),
]

edge_adapter: TypeAdapter[RelationshipEdge] = TypeAdapter(RelationshipEdge)
edge_list_adapter: TypeAdapter[list[RelationshipEdge]] = TypeAdapter(list[RelationshipEdge])

EDGE_CLASSES: dict[RelationshipType, type[_EdgeBase]] = {
    RelationshipType.PROGRESSION: ProgressionEdge,
    RelationshipType.VARIATION: VariationEdge,
    RelationshipType.ALTERNATIVE: AlternativeEdge,
}


class EdgeDirection(CamelModel):
    """How an edge looks from one focal exercise."""

    other_id: str
    is_harder: bool | None = None  # None for non-progression edges
    indicator: DirectionIndicator


# ---- API payloads ----


class RelationshipCreate(CamelModel):
    related_id: str = Field(..., min_length=1, alias="relatedExerciseId")
    type: RelationshipType = Field(..., alias="relationshipType")
    difficulty_change: int = 0
    bidirectional: bool = False
    modification_details: ModificationDetails | None = None


class RelationshipReplace(CamelModel):
    """Full replace: type, magnitude, flags and notes travel together."""

    type: RelationshipType = Field(..., alias="relationshipType")
    difficulty_change: int = 0
    bidirectional: bool = False
    modification_details: ModificationDetails | None = None


class RelationshipRead(CamelModel):
    edge: RelationshipEdge
    direction: EdgeDirection


class ProgressionGroup(CamelModel):
    magnitude: int = Field(..., ge=1, le=MAX_DIFFICULTY_CHANGE)
    edges: list[ProgressionEdge]


class ProgressionPath(CamelModel):
    easier: list[ProgressionGroup] = Field(default_factory=list)
    harder: list[ProgressionGroup] = Field(default_factory=list)


class RelatedExerciseCandidates(BaseModel):
    candidate_ids: list[str] = Field(default_factory=list)
