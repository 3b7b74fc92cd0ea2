"""Exercise <-> equipment link schemas."""

from pydantic import BaseModel, Field

from catalog_console.core.enums import LinkListState
from catalog_console.schemas.base import CamelModel


class OrderedLink(CamelModel):
    """Equipment attached to an exercise, in display order."""

    id: str
    parent_id: str = Field(..., alias="exerciseId")
    child_id: str = Field(..., alias="equipmentId")
    is_required: bool = True
    setup_notes: str | None = None
    order: int = Field(0, ge=0)  # 0 only for links the catalog never ordered


class LinkDraft(CamelModel):
    """A link not yet stored by the catalog."""

    parent_id: str = Field(..., alias="exerciseId")
    child_id: str = Field(..., alias="equipmentId")
    is_required: bool = True
    setup_notes: str | None = None
    order: int = Field(..., ge=1)


class LinkUpdate(CamelModel):
    is_required: bool | None = None
    setup_notes: str | None = None
    order: int | None = Field(None, ge=1)


class LinkOrder(CamelModel):
    id: str
    order: int = Field(..., ge=1)


class LinkSummary(BaseModel):
    required: int = 0
    optional: int = 0
    total: int = 0


# ---- API payloads ----


class EquipmentLinkCreate(CamelModel):
    child_id: str = Field(..., min_length=1, alias="equipmentId")
    is_required: bool = True
    setup_notes: str | None = None


class SetupNotesUpdate(CamelModel):
    setup_notes: str | None = None


class LinkMove(CamelModel):
    source_index: int = Field(..., ge=0)
    target_index: int = Field(..., ge=0)


class ReorderRequest(CamelModel):
    moves: list[LinkMove] = Field(..., min_length=1)


class EquipmentLinksRead(CamelModel):
    state: LinkListState
    links: list[OrderedLink]
    summary: LinkSummary
