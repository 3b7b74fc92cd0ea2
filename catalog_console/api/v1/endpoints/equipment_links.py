"""Exercise equipment links: ordered list with explicit order commit."""

from fastapi import APIRouter, Depends

from catalog_console.api.deps import get_repository
from catalog_console.clients.base import CatalogRepository
from catalog_console.schemas.equipment_link import (
    EquipmentLinkCreate,
    EquipmentLinksRead,
    OrderedLink,
    ReorderRequest,
    SetupNotesUpdate,
)
from catalog_console.services.ordered_links import OrderedLinkList

router = APIRouter()


async def _loaded(repository: CatalogRepository, exercise_id: str) -> OrderedLinkList:
    link_list = OrderedLinkList(repository, exercise_id)
    await link_list.load()
    return link_list


def _read(link_list: OrderedLinkList) -> EquipmentLinksRead:
    return EquipmentLinksRead(state=link_list.state, links=link_list.links, summary=link_list.summary)


@router.get("/{exercise_id}/equipment", response_model=EquipmentLinksRead)
async def list_equipment(
    exercise_id: str,
    repository: CatalogRepository = Depends(get_repository),
):
    """Equipment links in display order, with required/optional counts."""
    return _read(await _loaded(repository, exercise_id))


@router.post("/{exercise_id}/equipment", response_model=OrderedLink, status_code=201)
async def add_equipment(
    exercise_id: str,
    payload: EquipmentLinkCreate,
    repository: CatalogRepository = Depends(get_repository),
):
    """Attach equipment at the end of the list (409 if already attached)."""
    link_list = await _loaded(repository, exercise_id)
    return await link_list.add(payload.child_id, is_required=payload.is_required, setup_notes=payload.setup_notes)


@router.patch("/{exercise_id}/equipment/{link_id}", response_model=OrderedLink)
async def update_setup_notes(
    exercise_id: str,
    link_id: str,
    payload: SetupNotesUpdate,
    repository: CatalogRepository = Depends(get_repository),
):
    """Edit setup notes of one link."""
    link_list = await _loaded(repository, exercise_id)
    return await link_list.update_setup_notes(link_id, payload.setup_notes)


@router.post("/{exercise_id}/equipment/{link_id}/toggle-required", response_model=EquipmentLinksRead)
async def toggle_required(
    exercise_id: str,
    link_id: str,
    repository: CatalogRepository = Depends(get_repository),
):
    """Flip required/optional; returns the list so counts stay in sync."""
    link_list = await _loaded(repository, exercise_id)
    await link_list.toggle_required(link_id)
    return _read(link_list)


@router.delete("/{exercise_id}/equipment/{link_id}", status_code=204)
async def remove_equipment(
    exercise_id: str,
    link_id: str,
    repository: CatalogRepository = Depends(get_repository),
):
    """Detach equipment (remaining links are not renumbered)."""
    link_list = await _loaded(repository, exercise_id)
    await link_list.remove(link_id)
    return None


@router.put("/{exercise_id}/equipment/order", response_model=EquipmentLinksRead)
async def reorder_equipment(
    exercise_id: str,
    payload: ReorderRequest,
    repository: CatalogRepository = Depends(get_repository),
):
    """Apply moves in the given order, then commit the whole order in one batch."""
    link_list = await _loaded(repository, exercise_id)
    for move in payload.moves:
        link_list.move(move.source_index, move.target_index)
    if link_list.is_dirty:
        await link_list.commit()
    return _read(link_list)
