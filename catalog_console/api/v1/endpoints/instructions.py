"""Instruction text <-> structured form points (pure logic, no upstream calls)."""

from fastapi import APIRouter

from catalog_console.schemas.form_points import FormPoints, InstructionsText
from catalog_console.services.form_points import format_instructions, parse_instructions

router = APIRouter()


@router.post("/parse", response_model=FormPoints)
async def parse(payload: InstructionsText):
    """Split free-form instructions into setup / execution / breathing / alignment."""
    return parse_instructions(payload.text)


@router.post("/format", response_model=InstructionsText)
async def format_(payload: FormPoints):
    """Render form points back to editable text."""
    return InstructionsText(text=format_instructions(payload))
