"""Instruction text <-> FormPoints.

Ingestion is deliberately permissive: anything that is not a recognised
section header or a line inside a section is dropped, and nothing here
raises. ``parse_instructions(format_instructions(fp)) == fp`` holds for
canonical points; the reverse direction is not stable (numbering and bullets
are rewritten).
"""

from __future__ import annotations

import re

from catalog_console.core.constants import FORM_SECTIONS, NUMBERED_FORM_SECTIONS
from catalog_console.schemas.form_points import FormPoints

# Leading "1. ", "- ", "• ", "* " (and runs like "1-." or "**")
_LIST_MARKER = re.compile(r"^[\d\-•*]+\.?\s*")


def _section_for(line: str) -> str | None:
    lowered = line.lower()
    for section in FORM_SECTIONS:
        if f"{section}:" in lowered:
            return section
    return None


def parse_instructions(text: str | None) -> FormPoints:
    """Split free-form instruction text into setup/execution/breathing/alignment."""
    sections: dict[str, list[str]] = {name: [] for name in FORM_SECTIONS}
    if not isinstance(text, str) or not text:
        return FormPoints(**sections)

    lines = [line.strip() for line in text.splitlines()]
    current: str | None = None
    for line in lines:
        if not line:
            continue
        header = _section_for(line)
        if header is not None:
            current = header
            continue
        if current is None:
            continue  # text before the first header
        cleaned = _LIST_MARKER.sub("", line, count=1).strip()
        if cleaned:
            sections[current].append(cleaned)
    return FormPoints(**sections)


def format_instructions(form_points: FormPoints | None) -> str:
    """Render FormPoints back to text, numbered for setup/execution, bulleted otherwise."""
    if form_points is None:
        return ""
    blocks: list[str] = []
    for section in FORM_SECTIONS:
        items = getattr(form_points, section) or []
        if not items:
            continue
        if section in NUMBERED_FORM_SECTIONS:
            body = [f"{i}. {item}" for i, item in enumerate(items, start=1)]
        else:
            body = [f"- {item}" for item in items]
        blocks.append("\n".join([f"{section.capitalize()}:", *body]))
    return "\n\n".join(blocks)
