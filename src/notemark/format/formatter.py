"""Main formatter driver for stored notes."""

from dataclasses import dataclass, replace

from ..adapters.content_parser import parse_content
from ..adapters.content_serializer import serialize_blocks
from ..core.commit import blocks_to_checklist_items
from ..core.model import Note
from ..core.normalize import normalize_blocks


@dataclass
class FormatResult:
    """Result of formatting a note."""

    note_id: str
    changed: bool
    changes: list[str]  # "content" and/or "checklist"
    original: Note
    formatted: Note


def format_content(content: str) -> str:
    """Parse, normalize and re-serialize a content string."""
    return serialize_blocks(normalize_blocks(parse_content(content)))


def format_note(note: Note) -> FormatResult:
    """Normalize a note's content and rebuild its checklist side-list.

    Args:
        note: The note as stored

    Returns:
        FormatResult with the formatted note and what changed
    """
    blocks = normalize_blocks(parse_content(note.content))
    content = serialize_blocks(blocks)
    checklist = blocks_to_checklist_items(blocks, note.id)

    changes = []
    if content != note.content:
        changes.append("content")
    if checklist != note.checklist:
        changes.append("checklist")

    formatted = replace(note, content=content, checklist=checklist) if changes else note
    return FormatResult(
        note_id=note.id,
        changed=bool(changes),
        changes=changes,
        original=note,
        formatted=formatted,
    )
