"""Commit in-memory blocks back into a note and persist it."""

from __future__ import annotations

import logging
import time
from dataclasses import replace

from ..adapters.content_serializer import serialize_blocks
from .model import Block, ChecklistBlock, ChecklistItem, Note, NoteId
from .normalize import normalize_blocks
from .ports import NoteRepository

LOGGER = logging.getLogger(__name__)


def now_millis() -> int:
    return int(time.time() * 1000)


def blocks_to_checklist_items(blocks: list[Block], note_id: NoteId) -> list[ChecklistItem]:
    """Itemize checklist blocks; ``order`` is the block's position."""
    return [
        ChecklistItem(note_id=note_id, text=b.content, checked=b.checked, order=idx)
        for idx, b in enumerate(blocks)
        if isinstance(b, ChecklistBlock)
    ]


def commit_blocks(
    note: Note | None,
    blocks: list[Block],
    repository: NoteRepository,
    title: str | None = None,
    color: int | None = None,
) -> Note | None:
    """
    Normalize, serialize and persist *blocks* as the content of *note*.

    Returns the stored note, or ``None`` when there is no note to commit to.
    """
    if note is None:
        return None

    normalized = normalize_blocks(blocks)
    updated = replace(
        note,
        title=note.title if title is None else title,
        color=note.color if color is None else color,
        content=serialize_blocks(normalized),
        checklist=blocks_to_checklist_items(normalized, note.id),
        updated_at=now_millis(),
    )
    LOGGER.debug(
        "notemark.commit id=%s blocks=%d checklist=%d",
        note.id,
        len(normalized),
        len(updated.checklist),
    )
    return repository.update_note(updated)
