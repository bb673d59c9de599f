"""notemark: rich note content as a flat, marker-annotated string."""

from .adapters.content_parser import parse_content
from .adapters.content_serializer import serialize_blocks
from .core.editor import (
    delete_checklist_on_backspace,
    enter_in_checklist,
    insert_checklist_at_cursor,
    sync_projection,
)
from .core.markers import decode, encode
from .core.model import (
    Block,
    ChecklistBlock,
    ChecklistItem,
    EditResult,
    FieldValue,
    FileBlock,
    ImageBlock,
    Note,
    Selection,
    TextBlock,
)
from .core.normalize import normalize_blocks

__version__ = "0.1.0"

__all__ = [
    "Block",
    "TextBlock",
    "ChecklistBlock",
    "ImageBlock",
    "FileBlock",
    "FieldValue",
    "Selection",
    "EditResult",
    "ChecklistItem",
    "Note",
    "encode",
    "decode",
    "parse_content",
    "serialize_blocks",
    "normalize_blocks",
    "insert_checklist_at_cursor",
    "delete_checklist_on_backspace",
    "enter_in_checklist",
    "sync_projection",
]
