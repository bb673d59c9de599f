from __future__ import annotations
from dataclasses import dataclass, field
from typing import Union

NoteId = str

DEFAULT_COLOR = 0xFF4B63FF


@dataclass(frozen=True)
class TextBlock:
    content: str


@dataclass(frozen=True)
class ChecklistBlock:
    content: str
    checked: bool = False


@dataclass(frozen=True)
class ImageBlock:
    uri: str


@dataclass(frozen=True)
class FileBlock:
    uri: str
    filename: str
    size_bytes: int = 0

    def __post_init__(self) -> None:
        if self.size_bytes < 0:
            raise ValueError(f"size_bytes must be >= 0, got {self.size_bytes}")


Block = Union[TextBlock, ChecklistBlock, ImageBlock, FileBlock]


def unhandled_block(block: object) -> TypeError:
    """Error for a block variant a dispatch site does not know about."""
    return TypeError(f"unhandled block variant: {type(block).__name__}")


def block_text(block: Block) -> str:
    """Editable text of a block; attachments have none."""
    if isinstance(block, (TextBlock, ChecklistBlock)):
        return block.content
    if isinstance(block, (ImageBlock, FileBlock)):
        return ""
    raise unhandled_block(block)


@dataclass(frozen=True)
class Selection:
    start: int
    end: int


@dataclass(frozen=True)
class FieldValue:
    text: str
    selection: Selection | None = None  # None: no forced selection


@dataclass(frozen=True)
class EditResult:
    blocks: list[Block]
    field_values: list[FieldValue]
    focused_index: int
    focused_cursor_offset: int


@dataclass(frozen=True)
class ChecklistItem:
    note_id: NoteId
    text: str
    checked: bool = False
    order: int = 0  # index of the checklist block in the normalized sequence


@dataclass
class Note:
    id: NoteId
    title: str = ""
    content: str = ""
    created_at: int = 0  # epoch millis
    updated_at: int = 0
    color: int = DEFAULT_COLOR
    is_pinned: bool = False
    folder_id: str | None = None
    checklist: list[ChecklistItem] = field(default_factory=list)
