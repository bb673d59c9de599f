import io
import re
from typing import Any

import yaml

from ..core.model import DEFAULT_COLOR, ChecklistItem, Note
from ..core.ports import NoteCodec

# Strict delimiters: the body after the closing fence is note content and
# must come back byte for byte, leading newlines included
_FM = re.compile(r"\A---\r?\n(.*?)\r?\n---\r?\n", re.DOTALL)


class YamlFrontmatter:
    def decode(self, text: str) -> tuple[dict[str, Any], str]:
        m = _FM.match(text)
        if not m:
            return {}, text
        fm = yaml.safe_load(io.StringIO(m.group(1))) or {}
        if not isinstance(fm, dict):
            fm = {}
        body = text[m.end() :]
        return (fm, body)

    def encode(self, meta: dict[str, Any]) -> str:
        if not meta:
            return ""
        buf = io.StringIO()
        yaml.safe_dump(meta, buf, sort_keys=False, allow_unicode=True)
        return f"---\n{buf.getvalue()}---\n"


def _checklist_from_meta(raw: Any, note_id: str) -> list[ChecklistItem]:
    items: list[ChecklistItem] = []
    if not isinstance(raw, list):
        return items
    for entry in raw:
        if not isinstance(entry, dict):
            continue
        items.append(
            ChecklistItem(
                note_id=note_id,
                text=str(entry.get("text", "")),
                checked=bool(entry.get("checked", False)),
                order=int(entry.get("order", 0)),
            )
        )
    return items


def note_from_meta(id: str, meta: dict[str, Any], content: str) -> Note:
    """Build a :class:`Note` from decoded frontmatter; missing keys get defaults."""
    folder = meta.get("folder")
    return Note(
        id=id,
        title=str(meta.get("title") or ""),
        content=content,
        created_at=int(meta.get("created") or 0),
        updated_at=int(meta.get("updated") or 0),
        color=int(meta.get("color", DEFAULT_COLOR)),
        is_pinned=bool(meta.get("pinned", False)),
        folder_id=None if folder is None else str(folder),
        checklist=_checklist_from_meta(meta.get("checklist"), id),
    )


class YamlNoteCodec(NoteCodec):
    def __init__(self, fm: YamlFrontmatter | None = None):
        self.fm = fm or YamlFrontmatter()

    def decode_file(self, text: str, id: str) -> tuple[dict[str, Any], str]:
        return self.fm.decode(text)

    def decode_note(self, text: str, id: str) -> Note:
        meta, body = self.decode_file(text, id)
        return note_from_meta(id, meta, body)

    def encode_file(self, note: Note) -> str:
        # Filename stays the source of truth for the id; it is mirrored here
        meta: dict[str, Any] = {
            "id": note.id,
            "title": note.title,
            "color": note.color,
            "pinned": note.is_pinned,
            "folder": note.folder_id,
            "created": note.created_at,
            "updated": note.updated_at,
            "checklist": [
                {"text": item.text, "checked": item.checked, "order": item.order}
                for item in note.checklist
            ],
        }
        return self.fm.encode(meta) + note.content
