import logging
from collections.abc import Iterable
from dataclasses import replace

from ..adapters.content_parser import parse_content
from ..adapters.content_serializer import serialize_blocks
from ..adapters.yaml_codec import note_from_meta
from .commit import blocks_to_checklist_items, now_millis
from .errors import NoteNotFoundError
from .model import Note, NoteId
from .normalize import normalize_blocks
from .ports import IdGenerator, NoteCodec, NoteRepository, StorageStrategy

LOGGER = logging.getLogger(__name__)


class Notebook(NoteRepository):
    """File-backed note repository."""

    def __init__(self, storage: StorageStrategy, codec: NoteCodec, idgen: IdGenerator):
        self.storage = storage
        self.codec = codec
        self.idgen = idgen

    def get_note(self, id: NoteId) -> Note | None:
        raw = self.storage.read_raw(id)
        if raw is None:
            return None
        meta, content = self.codec.decode_file(raw, id)
        return note_from_meta(id, meta, content)

    def get_notes(self) -> list[Note]:
        notes = [n for n in (self.get_note(nid) for nid in self.list_ids()) if n]
        # Pinned first, then most recently updated
        notes.sort(key=lambda n: (not n.is_pinned, -n.updated_at, n.id))
        return notes

    def create_note(
        self, title: str, content: str = "", folder_id: str | None = None
    ) -> Note:
        nid = self.idgen.new_id()
        while self.storage.read_raw(nid) is not None:
            nid = self.idgen.new_id()

        blocks = normalize_blocks(parse_content(content))
        stamp = now_millis()
        note = Note(
            id=nid,
            title=title,
            content=serialize_blocks(blocks),
            created_at=stamp,
            updated_at=stamp,
            folder_id=folder_id,
            checklist=blocks_to_checklist_items(blocks, nid),
        )
        self.put(note)
        LOGGER.info("notemark.notebook.create id=%s", nid)
        return note

    def update_note(self, note: Note) -> Note:
        if self.storage.read_raw(note.id) is None:
            raise NoteNotFoundError(note.id)
        if not note.updated_at:
            note = replace(note, updated_at=now_millis())
        self.put(note)
        LOGGER.debug("notemark.notebook.update id=%s", note.id)
        return note

    def delete_note(self, id: NoteId) -> None:
        if self.storage.read_raw(id) is None:
            raise NoteNotFoundError(id)
        self.storage.delete_raw(id)
        LOGGER.info("notemark.notebook.delete id=%s", id)

    def put(self, note: Note) -> None:
        self.storage.write_raw(note.id, self.codec.encode_file(note))

    def list_ids(self) -> Iterable[NoteId]:
        return self.storage.list_all_ids()
