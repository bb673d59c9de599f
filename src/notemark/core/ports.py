from typing import Any, Iterable, Protocol

from .model import Block, Note, NoteId


class StorageStrategy(Protocol):
    """
    Flat store: one directory, files named <id>.md
    """

    def read_raw(self, id: NoteId) -> str | None:
        pass

    def write_raw(self, id: NoteId, contents: str) -> None:
        pass

    def delete_raw(self, id: NoteId) -> None:
        pass

    def list_all_ids(self) -> Iterable[NoteId]:
        pass


class ContentParser(Protocol):
    """
    Flat stored content -> ordered blocks. MUST NOT raise on any input.
    """

    def parse(self, content: str) -> list[Block]:
        pass


class ContentSerializer(Protocol):
    def serialize(self, blocks: list[Block]) -> str:
        pass


class NoteCodec(Protocol):
    """
    Round-trip a whole note (metadata + flat content) to file text.
    """

    def decode_file(self, text: str, id: NoteId) -> tuple[dict[str, Any], str]:
        pass

    def encode_file(self, note: Note) -> str:
        pass


class IdGenerator(Protocol):
    def new_id(self) -> NoteId:
        pass


class NoteRepository(Protocol):
    """
    The persistence collaborator. The flat content string and the
    checklist side-list travel together on every write.
    """

    def get_notes(self) -> list[Note]:
        pass

    def get_note(self, id: NoteId) -> Note | None:
        pass

    def create_note(
        self, title: str, content: str = "", folder_id: str | None = None
    ) -> Note:
        pass

    def update_note(self, note: Note) -> Note:
        pass

    def delete_note(self, id: NoteId) -> None:
        pass
