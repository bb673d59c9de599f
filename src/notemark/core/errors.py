"""Exceptions raised outside the pure content core."""


class NotemarkError(Exception):
    """Base class for notemark errors."""


class NoteNotFoundError(NotemarkError, KeyError):
    def __init__(self, note_id: str):
        super().__init__(note_id)
        self.note_id = note_id

    def __str__(self) -> str:
        return f"Note {self.note_id} not found"
