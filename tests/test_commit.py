"""Tests for the checklist side-list and the commit pipeline."""

from dataclasses import replace

import pytest

from notemark.core.commit import blocks_to_checklist_items, commit_blocks
from notemark.core.errors import NoteNotFoundError
from notemark.core.markers import encode
from notemark.core.model import ChecklistBlock, ChecklistItem, ImageBlock, Note, TextBlock


class MemoryRepository:
    """Minimal in-memory NoteRepository for pipeline tests."""

    def __init__(self, *notes):
        self.notes = {n.id: n for n in notes}
        self.updates = []

    def get_notes(self):
        return list(self.notes.values())

    def get_note(self, id):
        return self.notes.get(id)

    def create_note(self, title, content="", folder_id=None):
        raise NotImplementedError

    def update_note(self, note):
        if note.id not in self.notes:
            raise NoteNotFoundError(note.id)
        self.notes[note.id] = note
        self.updates.append(note)
        return note

    def delete_note(self, id):
        del self.notes[id]


def test_checklist_items_use_block_positions():
    """Test side-list items carry the block index as order."""
    blocks = [
        TextBlock("list:\n"),
        ChecklistBlock("a", True),
        ImageBlock("i"),
        ChecklistBlock("b", False),
    ]
    assert blocks_to_checklist_items(blocks, "n1") == [
        ChecklistItem(note_id="n1", text="a", checked=True, order=1),
        ChecklistItem(note_id="n1", text="b", checked=False, order=3),
    ]


def test_checklist_items_empty_without_checklists():
    """Test notes without checklists have an empty side-list."""
    assert blocks_to_checklist_items([TextBlock("x")], "n1") == []


def test_commit_without_note_returns_none():
    """Test there is nothing to commit without a note."""
    repo = MemoryRepository()
    assert commit_blocks(None, [TextBlock("x")], repo) is None
    assert repo.updates == []


def test_commit_normalizes_and_persists():
    """Test the stored note has normalized content and a matching side-list."""
    note = Note(id="n1", title="Old", content="", updated_at=1)
    repo = MemoryRepository(note)
    embedded = f"[[CHECKLIST:{encode('milk')}:1]]"
    blocks = [TextBlock("Shopping\n" + embedded), TextBlock(""), ChecklistBlock("eggs")]

    stored = commit_blocks(note, blocks, repo, title="Groceries", color=0xFF00FF00)

    assert stored is repo.notes["n1"]
    assert stored.title == "Groceries"
    assert stored.color == 0xFF00FF00
    assert stored.content == (
        "Shopping\n" + embedded + f"[[CHECKLIST:{encode('eggs')}:0]]"
    )
    assert stored.checklist == [
        ChecklistItem("n1", "milk", True, 1),
        ChecklistItem("n1", "eggs", False, 2),
    ]
    assert stored.updated_at > 1


def test_commit_keeps_title_and_color_by_default():
    """Test omitted title/color keep the note's values."""
    note = Note(id="n1", title="Keep", color=42)
    repo = MemoryRepository(note)
    stored = commit_blocks(note, [TextBlock("x")], repo)
    assert stored.title == "Keep"
    assert stored.color == 42
    assert stored.content == "x"


def test_commit_does_not_mutate_note():
    """Test the caller's note object is left alone."""
    note = Note(id="n1", content="before")
    snapshot = replace(note)
    commit_blocks(note, [TextBlock("after")], MemoryRepository(note))
    assert note == snapshot


def test_commit_propagates_repository_errors():
    """Test persistence errors reach the caller."""
    note = Note(id="missing")
    with pytest.raises(NoteNotFoundError):
        commit_blocks(note, [TextBlock("x")], MemoryRepository())
