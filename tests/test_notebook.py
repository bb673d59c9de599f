"""Tests for the file-backed note repository."""

import tempfile
from dataclasses import replace
from pathlib import Path

import pytest
import yaml

from notemark.adapters.fs_storage import FsStorage
from notemark.adapters.idgen import HexId
from notemark.adapters.yaml_codec import YamlFrontmatter, YamlNoteCodec
from notemark.core.errors import NoteNotFoundError
from notemark.core.markers import encode
from notemark.core.model import DEFAULT_COLOR, ChecklistItem, Note
from notemark.core.notebook import Notebook


@pytest.fixture
def temp_notebook():
    """Create a notebook over a temporary store."""
    with tempfile.TemporaryDirectory() as tmpdir:
        store_path = Path(tmpdir) / "notes"
        notebook = Notebook(FsStorage(store_path), YamlNoteCodec(YamlFrontmatter()), HexId())
        yield notebook, store_path


def test_create_and_get(temp_notebook):
    """Test creating a note and reading it back."""
    notebook, store_path = temp_notebook

    note = notebook.create_note("Groceries", "buy:\n", folder_id="f1")

    assert (store_path / f"{note.id}.md").exists()
    loaded = notebook.get_note(note.id)
    assert loaded == note
    assert loaded.title == "Groceries"
    assert loaded.content == "buy:\n"
    assert loaded.folder_id == "f1"
    assert loaded.color == DEFAULT_COLOR
    assert loaded.created_at == loaded.updated_at > 0


def test_create_normalizes_content(temp_notebook):
    """Test created notes store normalized content and a side-list."""
    notebook, _ = temp_notebook
    marker = f"[[CHECKLIST:{encode('a')}:1]]"

    note = notebook.create_note("t", marker)

    assert note.content == marker
    assert note.checklist == [ChecklistItem(note.id, "a", True, 0)]


def test_file_layout(temp_notebook):
    """Test the on-disk format is YAML frontmatter plus verbatim content."""
    notebook, store_path = temp_notebook
    note = notebook.create_note("Title", "\n\nbody [[IMAGE:YQ==]]")

    raw = (store_path / f"{note.id}.md").read_text(encoding="utf-8")
    assert raw.startswith("---\n")
    head, body = raw[4:].split("\n---\n", 1)
    meta = yaml.safe_load(head)
    assert meta["id"] == note.id
    assert meta["title"] == "Title"
    assert meta["checklist"] == []
    assert body == "\n\nbody [[IMAGE:YQ==]]"


def test_content_round_trips_exactly(temp_notebook):
    """Test leading newlines and CRLF survive storage."""
    notebook, _ = temp_notebook
    note = notebook.create_note("t", "")
    content = "\n---\nnot frontmatter\r\nline"
    notebook.update_note(replace(note, content=content))
    assert notebook.get_note(note.id).content == content


def test_update_note(temp_notebook):
    """Test updating a stored note."""
    notebook, _ = temp_notebook
    note = notebook.create_note("a", "x")

    updated = replace(note, title="b", is_pinned=True, updated_at=note.updated_at + 5)
    assert notebook.update_note(updated) == updated
    assert notebook.get_note(note.id) == updated


def test_update_unknown_note_raises(temp_notebook):
    """Test updating a missing note fails."""
    notebook, _ = temp_notebook
    with pytest.raises(NoteNotFoundError):
        notebook.update_note(Note(id="nope"))


def test_delete_note(temp_notebook):
    """Test deleting a note."""
    notebook, store_path = temp_notebook
    note = notebook.create_note("a")

    notebook.delete_note(note.id)

    assert notebook.get_note(note.id) is None
    assert not (store_path / f"{note.id}.md").exists()
    with pytest.raises(NoteNotFoundError):
        notebook.delete_note(note.id)


def test_get_notes_order(temp_notebook):
    """Test pinned notes first, then most recently updated."""
    notebook, _ = temp_notebook
    old = notebook.create_note("old")
    new = notebook.create_note("new")
    pinned = notebook.create_note("pinned")
    notebook.update_note(replace(old, updated_at=100))
    notebook.update_note(replace(new, updated_at=200))
    notebook.update_note(replace(pinned, updated_at=1, is_pinned=True))

    assert [n.title for n in notebook.get_notes()] == ["pinned", "new", "old"]


def test_get_notes_empty_store(temp_notebook):
    """Test a missing store directory lists nothing."""
    notebook, _ = temp_notebook
    assert notebook.get_notes() == []


def test_hand_written_file_defaults(temp_notebook):
    """Test files without full metadata still load."""
    notebook, store_path = temp_notebook
    store_path.mkdir(parents=True)
    (store_path / "manual.md").write_text("plain body, no frontmatter\n", encoding="utf-8")

    note = notebook.get_note("manual")
    assert note.title == ""
    assert note.content == "plain body, no frontmatter\n"
    assert note.checklist == []
    assert note.is_pinned is False


def test_tmp_files_are_not_listed(temp_notebook):
    """Test swap files from atomic writes are ignored."""
    notebook, store_path = temp_notebook
    note = notebook.create_note("a")
    (store_path / f".{note.id}.md.tmp").write_text("junk", encoding="utf-8")
    assert list(notebook.list_ids()) == [note.id]


def test_hex_id_length():
    """Test id length follows the configured byte count."""
    assert len(HexId(nbytes=6).new_id()) == 12
    with pytest.raises(ValueError):
        HexId(nbytes=0)
