"""One editing session over one note: pure edits plus debounced commits."""

from __future__ import annotations

import logging
import threading
from dataclasses import replace

from .adapters.content_parser import parse_content
from .autosave import AutosaveScheduler
from .core import editor
from .core.commit import commit_blocks
from .core.model import Block, EditResult, FieldValue, Note
from .core.ports import NoteRepository

LOGGER = logging.getLogger(__name__)


class EditSession:
    """Holds the live ``(blocks, field_values, focus, cursor)`` state of a note.

    Each mutator runs the matching pure operation from
    :mod:`notemark.core.editor`, replaces the held state with its result and,
    when something changed, schedules an autosave keyed by the note id.
    """

    def __init__(
        self,
        note: Note,
        repository: NoteRepository,
        scheduler: AutosaveScheduler,
        locked: bool = False,
    ):
        self.repository = repository
        self.scheduler = scheduler
        self.locked = locked
        self._note = note
        self._title = note.title
        self._lock = threading.RLock()
        blocks = parse_content(note.content)
        self._state = EditResult(blocks, editor.sync_projection(blocks), 0, 0)

    # State accessors

    @property
    def note(self) -> Note:
        return self._note

    @property
    def state(self) -> EditResult:
        return self._state

    @property
    def blocks(self) -> list[Block]:
        return self._state.blocks

    @property
    def field_values(self) -> list[FieldValue]:
        return self._state.field_values

    @property
    def title(self) -> str:
        return self._title

    # Mutators

    def insert_checklist(self) -> EditResult:
        s = self._state
        return self._apply(
            editor.insert_checklist_at_cursor(
                s.blocks,
                s.field_values,
                s.focused_index,
                s.focused_cursor_offset,
                self.locked,
            )
        )

    def backspace_checklist(self, index: int) -> EditResult:
        if self.locked:
            return self._state
        s = self._state
        return self._apply(
            editor.delete_checklist_on_backspace(s.blocks, s.field_values, index)
        )

    def enter_checklist(self, index: int) -> EditResult:
        if self.locked:
            return self._state
        s = self._state
        return self._apply(editor.enter_in_checklist(s.blocks, s.field_values, index))

    def set_text(self, index: int, text: str) -> EditResult:
        if self.locked:
            return self._state
        s = self._state
        return self._apply(editor.update_block_text(s.blocks, s.field_values, index, text))

    def set_checked(self, index: int, checked: bool) -> EditResult:
        if self.locked:
            return self._state
        s = self._state
        return self._apply(editor.toggle_checklist(s.blocks, s.field_values, index, checked))

    def set_title(self, title: str) -> None:
        if self.locked or title == self._title:
            return
        self._title = title
        self.schedule_save()

    def focus(self, index: int, offset: int) -> EditResult:
        """Move focus without touching content; never schedules a save."""
        with self._lock:
            s = self._state
            if not s.blocks:
                return s
            idx = max(0, min(index, len(s.blocks) - 1))
            limit = len(s.field_values[idx].text) if idx < len(s.field_values) else 0
            self._state = replace(
                s, focused_index=idx, focused_cursor_offset=max(0, min(offset, limit))
            )
            return self._state

    # Persistence

    def schedule_save(self) -> None:
        self.scheduler.schedule(self._note.id, self.commit)

    def commit(self) -> Note | None:
        with self._lock:
            blocks = self._state.blocks
            title = self._title
            note = self._note
        stored = commit_blocks(note, blocks, self.repository, title=title)
        if stored is not None:
            with self._lock:
                self._note = stored
        return stored

    def done(self) -> Note | None:
        """Commit immediately, dropping any pending autosave."""
        self.scheduler.cancel(self._note.id)
        if self.locked:
            return self._note
        return self.commit()

    def _apply(self, result: EditResult) -> EditResult:
        with self._lock:
            before = self._state
            self._state = result
        if result.blocks is not before.blocks:
            self.schedule_save()
        else:
            LOGGER.debug("notemark.session.noop id=%s", self._note.id)
        return result
