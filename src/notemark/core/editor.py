"""Pure checklist editing over a block sequence.

Every operation takes the current blocks, their editable projection and the
focus, and returns an :class:`EditResult`. Nothing is mutated in place;
callers replace the state they hold with the result. A no-op hands back the
caller's own ``blocks`` and ``field_values`` objects, so "nothing changed"
can be detected by identity.

The projection (one :class:`FieldValue` per block) is never patched; it is
rebuilt from the blocks after every change.
"""

from __future__ import annotations

from .model import (
    Block,
    ChecklistBlock,
    EditResult,
    FieldValue,
    FileBlock,
    ImageBlock,
    Selection,
    TextBlock,
    block_text,
    unhandled_block,
)


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


def sync_projection(blocks: list[Block]) -> list[FieldValue]:
    """Derive the per-block editable values from *blocks*."""
    values: list[FieldValue] = []
    for b in blocks:
        if isinstance(b, TextBlock):
            values.append(FieldValue(b.content))
        elif isinstance(b, ChecklistBlock):
            end = len(b.content)
            values.append(FieldValue(b.content, Selection(end, end)))
        elif isinstance(b, (ImageBlock, FileBlock)):
            values.append(FieldValue(""))
        else:
            raise unhandled_block(b)
    return values


def _result(blocks: list[Block], focused_index: int, cursor: int) -> EditResult:
    return EditResult(blocks, sync_projection(blocks), focused_index, cursor)


def insert_checklist_at_cursor(
    blocks: list[Block],
    field_values: list[FieldValue],
    focused_index: int,
    cursor_offset: int,
    locked: bool,
) -> EditResult:
    """Insert an empty checklist item where the cursor is.

    On a text block the line holding the cursor is split out: text before
    the line stays above the new item (a non-blank line stays with it),
    and the rest of the block follows as ``"\\n" + after``. Focus lands on
    the block right after the new checklist.

    On any other block a checklist and a ``"\\n"`` spacer are inserted after
    it and the new checklist takes focus.
    """
    if locked:
        return EditResult(blocks, field_values, focused_index, cursor_offset)

    if not blocks:
        return _result([ChecklistBlock("", False), TextBlock("")], 0, 0)

    idx = _clamp(focused_index, 0, len(blocks) - 1)
    focused = blocks[idx]

    if isinstance(focused, TextBlock):
        text = focused.content
        cursor = _clamp(cursor_offset, 0, len(text))
        line_start = text.rfind("\n", 0, cursor) + 1
        line_end = text.find("\n", cursor)
        if line_end == -1:
            line_end = len(text)

        current_line = text[line_start:line_end]
        if current_line.strip():
            before = text[:line_end]
        else:
            before = text[:line_start]
        after = text[line_end:]

        replacement: list[Block] = []
        if before:
            replacement.append(TextBlock(before))
        checklist_at = idx + len(replacement)
        replacement.append(ChecklistBlock("", False))
        replacement.append(TextBlock("\n" + after))

        new_blocks = blocks[:idx] + replacement + blocks[idx + 1 :]
        return _result(new_blocks, checklist_at + 1, 0)

    new_blocks = (
        blocks[: idx + 1]
        + [ChecklistBlock("", False), TextBlock("\n")]
        + blocks[idx + 1 :]
    )
    return _result(new_blocks, idx + 1, 0)


def delete_checklist_on_backspace(
    blocks: list[Block],
    field_values: list[FieldValue],
    checklist_index: int,
) -> EditResult:
    """Remove the checklist at *checklist_index* and focus the block above it."""
    if not blocks:
        return EditResult(blocks, field_values, checklist_index, 0)
    idx = _clamp(checklist_index, 0, len(blocks) - 1)
    if not isinstance(blocks[idx], ChecklistBlock):
        return EditResult(blocks, field_values, checklist_index, 0)

    new_blocks = blocks[:idx] + blocks[idx + 1 :]
    if not new_blocks:
        return _result([TextBlock("")], 0, 0)

    target = _clamp(idx - 1, 0, len(new_blocks) - 1)
    cursor = len(block_text(new_blocks[target]))
    return _result(new_blocks, target, cursor)


def enter_in_checklist(
    blocks: list[Block],
    field_values: list[FieldValue],
    checklist_index: int,
) -> EditResult:
    """Enter inside a checklist item opens a new empty item below it."""
    if not blocks:
        return EditResult(blocks, field_values, checklist_index, 0)
    idx = _clamp(checklist_index, 0, len(blocks) - 1)
    if not isinstance(blocks[idx], ChecklistBlock):
        return EditResult(blocks, field_values, checklist_index, 0)

    new_blocks = (
        blocks[: idx + 1]
        + [ChecklistBlock("", False), TextBlock("\n")]
        + blocks[idx + 1 :]
    )
    return _result(new_blocks, idx + 1, 0)


def update_block_text(
    blocks: list[Block],
    field_values: list[FieldValue],
    index: int,
    text: str,
) -> EditResult:
    if not blocks:
        return EditResult(blocks, field_values, index, 0)
    idx = _clamp(index, 0, len(blocks) - 1)
    b = blocks[idx]
    if isinstance(b, TextBlock):
        replaced: Block = TextBlock(text)
    elif isinstance(b, ChecklistBlock):
        replaced = ChecklistBlock(text, b.checked)
    elif isinstance(b, (ImageBlock, FileBlock)):
        return EditResult(blocks, field_values, index, 0)
    else:
        raise unhandled_block(b)

    new_blocks = blocks[:idx] + [replaced] + blocks[idx + 1 :]
    return _result(new_blocks, idx, len(text))


def toggle_checklist(
    blocks: list[Block],
    field_values: list[FieldValue],
    index: int,
    checked: bool,
) -> EditResult:
    if not blocks:
        return EditResult(blocks, field_values, index, 0)
    idx = _clamp(index, 0, len(blocks) - 1)
    b = blocks[idx]
    if not isinstance(b, ChecklistBlock):
        return EditResult(blocks, field_values, index, 0)

    new_blocks = blocks[:idx] + [ChecklistBlock(b.content, checked)] + blocks[idx + 1 :]
    return _result(new_blocks, idx, len(b.content))
