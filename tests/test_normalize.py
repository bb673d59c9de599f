"""Tests for block normalization."""

import pytest

from notemark.core.markers import encode
from notemark.core.model import ChecklistBlock, FileBlock, ImageBlock, TextBlock
from notemark.core.normalize import normalize_blocks


def _marker(text, checked=False):
    return f"[[CHECKLIST:{encode(text)}:{'1' if checked else '0'}]]"


def test_normalize_empty_list():
    """Test an empty list becomes a single empty text block."""
    assert normalize_blocks([]) == [TextBlock("")]


def test_normalize_single_empty_text():
    """Test an empty note stays an empty note."""
    assert normalize_blocks([TextBlock("")]) == [TextBlock("")]


def test_normalize_splits_embedded_checklist():
    """Test checklist markers inside text become checklist blocks."""
    blocks = [TextBlock("before" + _marker("item", True) + "after")]
    assert normalize_blocks(blocks) == [
        TextBlock("before"),
        ChecklistBlock("item", True),
        TextBlock("after"),
    ]


def test_normalize_multiple_markers():
    """Test several embedded markers in one text block."""
    blocks = [TextBlock(_marker("a") + _marker("b", True) + "\n")]
    assert normalize_blocks(blocks) == [
        ChecklistBlock("a", False),
        ChecklistBlock("b", True),
        TextBlock("\n"),
    ]


def test_normalize_passes_non_text_through():
    """Test non-text blocks are kept as the same objects."""
    image = ImageBlock("img")
    attached = FileBlock("u", "f", 1)
    checklist = ChecklistBlock(_marker("not split"), False)
    out = normalize_blocks([image, checklist, attached])
    assert out == [image, checklist, attached]
    assert out[0] is image
    assert out[1] is checklist
    assert out[2] is attached


def test_normalize_leaves_image_markers_in_text():
    """Test only checklist markers are split out of text."""
    text = f"see [[IMAGE:{encode('x')}]]"
    assert normalize_blocks([TextBlock(text)]) == [TextBlock(text)]


def test_normalize_merges_adjacent_text():
    """Test adjacent text blocks are merged."""
    assert normalize_blocks([TextBlock("a"), TextBlock("b")]) == [TextBlock("ab")]


def test_normalize_drops_empty_text():
    """Test empty text blocks disappear next to other blocks."""
    blocks = [TextBlock(""), ChecklistBlock("a"), TextBlock("")]
    assert normalize_blocks(blocks) == [ChecklistBlock("a")]


def test_normalize_finds_marker_split_across_blocks():
    """Test a marker split over two text blocks is still found."""
    blocks = [TextBlock("x[[CHECKLIST:"), TextBlock(encode("a") + ":1]]y")]
    assert normalize_blocks(blocks) == [
        TextBlock("x"),
        ChecklistBlock("a", True),
        TextBlock("y"),
    ]


@pytest.mark.parametrize(
    "blocks",
    [
        [],
        [TextBlock("plain")],
        [TextBlock("a" + _marker("b") + "c"), TextBlock(_marker("d", True))],
        [TextBlock("[[CHECKLIST:"), TextBlock(_marker("x"))],
        [ImageBlock("i"), TextBlock(""), TextBlock("t"), FileBlock("u", "n", 0)],
    ],
)
def test_normalize_is_idempotent(blocks):
    """Test normalize(normalize(b)) == normalize(b)."""
    once = normalize_blocks(blocks)
    assert normalize_blocks(once) == once


def test_normalize_does_not_mutate_input():
    """Test the input list is left alone."""
    blocks = [TextBlock("a" + _marker("b"))]
    snapshot = list(blocks)
    normalize_blocks(blocks)
    assert blocks == snapshot
