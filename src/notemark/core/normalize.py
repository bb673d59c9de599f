"""Block hygiene: keep checklist markers out of free text."""

from .markers import CHECKLIST_RE, decode
from .model import Block, ChecklistBlock, TextBlock


def _split_text(text: str) -> list[Block]:
    """Split embedded checklist markers out of one text run."""
    out: list[Block] = []
    last_end = 0
    for m in CHECKLIST_RE.finditer(text):
        if m.start() > last_end:
            out.append(TextBlock(text[last_end : m.start()]))
        out.append(ChecklistBlock(content=decode(m.group(1)), checked=m.group(2) == "1"))
        last_end = m.end()
    if last_end < len(text):
        out.append(TextBlock(text[last_end:]))
    return out


def normalize_blocks(blocks: list[Block]) -> list[Block]:
    """Repair a block list before it is saved.

    - Text blocks never embed a checklist marker; embedded markers become
      explicit checklist blocks
    - Adjacent text blocks are merged and empty ones dropped, which is the
      shape the parser produces
    - Non-text blocks pass through unchanged
    - The result is never empty
    """
    out: list[Block] = []
    run: list[str] = []
    for b in blocks:
        if isinstance(b, TextBlock):
            run.append(b.content)
            continue
        # Merge the whole text run first so a marker split across two
        # blocks is still found
        out.extend(_split_text("".join(run)))
        run = []
        out.append(b)
    out.extend(_split_text("".join(run)))

    if not out:
        out.append(TextBlock(""))
    return out
