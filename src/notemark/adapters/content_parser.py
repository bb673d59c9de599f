import logging
import re

from ..core.markers import CHECKLIST_RE, ENVELOPE_RE, FILE_RE, IMAGE_RE, decode
from ..core.model import Block, ChecklistBlock, FileBlock, ImageBlock, TextBlock
from ..core.ports import ContentParser

LOGGER = logging.getLogger(__name__)


def _classify(marker: str) -> Block | None:
    # Order matters: checklist, image, file
    m = CHECKLIST_RE.fullmatch(marker)
    if m:
        return ChecklistBlock(content=decode(m.group(1)), checked=m.group(2) == "1")
    m = IMAGE_RE.fullmatch(marker)
    if m:
        return ImageBlock(uri=decode(m.group(1)))
    m = FILE_RE.fullmatch(marker)
    if m:
        try:
            size = int(m.group(3))
        except ValueError:
            # Past the interpreter's int digit limit; keep as literal text
            return None
        return FileBlock(
            uri=decode(m.group(1)),
            filename=decode(m.group(2)),
            size_bytes=size,
        )
    return None


class MarkerParser(ContentParser):
    def __init__(self, envelope: re.Pattern = ENVELOPE_RE):
        self.envelope = envelope

    def parse(self, content: str) -> list[Block]:
        blocks: list[Block] = []
        # Literal text waiting to be emitted; a malformed marker joins it so
        # the output never holds two adjacent text blocks
        pending: list[str] = []
        last_end = 0

        for m in self.envelope.finditer(content):
            pending.append(content[last_end : m.start()])
            last_end = m.end()

            block = _classify(m.group(0))
            if block is None:
                LOGGER.debug(
                    "notemark.parser.malformed_marker at=%d len=%d",
                    m.start(),
                    m.end() - m.start(),
                )
                pending.append(m.group(0))
                continue

            text = "".join(pending)
            if text:
                blocks.append(TextBlock(text))
            pending = []
            blocks.append(block)

        pending.append(content[last_end:])
        text = "".join(pending)
        if text:
            blocks.append(TextBlock(text))

        if not blocks:
            blocks.append(TextBlock(""))
        return blocks


_DEFAULT = MarkerParser()


def parse_content(content: str) -> list[Block]:
    """Parse a stored note body into its ordered block sequence."""
    return _DEFAULT.parse(content)
