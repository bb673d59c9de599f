from ..core.markers import checklist_marker, file_marker, image_marker
from ..core.model import (
    Block,
    ChecklistBlock,
    FileBlock,
    ImageBlock,
    TextBlock,
    unhandled_block,
)
from ..core.ports import ContentSerializer


class MarkerSerializer(ContentSerializer):
    def serialize(self, blocks: list[Block]) -> str:
        parts: list[str] = []
        for b in blocks:
            if isinstance(b, TextBlock):
                parts.append(b.content)
            elif isinstance(b, ChecklistBlock):
                parts.append(checklist_marker(b.content, b.checked))
            elif isinstance(b, ImageBlock):
                parts.append(image_marker(b.uri))
            elif isinstance(b, FileBlock):
                parts.append(file_marker(b.uri, b.filename, b.size_bytes))
            else:
                raise unhandled_block(b)
        return "".join(parts)


_DEFAULT = MarkerSerializer()


def serialize_blocks(blocks: list[Block]) -> str:
    """Flatten blocks back into the stored content string."""
    return _DEFAULT.serialize(blocks)
