"""Runtime wiring helper for CLI applications."""

from dataclasses import dataclass
from pathlib import Path

from .adapters.fs_storage import FsStorage
from .adapters.idgen import HexId
from .adapters.yaml_codec import YamlFrontmatter, YamlNoteCodec
from .autosave import AutosaveScheduler
from .config import NotemarkConfig, load_config
from .core.model import Note
from .core.notebook import Notebook
from .session import EditSession


@dataclass
class Runtime:
    """Container for all wired components."""
    notebook: Notebook
    scheduler: AutosaveScheduler
    config: NotemarkConfig

    def open_session(self, note: Note, locked: bool = False) -> EditSession:
        return EditSession(note, self.notebook, self.scheduler, locked=locked)


def build_runtime(
    store_path: Path | None = None,
    config_path: Path | None = None,
) -> Runtime:
    """Build and wire all components for a note store."""
    config = load_config(config_path=config_path, store_path=store_path)

    # CLI args win over config values
    if store_path is None:
        store_path = config.store.root

    storage = FsStorage(store_path)
    codec = YamlNoteCodec(YamlFrontmatter())
    notebook = Notebook(storage, codec, HexId(nbytes=config.id.bytes))
    scheduler = AutosaveScheduler(delay_ms=config.autosave.delay_ms)

    return Runtime(
        notebook=notebook,
        scheduler=scheduler,
        config=config,
    )
