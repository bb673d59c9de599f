import os
from pathlib import Path
from typing import Iterable

from ..core.ports import StorageStrategy

NOTE_SUFFIX = ".md"


class FsStorage(StorageStrategy):
    def __init__(self, root: Path, suffix: str = NOTE_SUFFIX):
        self.root = root
        self.suffix = suffix

    def path_for(self, id: str) -> Path:
        return self.root / f"{id}{self.suffix}"

    def read_raw(self, id: str) -> str | None:
        p = self.path_for(id)
        if not p.exists():
            return None
        # newline="" keeps "\r\n" inside note content intact
        with open(p, encoding="utf-8", newline="") as fh:
            return fh.read()

    def write_raw(self, id: str, contents: str) -> None:
        self.root.mkdir(parents=True, exist_ok=True)
        target = self.path_for(id)
        # Autosave may fire mid-write; swap the file in whole
        tmp = target.with_name(f".{target.name}.tmp")
        with open(tmp, "w", encoding="utf-8", newline="") as fh:
            fh.write(contents)
        os.replace(tmp, target)

    def delete_raw(self, id: str) -> None:
        p = self.path_for(id)
        if p.exists():
            p.unlink()

    def list_all_ids(self) -> Iterable[str]:
        if not self.root.exists():
            return []
        return sorted(
            p.name[: -len(self.suffix)]
            for p in self.root.glob(f"*{self.suffix}")
            if not p.name.startswith(".")
        )
