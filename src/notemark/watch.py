"""Watch mode for notemark - re-normalize notes edited outside the tool."""

import json
import logging
import signal
import sys
import time
from pathlib import Path
from typing import Any, Callable

try:
    from watchdog.events import FileSystemEvent, FileSystemEventHandler
    from watchdog.observers import Observer

    WATCHDOG_AVAILABLE = True
except ImportError:
    WATCHDOG_AVAILABLE = False
    FileSystemEventHandler = object
    FileSystemEvent = Any

from .core.notebook import Notebook
from .format.formatter import format_note

LOGGER = logging.getLogger(__name__)


class DebounceHandler(FileSystemEventHandler):  # type: ignore[misc]
    """File system event handler with debouncing."""

    def __init__(
        self,
        on_batch: Callable[[set[str], set[str]], Any],
        debounce_ms: int = 150,
        suffix: str = ".md",
    ):
        super().__init__()
        self.on_batch = on_batch
        self.debounce_ms = debounce_ms
        self.suffix = suffix

        # Pending changes by note id
        self.changed: set[str] = set()
        self.deleted: set[str] = set()
        self.last_event_time = 0.0

    def _extract_id(self, path: Path) -> str | None:
        name = path.name
        # Hidden files cover our own ".<id>.md.tmp" swap files
        if name.startswith(".") or name.endswith("~") or name.endswith(".swp"):
            return None
        if not name.endswith(self.suffix):
            return None
        return name[: -len(self.suffix)]

    def _touch(self, raw_path: Any, bucket: set[str]) -> None:
        note_id = self._extract_id(Path(str(raw_path)))
        if note_id:
            bucket.add(note_id)
            self.last_event_time = time.time()

    def on_created(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._touch(event.src_path, self.changed)

    def on_modified(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._touch(event.src_path, self.changed)

    def on_moved(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._touch(event.src_path, self.deleted)
            self._touch(event.dest_path, self.changed)

    def on_deleted(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._touch(event.src_path, self.deleted)

    def check_and_flush(self) -> None:
        """Flush once the debounce period has elapsed."""
        if not (self.changed or self.deleted):
            return
        elapsed = (time.time() - self.last_event_time) * 1000
        if elapsed >= self.debounce_ms:
            self.flush()

    def flush(self) -> None:
        if not (self.changed or self.deleted):
            return

        changed = set(self.changed)
        # A file that came back after a delete counts as changed
        deleted = self.deleted - changed

        self.changed.clear()
        self.deleted.clear()

        if self.on_batch:
            self.on_batch(changed, deleted)


def reformat_notes(notebook: Notebook, ids: set[str]) -> list[str]:
    """Normalize the given notes in place; returns the ids that were rewritten."""
    rewritten = []
    for nid in sorted(ids):
        note = notebook.get_note(nid)
        if note is None:
            continue
        result = format_note(note)
        if result.changed:
            notebook.put(result.formatted)
            rewritten.append(nid)
            LOGGER.info(
                "notemark.watch.reformat id=%s changes=%s", nid, ",".join(result.changes)
            )
    return rewritten


def watch_store(
    notebook: Notebook,
    store_path: Path,
    debounce_ms: int = 150,
    quiet: bool = False,
    json_output: bool = False,
) -> int:
    """
    Watch a note store and re-normalize notes as they change on disk.

    Args:
        notebook: Notebook over the watched store
        store_path: Directory holding the note files
        debounce_ms: Debounce window in milliseconds
        quiet: Suppress output
        json_output: Output JSON events instead of human-readable

    Returns:
        Exit code
    """
    if not WATCHDOG_AVAILABLE:
        print(
            "Error: watchdog library not installed. Install with: pip install notemark[watch]",
            file=sys.stderr,
        )
        return 1

    if not store_path.exists():
        print(f"Error: Store not found: {store_path}", file=sys.stderr)
        return 1

    running = True

    def handle_batch(changed: set[str], deleted: set[str]) -> None:
        start_time = time.time()
        try:
            rewritten = reformat_notes(notebook, changed)
            duration_ms = int((time.time() - start_time) * 1000)
            if json_output:
                event = {
                    "type": "batch",
                    "changed": sorted(changed),
                    "reformatted": rewritten,
                    "deleted": sorted(deleted),
                    "duration_ms": duration_ms,
                }
                print(json.dumps(event), flush=True)
            elif not quiet:
                print(
                    f"Checked: ~{len(changed)} -{len(deleted)} "
                    f"reformatted {len(rewritten)} ({duration_ms}ms)",
                    flush=True,
                )
        except Exception as e:
            LOGGER.exception("notemark.watch.batch_fail")
            if json_output:
                print(json.dumps({"type": "error", "message": str(e)}), flush=True)
            else:
                print(f"Error: {e}", file=sys.stderr, flush=True)

    def signal_handler(signum: int, frame: Any) -> None:
        nonlocal running
        running = False
        if not quiet and not json_output:
            print("\nShutting down...", flush=True)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    suffix = getattr(notebook.storage, "suffix", ".md")
    handler = DebounceHandler(handle_batch, debounce_ms, suffix=suffix)
    observer = Observer()
    observer.schedule(handler, str(store_path), recursive=False)

    if not quiet and not json_output:
        print(f"Watching {store_path} (debounce: {debounce_ms}ms)", flush=True)
        print("Press Ctrl+C to stop", flush=True)

    observer.start()

    try:
        while running:
            time.sleep(0.1)
            handler.check_and_flush()
    finally:
        handler.flush()
        observer.stop()
        observer.join()

    if not quiet and not json_output:
        print("Watch stopped", flush=True)

    return 0
