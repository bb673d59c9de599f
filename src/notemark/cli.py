"""CLI for notemark - notes with inline checklists and attachments."""

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any

from . import __version__
from .adapters.content_parser import parse_content
from .adapters.content_serializer import serialize_blocks
from .core.errors import NoteNotFoundError
from .core.model import (
    Block,
    ChecklistBlock,
    FileBlock,
    ImageBlock,
    TextBlock,
    unhandled_block,
)
from .format.formatter import format_note
from .runtime import build_runtime

LOGGER = logging.getLogger(__name__)


def _block_to_dict(block: Block) -> dict[str, Any]:
    if isinstance(block, TextBlock):
        kind = "text"
    elif isinstance(block, ChecklistBlock):
        kind = "checklist"
    elif isinstance(block, ImageBlock):
        kind = "image"
    elif isinstance(block, FileBlock):
        kind = "file"
    else:
        raise unhandled_block(block)
    return {"kind": kind, **asdict(block)}


def _describe(block: Block) -> str:
    if isinstance(block, TextBlock):
        return f"text      {block.content!r}"
    if isinstance(block, ChecklistBlock):
        box = "[x]" if block.checked else "[ ]"
        return f"checklist {box} {block.content}"
    if isinstance(block, ImageBlock):
        return f"image     {block.uri}"
    if isinstance(block, FileBlock):
        return f"file      {block.filename} ({block.size_bytes} bytes) {block.uri}"
    raise unhandled_block(block)


def _get_note_or_fail(rt: Any, note_id: str):
    note = rt.notebook.get_note(note_id)
    if note is None:
        raise NoteNotFoundError(note_id)
    return note


def cmd_new(args: argparse.Namespace, rt: Any) -> int:
    """Create a new note."""
    blocks: list[Block] = []
    if args.content:
        blocks.append(TextBlock(args.content))
    for item in args.item:
        blocks.append(ChecklistBlock(item, False))

    note = rt.notebook.create_note(
        args.title or "", serialize_blocks(blocks), folder_id=args.folder
    )
    if not args.quiet:
        print(note.id)
    return 0


def cmd_ls(args: argparse.Namespace, rt: Any) -> int:
    """List notes, pinned first."""
    notes = rt.notebook.get_notes()
    if args.json:
        print(json.dumps([
            {
                "id": n.id,
                "title": n.title,
                "pinned": n.is_pinned,
                "updated": n.updated_at,
                "checklist": len(n.checklist),
                "done": sum(1 for c in n.checklist if c.checked),
            }
            for n in notes
        ], indent=2))
        return 0

    for n in notes:
        done = sum(1 for c in n.checklist if c.checked)
        progress = f" [{done}/{len(n.checklist)}]" if n.checklist else ""
        pin = "*" if n.is_pinned else " "
        print(f"{pin} {n.id}\t{n.title}{progress}")
    return 0


def cmd_show(args: argparse.Namespace, rt: Any) -> int:
    """Print the parsed blocks of a note."""
    note = _get_note_or_fail(rt, args.id)
    blocks = parse_content(note.content)
    if args.json:
        print(json.dumps({
            "id": note.id,
            "title": note.title,
            "blocks": [_block_to_dict(b) for b in blocks],
        }, indent=2, ensure_ascii=False))
        return 0

    if note.title:
        print(f"# {note.title}")
    for i, b in enumerate(blocks):
        print(f"{i:>3} {_describe(b)}")
    return 0


def cmd_cat(args: argparse.Namespace, rt: Any) -> int:
    """Print the stored content string."""
    note = _get_note_or_fail(rt, args.id)
    sys.stdout.write(note.content)
    if note.content and not note.content.endswith("\n"):
        sys.stdout.write("\n")
    return 0


def cmd_rm(args: argparse.Namespace, rt: Any) -> int:
    """Delete a note."""
    _get_note_or_fail(rt, args.id)

    if not args.yes:
        response = input(f"Delete note {args.id}? [y/N] ")
        if response.lower() not in ("y", "yes"):
            print("Aborted")
            return 0

    rt.notebook.delete_note(args.id)
    if not args.quiet:
        print(f"Deleted {args.id}")
    return 0


def cmd_add_item(args: argparse.Namespace, rt: Any) -> int:
    """Append a checklist item at the end of a note."""
    note = _get_note_or_fail(rt, args.id)
    session = rt.open_session(note)

    last = len(session.blocks) - 1
    session.focus(last, len(session.field_values[last].text))
    result = session.insert_checklist()

    # On text the focus lands after the new item, otherwise on it
    idx = result.focused_index
    if not isinstance(result.blocks[idx], ChecklistBlock):
        idx -= 1
    session.set_text(idx, args.text)
    if args.checked:
        session.set_checked(idx, True)
    session.done()

    if not args.quiet:
        print(f"Added item to {note.id}")
    return 0


def cmd_toggle(args: argparse.Namespace, rt: Any) -> int:
    """Flip the n-th checklist item (1-based)."""
    note = _get_note_or_fail(rt, args.id)
    session = rt.open_session(note)

    positions = [i for i, b in enumerate(session.blocks) if isinstance(b, ChecklistBlock)]
    if not 1 <= args.n <= len(positions):
        print(
            f"Error: note {note.id} has {len(positions)} checklist item(s)",
            file=sys.stderr,
        )
        return 1

    idx = positions[args.n - 1]
    block = session.blocks[idx]
    session.set_checked(idx, not block.checked)
    session.done()

    if not args.quiet:
        mark = "x" if not block.checked else " "
        print(f"[{mark}] {block.content}")
    return 0


def cmd_fmt(args: argparse.Namespace, rt: Any) -> int:
    """Normalize stored content and checklist side-lists."""
    ids = args.ids or list(rt.notebook.list_ids())
    pending = []
    for nid in ids:
        note = _get_note_or_fail(rt, nid)
        result = format_note(note)
        if not result.changed:
            continue
        pending.append(nid)
        if args.check:
            print(f"{nid}: {', '.join(result.changes)}")
        else:
            rt.notebook.put(result.formatted)
            if not args.quiet:
                print(f"Formatted {nid} ({', '.join(result.changes)})")

    if args.check:
        return 1 if pending else 0
    if not args.quiet and not pending:
        print("Nothing to format")
    return 0


def cmd_watch(args: argparse.Namespace, rt: Any) -> int:
    """Re-normalize notes edited outside notemark."""
    from .watch import watch_store

    return watch_store(
        rt.notebook,
        rt.notebook.storage.root,
        debounce_ms=args.debounce_ms,
        quiet=args.quiet,
        json_output=args.json,
    )


def _configure_logging(verbose: int, level_name: str) -> None:
    if verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="notemark", description="notemark CLI"
    )
    parser.add_argument(
        "--version", action="version", version=f"notemark {__version__}"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: search cwd/notemark.toml, store/notemark.toml)",
    )
    parser.add_argument(
        "--store",
        type=Path,
        default=None,
        help="Path to note store directory (overrides config)",
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Minimize output"
    )
    parser.add_argument(
        "--json", action="store_true", help="Machine-readable output"
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0,
        help="Log more (-v info, -vv debug)"
    )

    subparsers = parser.add_subparsers(dest="cmd", required=True)

    # new command
    parser_new = subparsers.add_parser("new", help="Create a new note")
    parser_new.add_argument("--title", help="Note title")
    parser_new.add_argument("--content", default="", help="Initial text")
    parser_new.add_argument(
        "--item", action="append", default=[],
        help="Checklist item to append (repeatable)"
    )
    parser_new.add_argument("--folder", default=None, help="Folder id")

    # ls command
    subparsers.add_parser("ls", help="List notes")

    # show command
    parser_show = subparsers.add_parser("show", help="Show parsed blocks of a note")
    parser_show.add_argument("id", help="Note ID")

    # cat command
    parser_cat = subparsers.add_parser("cat", help="Print stored content")
    parser_cat.add_argument("id", help="Note ID")

    # rm command
    parser_rm = subparsers.add_parser("rm", help="Delete a note")
    parser_rm.add_argument("id", help="Note ID")
    parser_rm.add_argument(
        "--yes", action="store_true", help="Skip confirmation prompt"
    )

    # add-item command
    parser_add = subparsers.add_parser("add-item", help="Append a checklist item")
    parser_add.add_argument("id", help="Note ID")
    parser_add.add_argument("text", help="Item text")
    parser_add.add_argument(
        "--checked", action="store_true", help="Create the item already checked"
    )

    # toggle command
    parser_toggle = subparsers.add_parser("toggle", help="Toggle a checklist item")
    parser_toggle.add_argument("id", help="Note ID")
    parser_toggle.add_argument("n", type=int, help="Item number (1-based)")

    # fmt command
    parser_fmt = subparsers.add_parser("fmt", help="Normalize stored notes")
    parser_fmt.add_argument("ids", nargs="*", help="Note IDs (default: all)")
    parser_fmt.add_argument(
        "--check", action="store_true",
        help="Only report notes that need formatting (exit 1 if any)"
    )

    # watch command
    parser_watch = subparsers.add_parser("watch", help="Watch store for external edits")
    parser_watch.add_argument(
        "--debounce-ms", type=int, default=150,
        help="Debounce window in milliseconds (default: 150)"
    )

    args = parser.parse_args(argv)

    rt = build_runtime(store_path=args.store, config_path=args.config)
    _configure_logging(args.verbose, rt.config.log.level)

    handlers = {
        "new": cmd_new,
        "ls": cmd_ls,
        "show": cmd_show,
        "cat": cmd_cat,
        "rm": cmd_rm,
        "add-item": cmd_add_item,
        "toggle": cmd_toggle,
        "fmt": cmd_fmt,
        "watch": cmd_watch,
    }

    handler = handlers.get(args.cmd)
    if handler:
        try:
            exit_code = handler(args, rt)
            sys.exit(exit_code)
        except Exception as e:
            LOGGER.debug("notemark.cli.fail cmd=%s", args.cmd, exc_info=True)
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        finally:
            rt.scheduler.shutdown()
    else:
        print(f"Unknown command: {args.cmd}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
