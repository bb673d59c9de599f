"""Configuration loader for notemark.toml."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore

CONFIG_FILENAME = "notemark.toml"


@dataclass
class StoreConfig:
    """Where notes live on disk."""
    root: Path


@dataclass
class AutosaveConfig:
    """Quiescence window before an edit is committed."""
    delay_ms: int = 1000


@dataclass
class IdConfig:
    """ID generation configuration."""
    bytes: int = 6


@dataclass
class LogConfig:
    """Logging configuration."""
    level: str = "WARNING"


@dataclass
class NotemarkConfig:
    """Complete notemark configuration."""
    store: StoreConfig
    autosave: AutosaveConfig
    id: IdConfig
    log: LogConfig


def load_config(config_path: Path | None = None, store_path: Path | None = None) -> NotemarkConfig:
    """
    Load configuration from notemark.toml.

    Search order:
    1. config_path (if provided)
    2. cwd/notemark.toml
    3. store_path/notemark.toml

    Args:
        config_path: Explicit path to config file
        store_path: Note store root for fallback search

    Returns:
        NotemarkConfig with resolved settings
    """
    toml_data: dict[str, Any] = {}

    search_paths = []
    if config_path:
        search_paths.append(config_path)
    search_paths.append(Path.cwd() / CONFIG_FILENAME)
    if store_path:
        search_paths.append(store_path / CONFIG_FILENAME)

    for path in search_paths:
        if path.exists():
            with open(path, "rb") as f:
                toml_data = tomllib.load(f)
            break

    store_data = toml_data.get("store", {})
    store_config = StoreConfig(
        root=Path(store_data.get("root", store_path or Path("./notes"))),
    )

    autosave_data = toml_data.get("autosave", {})
    autosave_config = AutosaveConfig(
        delay_ms=int(autosave_data.get("delay_ms", 1000)),
    )

    id_data = toml_data.get("id", {})
    id_config = IdConfig(
        bytes=int(id_data.get("bytes", 6)),
    )

    log_data = toml_data.get("log", {})
    log_config = LogConfig(
        level=str(log_data.get("level", "WARNING")).upper(),
    )

    return NotemarkConfig(
        store=store_config,
        autosave=autosave_config,
        id=id_config,
        log=log_config,
    )
