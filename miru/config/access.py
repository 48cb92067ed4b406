"""Process-wide config cache, refreshed when the file on disk changes."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from pathlib import Path

from miru.config.loader import get_config_path, load_config
from miru.config.schema import Config


@dataclass(slots=True)
class _Entry:
    config: Config
    stamp: int | None  # st_mtime_ns; None while the file does not exist


_lock = threading.RLock()
_entries: dict[Path, _Entry] = {}


def _resolve(config_path: Path | None) -> Path:
    return Path(config_path or get_config_path()).expanduser().resolve()


def _stamp(path: Path) -> int | None:
    try:
        return path.stat().st_mtime_ns
    except FileNotFoundError:
        return None


def get_config(*, config_path: Path | None = None, force_reload: bool = False) -> Config:
    """Return the cached config, reloading when forced or when the file changed."""
    path = _resolve(config_path)
    stamp = _stamp(path)
    with _lock:
        entry = _entries.get(path)
        if force_reload or entry is None or entry.stamp != stamp:
            entry = _Entry(load_config(path), stamp)
            _entries[path] = entry
        return entry.config


def clear_config_cache(*, config_path: Path | None = None) -> None:
    with _lock:
        if config_path is None:
            _entries.clear()
        else:
            _entries.pop(_resolve(config_path), None)
