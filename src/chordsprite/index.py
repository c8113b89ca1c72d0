"""Serialize sprite index maps to JSON."""

import json
import logging
import os
import tempfile
from collections.abc import Iterable, Mapping
from pathlib import Path

from chordsprite.types import IndexEntry

logger = logging.getLogger(__name__)


def _atomic_write(target: Path, data: bytes) -> None:
    """Write data to target atomically via temp file + rename."""
    target.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=target.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.replace(tmp, target)
    except BaseException:
        if os.path.exists(tmp):
            os.unlink(tmp)
        raise


def to_json(entries: Mapping[str, IndexEntry]) -> str:
    return json.dumps({k: e.to_dict() for k, e in entries.items()}, indent=2)


def write_index(path: Path, entries: Mapping[str, IndexEntry]) -> Path:
    """Write an index map to path."""
    _atomic_write(path, to_json(entries).encode("utf-8"))
    return path


def group_index_path(sprite_path: Path) -> Path:
    """Per-group map written beside its sprite: easy.mp3 -> easy.map.json."""
    return sprite_path.with_suffix(".map.json")


def merge(maps: Iterable[Mapping[str, IndexEntry]]) -> dict[str, IndexEntry]:
    """Merge per-group maps in build order; later groups win."""
    merged: dict[str, IndexEntry] = {}
    for entries in maps:
        merged.update(entries)
    return merged
