"""Offset bookkeeping for clips packed back to back into one sprite."""

from collections.abc import Callable
from pathlib import Path

from chordsprite.filenames import canonical_key
from chordsprite.types import ClipItem, IndexEntry

# Millisecond resolution
PRECISION = 3


def accumulate(items: list[ClipItem], sprite: str) -> dict[str, IndexEntry]:
    """Build the index entries for one sprite, starting at offset 0.

    The running offset is rounded at every step before the next duration is
    added, so item i+1 starts at round(offset_i + duration_i, 3). Rounding
    error can build up over long groups. Missing durations count as zero.
    """
    entries: dict[str, IndexEntry] = {}
    offset = 0.0
    for item in items:
        duration = item.duration or 0.0
        offset = round(offset, PRECISION)
        entries[str(canonical_key(item))] = IndexEntry(
            sprite=sprite,
            offset=offset,
            duration=round(duration, PRECISION),
        )
        offset += duration
    return entries


def per_file(
    items: list[ClipItem],
    public_path: Callable[[Path], str],
) -> dict[str, IndexEntry]:
    """Index entries pointing straight at each source file, offset always 0."""
    return {
        str(canonical_key(item)): IndexEntry(
            sprite=public_path(item.source_path),
            offset=0,
            duration=round(item.duration or 0.0, PRECISION),
        )
        for item in items
    }
