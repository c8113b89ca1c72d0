"""Core data types for chordsprite."""

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Union


@dataclass
class ClipItem:
    """One discovered source clip, e.g. ``Cs3-Maj.mp3``."""
    source_path: Path
    raw_name: str            # filename stem
    chord_quality: str       # suffix after the separator, e.g. "Maj"
    note_letter: str | None = None   # A-G, None if the prefix didn't parse
    sharp: bool = False
    octave: int | None = None
    duration: float | None = None    # seconds

    @property
    def pitch_name(self) -> str | None:
        """Note name in the filename spelling, e.g. 'Cs'."""
        if self.note_letter is None:
            return None
        return self.note_letter + ("s" if self.sharp else "")


@dataclass(frozen=True)
class Resolved:
    """Canonical key built from a MIDI number and chord quality."""
    midi: int
    chord_quality: str

    def __str__(self) -> str:
        return f"{self.midi}-{self.chord_quality}"


@dataclass(frozen=True)
class Unresolved:
    """Fallback key: the raw filename stem, used verbatim."""
    raw_name: str

    def __str__(self) -> str:
        return self.raw_name


CanonicalKey = Union[Resolved, Unresolved]


@dataclass(frozen=True)
class Rejection:
    """A file left out of the build, with the reason why."""
    file: str
    reason: str


@dataclass(frozen=True)
class SpriteGroup:
    """A named sprite. ``qualities=None`` accepts every item."""
    name: str
    qualities: frozenset[str] | None = None

    def accepts(self, item: ClipItem) -> bool:
        return self.qualities is None or item.chord_quality in self.qualities


@dataclass(frozen=True)
class IndexEntry:
    """Where one clip lives inside a sprite (seconds, ms precision)."""
    sprite: str
    offset: float
    duration: float

    def to_dict(self) -> dict:
        return {"sprite": self.sprite, "offset": self.offset, "duration": self.duration}


@dataclass
class BuildOutput:
    """What a build strategy produced, before the maps are merged."""
    maps: list[dict[str, IndexEntry]] = field(default_factory=list)
    sprites: list[Path] = field(default_factory=list)
    failed_groups: list[str] = field(default_factory=list)
    skipped_groups: list[str] = field(default_factory=list)


@dataclass
class BuildResult:
    """Output of the build pipeline."""
    mode: str
    index: Mapping[str, IndexEntry]
    index_path: Path
    sprites: list[Path] = field(default_factory=list)
    rejections: list[Rejection] = field(default_factory=list)
    failed_groups: list[str] = field(default_factory=list)
    skipped_groups: list[str] = field(default_factory=list)


def freeze_index(entries: Mapping[str, IndexEntry]) -> Mapping[str, IndexEntry]:
    """Return a read-only view over a copy of the merged index."""
    return MappingProxyType(dict(entries))
