"""Build settings and defaults."""

import os
from dataclasses import dataclass, field
from pathlib import Path

from chordsprite.types import SpriteGroup

AUDIO_DIR = Path(os.environ.get("CHORDSPRITE_AUDIO_DIR", "./audios"))

# Reserved entry inside the audio directory that holds generated output
SPRITES_DIRNAME = "sprites"

AUDIO_EXTENSIONS = ("mp3", "wav", "ogg", "m4a")

# Built in this order; later groups win when the merged index has a key twice
DEFAULT_GROUPS = (
    SpriteGroup("easy", frozenset({"Maj", "Men"})),
    SpriteGroup("medium", frozenset({"Maj", "Men", "Aug", "Dim"})),
    SpriteGroup("hard"),
)


@dataclass
class BuildConfig:
    """Everything the pipeline needs to know about one run."""
    audio_dir: Path = field(default_factory=lambda: AUDIO_DIR)
    sprite_path: Path | None = None     # group sprites land in its directory
    index_path: Path | None = None
    groups: tuple[SpriteGroup, ...] = DEFAULT_GROUPS
    sample_rate: int = 44100
    channels: int = 1
    codec: str = "libmp3lame"
    quality: int = 2
    sprite_ext: str = "mp3"
    duration_timeout: float = 30

    def __post_init__(self):
        self.audio_dir = Path(self.audio_dir)
        if self.sprite_path is None:
            self.sprite_path = self.audio_dir / SPRITES_DIRNAME / f"part1.{self.sprite_ext}"
        if self.index_path is None:
            self.index_path = self.audio_dir / SPRITES_DIRNAME / "map.json"
        self.sprite_path = Path(self.sprite_path)
        self.index_path = Path(self.index_path)

    @property
    def output_dir(self) -> Path:
        return self.sprite_path.parent

    def sprite_for(self, group: SpriteGroup) -> Path:
        """Output sprite path for a group, e.g. sprites/easy.mp3."""
        return self.output_dir / f"{group.name}.{self.sprite_ext}"

    def public_path(self, path: Path) -> str:
        """Path as the web app requests it, relative to the audio dir's parent."""
        root = self.audio_dir.resolve().parent
        rel = os.path.relpath(Path(path).resolve(), root)
        rel = Path(rel).as_posix()
        if rel.startswith("../"):
            return rel
        return f"./{rel}"
