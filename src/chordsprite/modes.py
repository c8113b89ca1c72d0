"""Pick how to build from the tools that are installed.

Two capabilities matter: a duration probe (ffprobe) and a converter
(ffmpeg). They select exactly one of four modes, once, at startup:

    full      ffprobe + ffmpeg   probe durations, build sprites
    metadata  ffmpeg only        mutagen durations, build sprites
    per-file  ffprobe only       probe durations, index the source files
    bare      neither            mutagen durations (0 if unknown), per-file

Sprite modes drop clips whose duration can't be measured, since a wrong
duration would shift every later offset. Per-file modes point at the source
files, so in bare mode an unknown duration is written as 0 instead.
"""

import json
import logging
import math
import subprocess
from abc import ABC, abstractmethod

from chordsprite.audio import get_duration, tool_available
from chordsprite.config import BuildConfig
from chordsprite.metadata import read_duration
from chordsprite.offsets import per_file
from chordsprite.sprites import build_sprites
from chordsprite.types import BuildOutput, ClipItem, Rejection

logger = logging.getLogger(__name__)

FULL = "full"
METADATA = "metadata"
PER_FILE = "per-file"
BARE = "bare"


def detect_capabilities() -> tuple[bool, bool]:
    """Return (has_ffprobe, has_convert) for the current PATH."""
    return tool_available("ffprobe"), tool_available("ffmpeg")


def select_mode(has_ffprobe: bool, has_convert: bool) -> str:
    if has_convert:
        return FULL if has_ffprobe else METADATA
    return PER_FILE if has_ffprobe else BARE


class Strategy(ABC):
    """One way of measuring clips and turning them into an index."""

    name: str = "base"
    # When True an unmeasurable clip is kept with duration 0
    zero_missing_durations: bool = False

    @abstractmethod
    def measure(self, item: ClipItem, config: BuildConfig) -> float | None:
        """Duration of item in seconds, or None if it can't be measured."""

    @abstractmethod
    def build(self, items: list[ClipItem], config: BuildConfig) -> BuildOutput:
        """Produce the index maps (and any sprite files) for items."""

    def resolve_durations(
        self,
        items: list[ClipItem],
        rejections: list[Rejection],
        config: BuildConfig,
    ) -> list[ClipItem]:
        """Fill in item durations, dropping unmeasurable items into rejections."""
        kept = []
        for item in items:
            duration = self.measure(item, config)
            if not duration or math.isnan(duration):
                if self.zero_missing_durations:
                    logger.warning(f"No duration for {item.source_path.name}, using 0")
                    duration = 0.0
                else:
                    logger.warning(f"Skipping file (no duration): {item.source_path.name}")
                    rejections.append(Rejection(item.source_path.name, "no duration"))
                    continue
            item.duration = duration
            kept.append(item)
        return kept


class _FfprobeDurationMixin:
    def measure(self, item: ClipItem, config: BuildConfig) -> float | None:
        try:
            return get_duration(item.source_path, timeout=config.duration_timeout)
        except (
            subprocess.CalledProcessError,
            subprocess.TimeoutExpired,
            json.JSONDecodeError,
            ValueError,
            OSError,
        ) as e:
            logger.warning(f"ffprobe failed for {item.source_path.name}: {e}")
            return None


class _MetadataMixin:
    def measure(self, item: ClipItem, config: BuildConfig) -> float | None:
        return read_duration(item.source_path)


class _SpriteMixin:
    def build(self, items: list[ClipItem], config: BuildConfig) -> BuildOutput:
        return build_sprites(items, config)


class _PerFileMixin:
    def build(self, items: list[ClipItem], config: BuildConfig) -> BuildOutput:
        logger.info("ffmpeg not found on PATH, indexing source files directly (no sprites)")
        logger.info("The app will fetch each audio file individually using these paths")
        return BuildOutput(maps=[per_file(items, config.public_path)])


class FullStrategy(_FfprobeDurationMixin, _SpriteMixin, Strategy):
    name = FULL


class MetadataStrategy(_MetadataMixin, _SpriteMixin, Strategy):
    name = METADATA


class PerFileStrategy(_FfprobeDurationMixin, _PerFileMixin, Strategy):
    name = PER_FILE


class BareStrategy(_MetadataMixin, _PerFileMixin, Strategy):
    name = BARE
    zero_missing_durations = True


_STRATEGIES = {
    FULL: FullStrategy,
    METADATA: MetadataStrategy,
    PER_FILE: PerFileStrategy,
    BARE: BareStrategy,
}


def get_strategy(name: str) -> Strategy:
    """Get a build strategy by mode name.

    "auto" detects ffprobe/ffmpeg on PATH and picks the matching mode.
    """
    if name == "auto":
        has_ffprobe, has_convert = detect_capabilities()
        name = select_mode(has_ffprobe, has_convert)
        logger.info(
            f"ffprobe {'found' if has_ffprobe else 'missing'}, "
            f"ffmpeg {'found' if has_convert else 'missing'}: using {name} mode"
        )

    if name not in _STRATEGIES:
        raise ValueError(
            f"Unknown mode: {name!r}. Available: {list(_STRATEGIES.keys()) + ['auto']}"
        )
    return _STRATEGIES[name]()
