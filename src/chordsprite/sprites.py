"""Build one concatenated sprite per group."""

import logging
import shutil
import subprocess
import tempfile
from pathlib import Path

from chordsprite.audio import concatenate_clips, encode_sprite, normalize_clip
from chordsprite.config import BuildConfig
from chordsprite.groups import partition
from chordsprite.index import group_index_path, write_index
from chordsprite.offsets import accumulate
from chordsprite.types import BuildOutput, ClipItem, IndexEntry

logger = logging.getLogger(__name__)


def _release(scratch: Path) -> None:
    """Remove a group's scratch directory. Failures are logged, not raised."""
    try:
        shutil.rmtree(scratch)
    except OSError as e:
        logger.warning(f"Could not remove temp dir {scratch}: {e}")


def _discard(sprite_path: Path) -> None:
    """Drop a partially encoded sprite so it isn't mistaken for output."""
    try:
        sprite_path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning(f"Could not remove partial sprite {sprite_path}: {e}")


def build_group(
    group_name: str,
    items: list[ClipItem],
    sprite_path: Path,
    config: BuildConfig,
) -> dict[str, IndexEntry]:
    """Normalize, concatenate and encode items into sprite_path.

    Returns the group's index entries. Any ffmpeg failure raises
    CalledProcessError; the scratch directory is released either way.
    """
    scratch = Path(tempfile.mkdtemp(prefix=f"sprite-{group_name}-"))
    logger.debug(f"Using tmp dir {scratch} for {sprite_path}")
    try:
        wavs = []
        for i, item in enumerate(items):
            wav = scratch / f"part-{i:04d}.wav"
            normalize_clip(item.source_path, wav, config.sample_rate, config.channels)
            wavs.append(wav)

        merged = scratch / "sprite_full.wav"
        logger.info(f"Concatenating {len(wavs)} clips")
        concatenate_clips(wavs, merged, scratch / "concat.txt")

        logger.info(f"Encoding sprite: {sprite_path}")
        encode_sprite(merged, sprite_path, config.codec, config.quality)
    except (subprocess.CalledProcessError, OSError):
        _discard(sprite_path)
        raise
    finally:
        _release(scratch)

    entries = accumulate(items, config.public_path(sprite_path))

    map_path = group_index_path(sprite_path)
    try:
        write_index(map_path, entries)
        logger.info(f"Wrote group map to {map_path}")
    except OSError as e:
        logger.warning(f"Unable to write group map {map_path}: {e}")
    return entries


def build_sprites(items: list[ClipItem], config: BuildConfig) -> BuildOutput:
    """Build every configured group in order.

    Empty groups are skipped. A failing group is abandoned and the next one
    is still attempted.
    """
    output = BuildOutput()
    members = partition(items, config.groups)
    config.output_dir.mkdir(parents=True, exist_ok=True)

    for group in config.groups:
        group_items = members[group.name]
        logger.info(f"Building sprite for group: {group.name} items: {len(group_items)}")
        if not group_items:
            logger.info(f"No items for group {group.name}, skipping")
            output.skipped_groups.append(group.name)
            continue

        sprite_path = config.sprite_for(group)
        try:
            entries = build_group(group.name, group_items, sprite_path, config)
        except (subprocess.CalledProcessError, OSError) as e:
            logger.warning(f"Group {group.name} failed, no sprite written: {e}")
            output.failed_groups.append(group.name)
            continue

        output.maps.append(entries)
        output.sprites.append(sprite_path)
    return output
