"""End-to-end sprite build: scan, measure, build, write the index."""

import logging

from chordsprite.config import BuildConfig
from chordsprite.filenames import format_rejections, scan
from chordsprite.index import merge, write_index
from chordsprite.modes import get_strategy
from chordsprite.types import BuildResult, freeze_index

logger = logging.getLogger(__name__)


def build(config: BuildConfig, mode: str = "auto") -> BuildResult:
    """Build sprites and the merged index for config.audio_dir.

    Raises:
        FileNotFoundError: the audio directory doesn't exist.
        ValueError: nothing usable to build. No index is written.

    Failed sprite groups are logged and left out; the index is still written.
    """
    items, rejections = scan(config.audio_dir)

    strategy = get_strategy(mode)
    items = strategy.resolve_durations(items, rejections, config)
    if not items:
        raise ValueError(
            "No audio items with a measurable duration.\n"
            "Skipped files and reasons:\n" + format_rejections(rejections)
        )

    output = strategy.build(items, config)
    if output.failed_groups:
        level = logging.ERROR if not output.maps else logging.WARNING
        logger.log(level, f"Sprite groups failed: {', '.join(output.failed_groups)}")

    merged = merge(output.maps)
    write_index(config.index_path, merged)
    logger.info(f"Wrote index with {len(merged)} entries to {config.index_path}")

    if rejections:
        logger.warning(
            f"{len(rejections)} file(s) left out:\n" + format_rejections(rejections)
        )

    return BuildResult(
        mode=strategy.name,
        index=freeze_index(merged),
        index_path=config.index_path,
        sprites=output.sprites,
        rejections=rejections,
        failed_groups=output.failed_groups,
        skipped_groups=output.skipped_groups,
    )
