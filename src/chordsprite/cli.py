"""CLI entrypoint for chordsprite."""

import argparse
import logging
import sys
from pathlib import Path

from chordsprite.config import AUDIO_DIR, BuildConfig


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(
        prog="chordsprite",
        description="Pack per-chord audio clips into sprites plus a JSON offset map",
    )
    parser.add_argument(
        "audio_dir", nargs="?", type=Path, default=AUDIO_DIR,
        help=f"Directory of clips named like Cs3-Maj.mp3 (default: {AUDIO_DIR})",
    )
    parser.add_argument(
        "--out", type=Path, default=None,
        help="Sprite path; group sprites are written to its directory "
             "(default: <audio_dir>/sprites/part1.mp3)",
    )
    parser.add_argument(
        "--map", type=Path, default=None,
        help="Index file to write (default: <audio_dir>/sprites/map.json)",
    )
    parser.add_argument(
        "--mode", default="auto",
        choices=["auto", "full", "metadata", "per-file", "bare"],
        help="Force a build mode instead of detecting ffmpeg/ffprobe (default: auto)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", default=False,
                        help="Log every ffmpeg command")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(name)s %(levelname)s: %(message)s",
    )

    from chordsprite.pipeline import build

    config = BuildConfig(
        audio_dir=args.audio_dir,
        sprite_path=args.out,
        index_path=args.map,
    )
    try:
        result = build(config, mode=args.mode)
    except (FileNotFoundError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Mode: {result.mode}")
    for sprite in result.sprites:
        print(f"  {sprite}")
    print(f"Index: {result.index_path} ({len(result.index)} entries)")
    if result.failed_groups:
        print(f"Failed groups: {', '.join(result.failed_groups)}")
    print("Done.")


if __name__ == "__main__":
    main()
