"""Read clip durations from embedded container metadata via mutagen.

Used when ffprobe isn't installed. Only the stream header is parsed, so this
is fast but less exact than probing the decoded stream.
"""

import logging
from pathlib import Path

from mutagen import MutagenError
from mutagen.mp3 import MP3
from mutagen.mp4 import MP4
from mutagen.oggvorbis import OggVorbis
from mutagen.wave import WAVE

logger = logging.getLogger(__name__)

# File extension -> mutagen reader
READERS = {
    "mp3": MP3,
    "wav": WAVE,
    "ogg": OggVorbis,
    "m4a": MP4,
}


def read_duration(path: Path, fmt: str | None = None) -> float | None:
    """Duration in seconds from the file's metadata, or None if unknown.

    fmt is a format hint ("mp3", "wav", ...); defaults to the extension.
    """
    fmt = (fmt or path.suffix.lstrip(".")).lower()
    reader = READERS.get(fmt)
    if reader is None:
        logger.debug(f"No metadata reader for format '{fmt}': {path.name}")
        return None
    try:
        audio = reader(path)
    except (MutagenError, OSError) as e:
        logger.debug(f"mutagen could not read {path.name}: {e}")
        return None
    length = getattr(audio.info, "length", None)
    if not length:
        return None
    return float(length)
