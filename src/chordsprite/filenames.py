"""Discover source clips and turn their filenames into index keys.

Source files are named ``<Pitch><Octave>-<ChordQuality>.<ext>``, e.g.
``Cs3-Maj.mp3``. Sharps are spelled with a trailing ``s`` and the octave may
be zero or negative (``C-1-Maj``). The canonical key the web app looks clips
up by is ``"<midi>-<quality>"``, so ``Cs3-Maj`` becomes ``"49-Maj"``.
"""

import logging
import re
from pathlib import Path

import pretty_midi

from chordsprite.config import AUDIO_EXTENSIONS, SPRITES_DIRNAME
from chordsprite.types import CanonicalKey, ClipItem, Rejection, Resolved, Unresolved

logger = logging.getLogger(__name__)

SEPARATOR = "-"

# The 12 pitch names a filename can spell. Es/Bs are deliberately absent.
PITCH_CLASSES = {
    "C": 0, "Cs": 1, "D": 2, "Ds": 3, "E": 4, "F": 5,
    "Fs": 6, "G": 7, "Gs": 8, "A": 9, "As": 10, "B": 11,
}

_NAME_RE = re.compile(
    r"^(?P<letter>[A-G])(?P<sharp>s?)(?P<octave>-?\d+)"
    + re.escape(SEPARATOR)
    + r"(?P<quality>.+)$"
)


def has_audio_extension(name: str) -> bool:
    return Path(name).suffix.lower().lstrip(".") in AUDIO_EXTENSIONS


def discover(audio_dir: Path) -> list[str]:
    """List candidate audio file names in audio_dir, sorted.

    Only regular files with a known audio extension are returned; the
    reserved sprites directory is never scanned.
    """
    if not audio_dir.is_dir():
        raise FileNotFoundError(f"Audio directory not found: {audio_dir}")
    names = []
    for entry in sorted(audio_dir.iterdir()):
        if entry.name == SPRITES_DIRNAME or not entry.is_file():
            continue
        if has_audio_extension(entry.name):
            names.append(entry.name)
    return names


def parse_filename(name: str, audio_dir: Path) -> ClipItem | Rejection:
    """Parse a filename into a ClipItem, or say why it can't be used."""
    if not has_audio_extension(name):
        return Rejection(name, "extension mismatch")
    stem = Path(name).stem
    if SEPARATOR not in stem:
        return Rejection(name, "no separator in name")
    prefix, quality = stem.split(SEPARATOR, 1)
    if not prefix:
        return Rejection(name, "empty pitch prefix")
    if not quality:
        return Rejection(name, "empty chord quality")

    source_path = audio_dir / name
    m = _NAME_RE.match(stem)
    if m:
        return ClipItem(
            source_path=source_path,
            raw_name=stem,
            chord_quality=m.group("quality"),
            note_letter=m.group("letter"),
            sharp=bool(m.group("sharp")),
            octave=int(m.group("octave")),
        )

    # Separator present but the prefix isn't a pitch: keep the item, the key
    # falls back to the raw stem.
    return ClipItem(source_path=source_path, raw_name=stem, chord_quality=quality)


def canonical_key(item: ClipItem) -> CanonicalKey:
    """Return the index key for item, or its raw-name fallback."""
    pitch = item.pitch_name
    if pitch is None or item.octave is None or pitch not in PITCH_CLASSES:
        return Unresolved(item.raw_name)
    # pretty_midi uses the same (octave + 1) * 12 convention: C4 == 60
    note_name = item.note_letter + ("#" if item.sharp else "") + str(item.octave)
    return Resolved(pretty_midi.note_name_to_number(note_name), item.chord_quality)


def format_rejections(rejections: list[Rejection]) -> str:
    return "\n".join(f" - {r.file}: {r.reason}" for r in rejections)


def scan(audio_dir: Path) -> tuple[list[ClipItem], list[Rejection]]:
    """Discover and parse every clip in audio_dir.

    Raises:
        FileNotFoundError: audio_dir doesn't exist.
        ValueError: no audio files, or none with a usable name.
    """
    names = discover(audio_dir)
    if not names:
        found = sorted(p.name for p in audio_dir.iterdir() if p.name != SPRITES_DIRNAME)
        detail = f" Found files: {', '.join(found)}" if found else ""
        raise ValueError(f"No audio files found in {audio_dir}.{detail}")
    logger.info(f"Found {len(names)} files")

    items: list[ClipItem] = []
    rejections: list[Rejection] = []
    for name in names:
        parsed = parse_filename(name, audio_dir)
        if isinstance(parsed, Rejection):
            logger.warning(f"Skipping {parsed.file}: {parsed.reason}")
            rejections.append(parsed)
            continue
        key = canonical_key(parsed)
        if isinstance(key, Unresolved):
            logger.info(f"{name}: pitch not recognised, keyed by raw name '{key}'")
        items.append(parsed)

    if not items:
        raise ValueError(
            "No parseable audio items found. Filenames must be like Cs3-Maj.mp3\n"
            "Skipped files and reasons:\n" + format_rejections(rejections)
        )
    return items, rejections
