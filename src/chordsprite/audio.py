"""Audio processing via ffmpeg/ffprobe."""

import json
import logging
import shutil
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)


def tool_available(name: str) -> bool:
    """True if `name -version` runs successfully from PATH."""
    if shutil.which(name) is None:
        return False
    try:
        subprocess.run(
            [name, "-version"], capture_output=True, text=True, timeout=30,
        ).check_returncode()
    except (subprocess.CalledProcessError, subprocess.TimeoutExpired, OSError):
        return False
    return True


def _run(cmd: list[str], timeout: float | None = None) -> str:
    """Run an ffmpeg-family command, raising CalledProcessError on failure."""
    logger.debug(" ".join(cmd))
    result = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout)
    if result.returncode != 0 and result.stderr:
        logger.debug(result.stderr.strip())
    result.check_returncode()
    return result.stdout


def _run_ffprobe(path: Path, *args: str, timeout: float = 30) -> str:
    """Run ffprobe and return stdout."""
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    cmd = [
        "ffprobe", "-v", "quiet", "-print_format", "json",
        *args, str(path),
    ]
    return _run(cmd, timeout=timeout)


def get_duration(path: Path, timeout: float = 30) -> float:
    """Get file duration in seconds.

    Raises ValueError if ffprobe reports no duration at all.
    """
    output = _run_ffprobe(path, "-show_format", "-show_streams", timeout=timeout)
    data = json.loads(output)
    # Try format duration first, fall back to first audio stream
    dur = data.get("format", {}).get("duration")
    if dur is None:
        for stream in data.get("streams", []):
            if stream.get("codec_type") == "audio" and "duration" in stream:
                dur = stream["duration"]
                break
    if dur is None:
        raise ValueError(f"No duration reported for {path}")
    return float(dur)


def build_normalize_command(
    input_path: Path,
    output_path: Path,
    sample_rate: int = 44100,
    channels: int = 1,
) -> list[str]:
    """ffmpeg command converting any input to a uniform PCM WAV."""
    return [
        "ffmpeg", "-y", "-i", str(input_path),
        "-vn", "-ar", str(sample_rate), "-ac", str(channels),
        "-c:a", "pcm_s16le",
        str(output_path),
    ]


def build_concat_command(list_path: Path, output_path: Path) -> list[str]:
    """ffmpeg concat-demuxer command. Inputs must share one format."""
    return [
        "ffmpeg", "-y",
        "-f", "concat", "-safe", "0", "-i", str(list_path),
        "-c", "copy",
        str(output_path),
    ]


def build_encode_command(
    input_path: Path,
    output_path: Path,
    codec: str = "libmp3lame",
    quality: int = 2,
) -> list[str]:
    """ffmpeg command encoding the merged WAV into the final sprite."""
    return [
        "ffmpeg", "-y", "-i", str(input_path),
        "-codec:a", codec, "-qscale:a", str(quality),
        str(output_path),
    ]


def _quote_concat_path(path: Path) -> str:
    # concat demuxer syntax: single quotes, embedded quotes as '\''
    return "'" + str(path).replace("'", "'\\''") + "'"


def write_concat_list(clip_paths: list[Path], list_path: Path) -> Path:
    """Write an ffmpeg concat list file naming clip_paths in order."""
    lines = [f"file {_quote_concat_path(p)}" for p in clip_paths]
    list_path.write_text("\n".join(lines) + "\n")
    return list_path


def normalize_clip(
    input_path: Path,
    output_path: Path,
    sample_rate: int = 44100,
    channels: int = 1,
) -> Path:
    """Resample a clip to sample_rate/channels 16-bit WAV."""
    _run(build_normalize_command(input_path, output_path, sample_rate, channels))
    return output_path


def concatenate_clips(clip_paths: list[Path], output_path: Path, list_path: Path) -> Path:
    """Concatenate same-format WAV clips back to back, no gaps."""
    if not clip_paths:
        raise ValueError("No clips to concatenate")

    if len(clip_paths) == 1:
        shutil.copy2(clip_paths[0], output_path)
        return output_path

    write_concat_list(clip_paths, list_path)
    _run(build_concat_command(list_path, output_path))
    return output_path


def encode_sprite(
    input_path: Path,
    output_path: Path,
    codec: str = "libmp3lame",
    quality: int = 2,
) -> Path:
    """Encode the merged WAV to the final compressed sprite."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    _run(build_encode_command(input_path, output_path, codec, quality))
    return output_path
