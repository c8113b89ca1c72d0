"""Tests for the mutagen duration reader."""

import wave
from pathlib import Path

import pytest

from chordsprite.metadata import read_duration


def _write_wav(path: Path, seconds: float, rate: int = 8000) -> Path:
    with wave.open(str(path), "wb") as w:
        w.setnchannels(1)
        w.setsampwidth(2)
        w.setframerate(rate)
        w.writeframes(b"\x00\x00" * int(seconds * rate))
    return path


def test_reads_wav_duration(tmp_path):
    f = _write_wav(tmp_path / "C3-Maj.wav", 1.5)
    assert read_duration(f) == pytest.approx(1.5, abs=0.001)


def test_format_hint_overrides_extension(tmp_path):
    f = _write_wav(tmp_path / "C3-Maj.bin", 0.5)
    assert read_duration(f) is None
    assert read_duration(f, "wav") == pytest.approx(0.5, abs=0.001)


def test_garbage_file_returns_none(tmp_path):
    f = tmp_path / "C3-Maj.mp3"
    f.write_bytes(b"not really audio")
    assert read_duration(f) is None


def test_missing_file_returns_none(tmp_path):
    assert read_duration(tmp_path / "C3-Maj.ogg") is None
