"""Tests for CLI argument parsing and exit codes."""

import json
import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from chordsprite.cli import main, parse_args
from chordsprite.config import AUDIO_DIR
from chordsprite.types import BuildResult, IndexEntry


def test_parse_defaults():
    args = parse_args([])
    assert args.audio_dir == AUDIO_DIR
    assert args.out is None
    assert args.map is None
    assert args.mode == "auto"
    assert args.verbose is False


def test_parse_all_options():
    args = parse_args([
        "clips",
        "--out", "/tmp/sprites/part1.mp3",
        "--map", "/tmp/sprites/map.json",
        "--mode", "per-file",
        "-v",
    ])
    assert args.audio_dir == Path("clips")
    assert args.out == Path("/tmp/sprites/part1.mp3")
    assert args.map == Path("/tmp/sprites/map.json")
    assert args.mode == "per-file"
    assert args.verbose is True


def test_parse_rejects_unknown_mode():
    with pytest.raises(SystemExit):
        parse_args(["--mode", "turbo"])


def test_missing_dir_exits_nonzero(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        main([str(tmp_path / "nope"), "--mode", "bare"])
    assert exc.value.code == 1
    assert "Audio directory not found" in capsys.readouterr().err


def test_empty_dir_exits_nonzero_without_index(tmp_path):
    with pytest.raises(SystemExit) as exc:
        main([str(tmp_path), "--mode", "bare"])
    assert exc.value.code == 1
    assert not (tmp_path / "sprites" / "map.json").exists()


@patch("chordsprite.pipeline.build")
def test_main_passes_paths_through(mock_build, tmp_path, capsys):
    mock_build.return_value = BuildResult(
        mode="full",
        index={"48-Maj": IndexEntry("./audios/sprites/hard.mp3", 0.0, 1.2)},
        index_path=tmp_path / "map.json",
        sprites=[tmp_path / "hard.mp3"],
    )
    main([str(tmp_path), "--out", str(tmp_path / "s.mp3"), "--map", str(tmp_path / "map.json")])

    config = mock_build.call_args[0][0]
    assert config.audio_dir == tmp_path
    assert config.sprite_path == tmp_path / "s.mp3"
    assert config.index_path == tmp_path / "map.json"
    assert mock_build.call_args.kwargs["mode"] == "auto"
    out = capsys.readouterr().out
    assert "Mode: full" in out
    assert "1 entries" in out


@patch("chordsprite.modes.read_duration", return_value=1.0)
def test_degraded_run_exits_zero(mock_read, tmp_path):
    (tmp_path / "C3-Maj.mp3").write_bytes(b"\x00")
    main([str(tmp_path), "--mode", "bare"])
    assert (tmp_path / "sprites" / "map.json").exists()


@patch("chordsprite.sprites.normalize_clip", side_effect=subprocess.CalledProcessError(1, ["ffmpeg"]))
@patch("chordsprite.modes.get_duration", return_value=1.0)
def test_all_groups_failed_exits_zero(mock_duration, mock_norm, tmp_path, capsys):
    (tmp_path / "C3-Maj.mp3").write_bytes(b"\x00")
    main([str(tmp_path), "--mode", "full"])
    assert json.loads((tmp_path / "sprites" / "map.json").read_text()) == {}
    assert "Failed groups: easy, medium, hard" in capsys.readouterr().out
