"""Tests for build configuration defaults and path helpers."""

from chordsprite.config import DEFAULT_GROUPS, BuildConfig


def test_defaults_under_sprites_dir(tmp_path):
    config = BuildConfig(audio_dir=tmp_path / "audios")
    assert config.sprite_path == tmp_path / "audios" / "sprites" / "part1.mp3"
    assert config.index_path == tmp_path / "audios" / "sprites" / "map.json"
    assert config.output_dir == tmp_path / "audios" / "sprites"
    assert config.groups == DEFAULT_GROUPS
    assert (config.sample_rate, config.channels) == (44100, 1)


def test_overrides(tmp_path):
    config = BuildConfig(
        audio_dir=str(tmp_path / "audios"),
        sprite_path=str(tmp_path / "build" / "out.mp3"),
        index_path=str(tmp_path / "build" / "index.json"),
    )
    assert config.audio_dir == tmp_path / "audios"
    assert config.output_dir == tmp_path / "build"
    assert config.index_path == tmp_path / "build" / "index.json"


def test_sprite_for_group(tmp_path):
    config = BuildConfig(audio_dir=tmp_path / "audios")
    easy = DEFAULT_GROUPS[0]
    assert config.sprite_for(easy) == tmp_path / "audios" / "sprites" / "easy.mp3"


def test_public_path_inside_audio_dir(tmp_path):
    config = BuildConfig(audio_dir=tmp_path / "audios")
    assert config.public_path(tmp_path / "audios" / "sprites" / "easy.mp3") == "./audios/sprites/easy.mp3"
    assert config.public_path(tmp_path / "audios" / "C3-Maj.mp3") == "./audios/C3-Maj.mp3"


def test_public_path_outside_project(tmp_path):
    config = BuildConfig(audio_dir=tmp_path / "app" / "audios")
    assert config.public_path(tmp_path / "elsewhere" / "easy.mp3") == "../elsewhere/easy.mp3"


def test_default_group_order():
    assert [g.name for g in DEFAULT_GROUPS] == ["easy", "medium", "hard"]
    assert DEFAULT_GROUPS[-1].qualities is None
