"""chordsprite — pack per-chord audio clips into sprites for the ear-training app."""

from chordsprite.config import BuildConfig
from chordsprite.pipeline import build

__all__ = ["BuildConfig", "build"]
