"""Preprocessors that can claim appended URLs and expand them in the background."""

from playqueue.infrastructure.preprocessors.expanding import ExpandingPreprocessor
from playqueue.infrastructure.preprocessors.m3u_playlist import M3UPlaylistPreprocessor, parse_playlist

__all__ = ["ExpandingPreprocessor", "M3UPlaylistPreprocessor", "parse_playlist"]
