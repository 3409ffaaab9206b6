"""Persisted, ordered playback queue exposed as an HTTP resource."""

__version__ = "0.1.0"
