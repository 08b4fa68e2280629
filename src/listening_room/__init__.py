"""Listening room playback core."""

__version__ = "0.1.0"
