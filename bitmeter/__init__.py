"""Capture per-adapter network traffic counts into a compacting SQLite store."""

__version__ = "0.7.6.1"