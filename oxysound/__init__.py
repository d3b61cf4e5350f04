"""Compose shareable YouTube playlist URLs and keep playlists on disk."""

__version__ = "0.1.0"
