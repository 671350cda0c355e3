"""Prune old release assets from GitHub releases."""

__version__ = "0.1.0"
