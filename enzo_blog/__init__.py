"""Enzo blog: restricted markdown rendering and post storage."""

__version__ = "0.1.0"
