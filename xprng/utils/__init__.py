"""Logging setup and golden-file recording."""
