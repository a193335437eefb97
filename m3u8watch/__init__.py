"""Keeps a live playlist url per tv channel."""
__version__ = "0.1.0"
