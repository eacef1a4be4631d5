"""Tunebox - upload audio, stream it back with byte ranges, and play it."""

__version__ = "0.1.0"
