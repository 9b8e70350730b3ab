"""Hangul syllable composition engine for soft keyboards."""

__version__ = "0.1.0"
