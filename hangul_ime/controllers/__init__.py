"""
Controller package exports.

This file exists to make controller modules discoverable to static analysis
and to provide a stable import surface.
"""

from .composing_controller import ComposingController, decode_key_event  # noqa: F401

__all__ = [
    "ComposingController",
    "decode_key_event",
]
