#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbtree/utils/__init__.py
"""Utility helpers for loading BBCode input."""

from bbtree.utils.encoding import detect_encoding, normalize_stream_to_text, read_text_with_encoding_detection

__all__ = [
    "detect_encoding",
    "normalize_stream_to_text",
    "read_text_with_encoding_detection",
]
