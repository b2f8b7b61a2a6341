#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/utils/test_encoding.py
"""Unit tests for encoding detection and decoding of BBCode input."""

from __future__ import annotations

from io import BytesIO, StringIO
from unittest.mock import patch

import pytest

from bbtree.utils.encoding import detect_encoding, normalize_stream_to_text, read_text_with_encoding_detection


@pytest.mark.unit
class TestDetectEncoding:
    """Test cases for detect_encoding function."""

    def test_detect_utf8(self):
        """Test detection of UTF-8 encoded text."""
        data = "[b]Hello[/b], world! 你好世界 [i]日本語のテキスト[/i]".encode("utf-8")
        encoding = detect_encoding(data)
        assert encoding is not None
        assert encoding.lower() in ["utf-8", "ascii"]

    def test_empty_data(self):
        """Empty input has no encoding."""
        assert detect_encoding(b"") is None

    def test_low_confidence(self):
        """Guesses below the threshold are discarded."""
        with patch("bbtree.utils.encoding.chardet.detect", return_value={"encoding": "koi8-r", "confidence": 0.2}):
            assert detect_encoding(b"abc") is None

    def test_no_guess(self):
        """chardet returning no encoding gives None."""
        with patch("bbtree.utils.encoding.chardet.detect", return_value={"encoding": None, "confidence": 0.0}):
            assert detect_encoding(b"\x00\x01") is None


@pytest.mark.unit
class TestReadTextWithEncodingDetection:
    """Test cases for read_text_with_encoding_detection."""

    def test_utf8(self):
        assert read_text_with_encoding_detection("[b]x[/b]".encode("utf-8")) == "[b]x[/b]"

    def test_latin1_fallback(self):
        """Invalid UTF-8 falls back to latin-1."""
        data = "[i]Café résumé[/i]".encode("latin-1")
        assert read_text_with_encoding_detection(data, use_chardet=False) == "[i]Café résumé[/i]"

    def test_custom_fallbacks(self):
        """Caller-supplied encodings are tried in order."""
        data = "привет".encode("cp1251")
        assert read_text_with_encoding_detection(data, fallback_encodings=["cp1251"], use_chardet=False) == "привет"

    def test_unknown_encoding_is_skipped(self):
        """An unknown encoding name moves on to the next candidate."""
        assert read_text_with_encoding_detection(b"abc", fallback_encodings=["no-such-codec", "ascii"]) == "abc"

    def test_replacement_when_everything_fails(self):
        """The last resort decodes with replacement characters."""
        text = read_text_with_encoding_detection(b"a\xffb", fallback_encodings=["ascii"], use_chardet=False)
        assert text == "a�b"


@pytest.mark.unit
class TestNormalizeStreamToText:
    """Test cases for normalize_stream_to_text."""

    def test_binary_stream(self):
        assert normalize_stream_to_text(BytesIO(b"[u]x[/u]")) == "[u]x[/u]"

    def test_text_stream(self):
        assert normalize_stream_to_text(StringIO("[u]x[/u]")) == "[u]x[/u]"

    def test_unexpected_type(self):
        """Streams returning something else are rejected."""

        class Odd:
            def read(self):
                return 42

        with pytest.raises(TypeError, match="unexpected type"):
            normalize_stream_to_text(Odd())  # type: ignore[arg-type]
