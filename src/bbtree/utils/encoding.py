#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbtree/utils/encoding.py
"""Decoding of BBCode input read from files, bytes or streams.

Forum exports are frequently not UTF-8, so raw bytes go through chardet
first and then a short list of fallback encodings.
"""

from __future__ import annotations

import logging
from typing import IO

import chardet

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_ENCODINGS = ("utf-8", "utf-8-sig", "latin-1")


def detect_encoding(data: bytes, sample_size: int = 8192, confidence_threshold: float = 0.7) -> str | None:
    """Guess the encoding of ``data`` with chardet.

    Parameters
    ----------
    data : bytes
        Raw input
    sample_size : int, default 8192
        Number of leading bytes handed to chardet
    confidence_threshold : float, default 0.7
        Minimum confidence (0.0-1.0) needed to trust the guess

    Returns
    -------
    str | None
        Encoding name, or None when chardet has no confident answer

    """
    if not data:
        return None

    result = chardet.detect(data[:sample_size])
    encoding = result.get("encoding") if result else None
    if not encoding:
        logger.debug("chardet: no encoding detected")
        return None

    confidence = result.get("confidence") or 0.0
    logger.debug(f"chardet detected encoding: {encoding} (confidence: {confidence:.2f})")
    if confidence < confidence_threshold:
        logger.debug(f"chardet confidence {confidence:.2f} below threshold {confidence_threshold}")
        return None
    return encoding


def read_text_with_encoding_detection(
    data: bytes,
    fallback_encodings: list[str] | None = None,
    use_chardet: bool = True,
) -> str:
    """Decode ``data`` to text.

    Tries the chardet guess first (when enabled), then each fallback encoding
    in order, and finally UTF-8 with replacement characters.

    Parameters
    ----------
    data : bytes
        Raw input
    fallback_encodings : list[str] | None, default None
        Encodings to try in order; defaults to utf-8, utf-8-sig, latin-1
    use_chardet : bool, default True
        Whether to consult chardet before the fallbacks

    Returns
    -------
    str
        Decoded text

    Examples
    --------
    >>> read_text_with_encoding_detection("[b]caf\\u00e9[/b]".encode("latin-1"))
    '[b]café[/b]'

    """
    candidates: list[str] = []
    if use_chardet:
        detected = detect_encoding(data)
        if detected:
            candidates.append(detected)
    candidates.extend(fallback_encodings if fallback_encodings is not None else DEFAULT_FALLBACK_ENCODINGS)

    for encoding in candidates:
        try:
            text = data.decode(encoding)
        except (UnicodeDecodeError, LookupError) as e:
            logger.debug(f"Failed to decode with {encoding}: {e}")
            continue
        logger.debug(f"Decoded input with encoding: {encoding}")
        return text

    logger.warning("All encoding attempts failed, using utf-8 with error replacement")
    return data.decode("utf-8", errors="replace")


def normalize_stream_to_text(stream: IO[bytes] | IO[str], use_chardet: bool = True) -> str:
    """Read a binary or text stream and return its contents as text.

    Raises
    ------
    TypeError
        If ``stream.read()`` returns neither bytes nor str

    """
    content = stream.read()
    if isinstance(content, bytes):
        return read_text_with_encoding_detection(content, use_chardet=use_chardet)
    if isinstance(content, str):
        return content
    raise TypeError(f"Stream read() returned unexpected type {type(content).__name__}. Expected bytes or str.")
