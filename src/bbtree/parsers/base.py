#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbtree/parsers/base.py
"""Base class for markup parsers.

A parser turns one input document into a ``Document`` tree. The base class
holds the options and progress callback and provides the shared input loading
used by ``parse``.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Any, Optional, Union

from bbtree.ast import Document
from bbtree.exceptions import FileError, FileNotFoundError, InvalidOptionsError, ValidationError
from bbtree.options.base import BaseParserOptions
from bbtree.progress import ProgressCallback, ProgressEvent
from bbtree.utils.encoding import normalize_stream_to_text, read_text_with_encoding_detection

logger = logging.getLogger(__name__)

InputData = Union[str, Path, IO[bytes], IO[str], bytes]


class BaseParser(ABC):
    """Abstract base class for parsers producing a ``Document`` tree.

    Parameters
    ----------
    options : BaseParserOptions or None, default = None
        Parser options
    progress_callback : ProgressCallback or None, default = None
        Optional callback for progress updates during parsing

    Notes
    -----
    ``parse`` accepts:
    - str: file path if it names an existing file, otherwise markup text
    - Path: file path
    - IO[bytes] or IO[str]: file-like object
    - bytes: raw encoded markup

    """

    def __init__(self, options: BaseParserOptions | None = None, progress_callback: Optional[ProgressCallback] = None):
        self.options: BaseParserOptions | None = options
        self.progress_callback: Optional[ProgressCallback] = progress_callback

    @staticmethod
    def _validate_options_type(options: BaseParserOptions | None, expected_type: type, parser_name: str) -> None:
        """Validate that options are of the correct type for this parser.

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=parser_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @abstractmethod
    def parse(self, input_data: InputData) -> Document:
        """Load ``input_data`` and return its tree.

        Raises
        ------
        FileNotFoundError
            If a path is given that does not exist
        FileError
            If the file cannot be read
        ValidationError
            If the input type is not supported

        """
        raise NotImplementedError

    def _emit_progress(self, event_type: str, message: str, current: int = 0, total: int = 0, **metadata: Any) -> None:
        """Emit a progress event to the callback if one is registered.

        A callback that raises is logged and otherwise ignored, so a broken
        progress display never interrupts parsing.

        Examples
        --------
            >>> self._emit_progress("item_done", "Block pass done", current=2, total=3, item_type="blocks")

        """
        if not self.progress_callback:
            return

        try:
            event = ProgressEvent(
                event_type=event_type,  # type: ignore[arg-type]
                message=message,
                current=current,
                total=total,
                metadata=metadata,
            )
            self.progress_callback(event)
        except Exception as e:
            logger.warning(f"Progress callback raised exception: {e}", exc_info=True)

    @staticmethod
    def _read_path(path: Path) -> str:
        if not path.exists():
            raise FileNotFoundError(file_path=str(path))
        try:
            return read_text_with_encoding_detection(path.read_bytes())
        except OSError as e:
            raise FileError(f"Could not read file: {e}", file_path=str(path), original_error=e) from e

    @staticmethod
    def _load_text_content(input_data: InputData) -> str:
        """Load markup text from any supported input type.

        Parameters
        ----------
        input_data : str, Path, IO[bytes], IO[str], or bytes
            Input to load

        Returns
        -------
        str
            Markup text

        """
        if isinstance(input_data, bytes):
            return read_text_with_encoding_detection(input_data)
        elif isinstance(input_data, Path):
            return BaseParser._read_path(input_data)
        elif isinstance(input_data, str):
            # Path components are capped at 255 chars on Linux; longer strings
            # or strings with newlines are always markup
            if len(input_data) <= 260 and "\n" not in input_data:
                try:
                    path = Path(input_data)
                    if path.is_file():
                        return BaseParser._read_path(path)
                except OSError:
                    pass
            return input_data
        elif hasattr(input_data, "read"):
            return normalize_stream_to_text(input_data)
        else:
            raise ValidationError(
                f"Unsupported input type: {type(input_data).__name__}",
                parameter_name="input_data",
                parameter_value=input_data,
            )
