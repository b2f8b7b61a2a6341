"""Base classes for parser options.

Options are frozen dataclasses: a parser reads them once at construction and
they never change afterwards. Use ``create_updated`` to derive a variant.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)

    @classmethod
    def from_dict(cls, config: Mapping[str, Any]) -> Self:
        """Build options from a configuration mapping.

        Keys may use dashes or underscores (``max-nesting-depth`` and
        ``max_nesting_depth`` are the same field). Unknown keys are logged and
        ignored so a config file shared between versions keeps working.

        Parameters
        ----------
        config : Mapping[str, Any]
            Values loaded from a config file or assembled by the CLI

        Returns
        -------
        Self
            New options instance

        """
        known = {f.name for f in fields(cls)}  # type: ignore[arg-type]
        kwargs: dict[str, Any] = {}
        for key, value in config.items():
            name = str(key).replace("-", "_")
            if name in known:
                kwargs[name] = value
            else:
                logger.warning(f"Ignoring unknown option '{key}' for {cls.__name__}")
        return cls(**kwargs)


@dataclass(frozen=True)
class BaseParserOptions(CloneFrozenMixin):
    """Base class for all parser options.

    Notes
    -----
    Subclasses define format-specific parsing options as frozen dataclass fields
    and validate them in ``__post_init__``.

    """

    def __post_init__(self) -> None:
        """Validate option values; the base class has nothing to check."""
        pass
