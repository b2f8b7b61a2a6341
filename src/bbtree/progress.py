#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbtree/progress.py
"""Progress callback system for BBCode parsing.

Embedders that parse large forum dumps can register a callback to follow
the block and inline passes of each document.

Examples
--------
    >>> from bbtree import to_ast
    >>> from bbtree.progress import ProgressEvent
    >>>
    >>> def handler(event: ProgressEvent) -> None:
    ...     print(event)
    >>>
    >>> doc = to_ast("[b]hello[/b]", progress_callback=handler)

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Literal

EventType = Literal["started", "item_done", "finished", "error"]


@dataclass
class ProgressEvent:
    """Progress event emitted while a document is parsed.

    Parameters
    ----------
    event_type : EventType
        Type of progress event:

        - "started": parsing has begun
        - "item_done": a pass has completed; ``metadata["item_type"]`` names it
          (``"loading"``, ``"blocks"``, ``"inline"``)
        - "finished": parsing completed
        - "error": something went wrong; details in ``metadata["error"]``

    message : str
        Human-readable description of the event
    current : int, default 0
        Current progress position
    total : int, default 0
        Total units of work. Set to 0 if unknown.
    metadata : dict, default empty
        Additional event-specific information

    """

    event_type: EventType
    message: str
    current: int = 0
    total: int = 0
    metadata: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        """Return human-readable string representation."""
        progress = f"({self.current}/{self.total})" if self.total > 0 else ""
        return f"[{self.event_type.upper()}] {self.message} {progress}".strip()


# Type alias for progress callback functions
ProgressCallback = Callable[[ProgressEvent], None]
