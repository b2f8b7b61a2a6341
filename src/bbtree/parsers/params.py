#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbtree/parsers/params.py
"""Parameter extraction for ``[tag=param]contents[/tag]`` rules.

A parameterized rule is an ordinary inline rule whose start token is
``[tag=`` and whose contents are always taken raw. Its emitter is the
synthetic ``emit_with_param`` below, which splits the span at the first ``]``
into the parameter and the contents before handing off to the user emitter.
When there is no ``]`` (or nothing before it) the rule declines and the text
is left as it was.
"""

from __future__ import annotations

import logging
import re
from dataclasses import replace
from typing import Any, Optional

from bbtree.constants import PARAM_PATTERN, PARAM_QUOTE_CHARS
from bbtree.rules.types import EmitResult, Emitter, MatchContext

logger = logging.getLogger(__name__)

_PARAM_RE = re.compile(PARAM_PATTERN, re.DOTALL)


def strip_quotes(value: str) -> str:
    """Remove one layer of matching surrounding quotes.

    Parameters
    ----------
    value : str
        Raw parameter text

    Returns
    -------
    str
        ``value`` without its outer ``"..."`` or ``'...'`` pair; unchanged
        when the first and last characters are not the same quote

    Examples
    --------
        >>> strip_quotes('"http://example.com"')
        'http://example.com'
        >>> strip_quotes("'half")
        "'half"

    """
    if len(value) >= 2 and value[0] in PARAM_QUOTE_CHARS and value[-1] == value[0]:
        return value[1:-1]
    return value


def split_param(span: str) -> Optional[tuple[str, str]]:
    """Split a parameterized span into ``(param, contents)``.

    Parameters
    ----------
    span : str
        Text between ``[tag=`` and ``[/tag]``, e.g. ``'"x.com"]click'``

    Returns
    -------
    tuple of (str, str) or None
        The unquoted parameter and the text after the first ``]``. ``None``
        if the span has no ``]`` or the parameter is empty after unquoting.

    """
    match = _PARAM_RE.match(span)
    if match is None:
        return None

    param = strip_quotes(match.group("param"))
    if not param:
        return None
    return param, match.group("contents")


def emit_with_param(span: str, context: MatchContext, target: Emitter, recursive: bool = True) -> EmitResult:
    """Synthetic emitter used by every parameterized rule.

    Parameters
    ----------
    span : str
        Raw text between the start and stop tokens
    context : MatchContext
        Context of the current match
    target : Emitter
        User emitter; called with the contents and a context whose ``param``
        holds the extracted parameter
    recursive : bool, default True
        Run the contents through inline processing before calling ``target``.
        When False the contents reach ``target`` as a raw string.

    Returns
    -------
    EmitResult
        Whatever ``target`` returns, or ``None`` when the parameter cannot be
        extracted

    """
    parts = split_param(span)
    if parts is None:
        logger.debug(f"Malformed parameter in {span[:40]!r}; leaving text as-is")
        return None

    param, contents = parts
    param_context = replace(context, param=param)

    body: Any = param_context.process_inline(contents) if recursive else contents
    return target(body, param_context)
