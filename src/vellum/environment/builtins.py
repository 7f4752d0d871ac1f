"""Default helpers and filters registered on every Command.

Helpers are called from bodies by name (``this.escape(value)``), filters are
applied as pipeline stages (``this.filter("trim|upper", value)``).

Filters take the current value first, followed by the stage's arguments:

    >>> this.filter("truncate|upper", "hello world", [[5]])
    'HELLO...'

A filter that has nothing to do returns ``None``; the pipeline then keeps
the previous value.
"""

from __future__ import annotations

import html
from collections.abc import Callable, Iterable
from typing import Any

# =============================================================================
# Helpers
# =============================================================================


def escape(value: Any) -> str:
    """HTML-escape ``value`` after converting it to text."""
    if value is None:
        return ""
    return html.escape(str(value), quote=True)


def raw(value: Any) -> str:
    """Convert ``value`` to text without escaping."""
    if value is None:
        return ""
    return str(value)


DEFAULT_HELPERS: dict[str, Callable[..., Any]] = {
    "escape": escape,
    "e": escape,
    "raw": raw,
    "v": raw,
}


# =============================================================================
# Filters
# =============================================================================


def _first(value: Any) -> Any:
    if isinstance(value, str):
        return value[:1] or None
    if isinstance(value, Iterable):
        return next(iter(value), None)
    return None


def _last(value: Any) -> Any:
    if isinstance(value, str):
        return value[-1:] or None
    if isinstance(value, (list, tuple)):
        return value[-1] if value else None
    if isinstance(value, Iterable):
        item = None
        for item in value:
            pass
        return item
    return None


def _join(value: Any, separator: str = "") -> str:
    if isinstance(value, str):
        return value
    return separator.join(str(item) for item in value)


def _default(value: Any, fallback: Any = "") -> Any:
    return fallback if value is None or value == "" else value


def _length(value: Any) -> int:
    try:
        return len(value)
    except TypeError:
        return 0


def _truncate(value: Any, length: int = 255, end: str = "...") -> str:
    text = str(value)
    if len(text) <= length:
        return text
    return text[:length] + end


DEFAULT_FILTERS: dict[str, Callable[..., Any]] = {
    "escape": escape,
    "e": escape,
    "upper": lambda value: str(value).upper(),
    "lower": lambda value: str(value).lower(),
    "trim": lambda value, chars=None: str(value).strip(chars),
    "title": lambda value: str(value).title(),
    "first": _first,
    "last": _last,
    "join": _join,
    "default": _default,
    "length": _length,
    "truncate": _truncate,
}
