"""Names of the built-in Template operations.

Looked up by ``Template.resolve()`` before falling back to helpers, and by
``Alias.resolve()`` for prefixed names (``Tinsert`` -> ``insert``).
"""

from __future__ import annotations

OPERATIONS = frozenset(
    {
        "append",
        "call",
        "data",
        "echo",
        "filter",
        "insert",
        "insertif",
        "last_buffer",
        "layout",
        "render",
        "replace",
        "section",
        "show",
        "stop",
        "supply",
    }
)
