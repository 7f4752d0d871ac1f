"""Alias — a custom vocabulary for template operations.

An alias adds no capability; it only lets bodies be written with a branded
prefix:

    ```python
    engine = Engine("templates/", alias="T")

    # page.py
    echo(T.escape(title))           # the executor is bound as ``T``
    echo(this.Tinsert("nav"))       # same as this.insert("nav")
    ```
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from vellum.template.operations import OPERATIONS

if TYPE_CHECKING:
    from vellum.template.core import Template


class Alias:
    """Prefix under which the executor's built-in operations are also reachable."""

    __slots__ = ("_prefix",)

    def __init__(self, prefix: str):
        if not isinstance(prefix, str) or not prefix:
            raise ValueError("Alias prefix must be a non-empty string")
        self._prefix = prefix

    @property
    def prefix(self) -> str:
        return self._prefix

    def resolve(self, name: str) -> str | None:
        """Return the built-in operation ``name`` stands for, or None."""
        if not name.startswith(self._prefix):
            return None
        operation = name[len(self._prefix):]
        return operation if operation in OPERATIONS else None

    def bind(self, namespace: dict[str, Any], template: Template) -> None:
        """Expose ``template`` under the prefix inside a body namespace.

        Bound after the context, so it shadows a context key of the same name.
        """
        if self._prefix.isidentifier():
            namespace[self._prefix] = template

    def __repr__(self) -> str:
        return f"Alias({self._prefix!r})"
