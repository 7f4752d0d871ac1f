"""The environment a template body executes in.

A body is ordinary Python. It runs with one dict as its globals, built fresh
for every render:

    ```python
    # page.py, rendered with {"title": "Home", "items": ["a", "b"]}
    this.layout("base")
    this.section("title")
    echo(title)
    this.stop()
    for item in items:
        echo("<li>", this.escape(item), "</li>")
    ```

Names available to the body:
    - every string key of the data context
    - ``this``: the Template executor (all operations and helpers)
    - ``echo``: write to the output buffer
    - the alias name, when the Engine has one
    - Python builtins

Reserved names are bound after the context, so a context key named ``this``
or ``echo`` is shadowed. The alias name (``T`` for ``Engine(alias="T")``) is
reserved the same way and shadows a context key of that name.
"""

from __future__ import annotations

import builtins
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from vellum.template.core import Template

RESERVED_NAMES = frozenset({"this", "echo", "__builtins__", "__file__", "__name__"})

# Read-only after module load; copied once per body execution.
STATIC_NAMESPACE: dict[str, Any] = {
    "__builtins__": builtins,
    "__name__": "__vellum_template__",
}


def build_namespace(template: Template, context: Mapping[str, Any]) -> dict[str, Any]:
    """Return the globals dict a body of ``template`` executes under."""
    namespace: dict[str, Any] = STATIC_NAMESPACE.copy()
    namespace.update(
        (key, value)
        for key, value in context.items()
        if isinstance(key, str) and key not in RESERVED_NAMES
    )
    namespace["__file__"] = template.path
    namespace["this"] = template
    namespace["echo"] = template.echo
    if template.alias is not None:
        template.alias.bind(namespace, template)
    return namespace
