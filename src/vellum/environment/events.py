"""Lifecycle event dispatch for Vellum.

Events are plain notifications: listeners receive the payload in the order
it was fired and their return values are ignored. The Template executor
emits these names:

    f.template.prerender      (template)
    f.template.layout         (layout_path, template)
    f.template.renderlayout   (layout_path, template)
    f.template.rendered       (template)
    f.template.prepartial     (name, context, template)
    f.template.afterpartial   (template)

Example:
        >>> events = Events()
        >>> events.on("f.template.rendered", lambda t: print("done", t.path))
        >>> events.fire("f.template.rendered", template)
        done /srv/templates/page.py
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

PRERENDER = "f.template.prerender"
LAYOUT = "f.template.layout"
RENDERLAYOUT = "f.template.renderlayout"
RENDERED = "f.template.rendered"
PREPARTIAL = "f.template.prepartial"
AFTERPARTIAL = "f.template.afterpartial"


class Events:
    """Synchronous, ordered fan-out of named events to listeners.

    Thread-Safety:
        Listener tables are replaced, never mutated, so a listener added or
        removed while an event fires only affects later fires.
    """

    __slots__ = ("_listeners",)

    def __init__(self) -> None:
        self._listeners: dict[str, tuple[Callable[..., Any], ...]] = {}

    def on(self, event: str, listener: Callable[..., Any]) -> None:
        """Register ``listener`` to be called each time ``event`` fires."""
        if not callable(listener):
            raise TypeError(f"Listener for '{event}' must be callable")
        new = self._listeners.copy()
        new[event] = (*new.get(event, ()), listener)
        self._listeners = new

    def off(self, event: str, listener: Callable[..., Any] | None = None) -> None:
        """Remove one listener, or every listener when ``listener`` is None."""
        new = self._listeners.copy()
        if listener is None:
            new.pop(event, None)
        else:
            remaining = tuple(cb for cb in new.get(event, ()) if cb is not listener)
            if remaining:
                new[event] = remaining
            else:
                new.pop(event, None)
        self._listeners = new

    def has_listeners(self, event: str) -> bool:
        return bool(self._listeners.get(event))

    def fire(self, event: str, *payload: Any) -> None:
        """Call every listener of ``event`` with ``payload``, in registration order."""
        for listener in self._listeners.get(event, ()):
            listener(*payload)
