"""Vellum Engine — resolves, renders and announces templates.

The Engine is the entry point applications hold on to. It owns the
configuration (search folders, extensions, alias, depth limit) and the three
collaborators every Template executor talks to:

    ```
    Engine
    ├── _finder: FileSystemFinder   # name -> absolute path
    ├── _command: Command           # helpers and filters
    └── _events: Events             # lifecycle listeners
    ```

Each ``render()`` builds a new Template for the resolved file. The outermost
call also opens a RenderContext holding a fresh SectionStore; layouts and
partials rendered from inside it share that store, so a page's sections
reach its layout and nothing leaks into the next render.

Example:
        >>> engine = Engine("templates/")
        >>> engine.register_filter("shout", lambda value: f"{value}!")
        >>> engine.render("page", {"title": "Home"})
        '<html><h1>Home</h1></html>'

"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from typing import Any

from vellum.environment.commands import Command
from vellum.environment.events import Events
from vellum.environment.exceptions import TemplateNotFoundError, did_you_mean
from vellum.environment.loaders import FileSystemFinder
from vellum.environment.registry import FunctionRegistry
from vellum.render_context import child_render_context, get_render_context, render_context
from vellum.template.alias import Alias
from vellum.template.core import Template
from vellum.template.sections import SectionStore

logger = logging.getLogger(__name__)


class Engine:
    """Template engine configuration plus the collaborators of every render.

    Args:
        paths: Folders to search (a mapping names them for ``name::page`` lookups)
        extensions: Extensions tried after the bare name
        alias: Prefix (or Alias) giving bodies a custom vocabulary
        max_depth: Maximum layout/partial nesting per render
        command: Helper/filter dispatcher (default: built-ins)
        events: Listener registry (default: empty)
        finder: Replaces the FileSystemFinder built from ``paths``

    Thread-Safety:
        Renders keep their state in Template instances and a ContextVar;
        helper, filter and listener tables are copy-on-write.
    """

    __slots__ = ("_alias", "_command", "_events", "_finder", "_max_depth")

    def __init__(
        self,
        paths: str | Path | Sequence[str | Path] | Mapping[str, str | Path] = (),
        *,
        extensions: Sequence[str] = (".py",),
        alias: str | Alias | None = None,
        max_depth: int = 50,
        command: Command | None = None,
        events: Events | None = None,
        finder: Any = None,
    ):
        if max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {max_depth}")
        self._finder = finder if finder is not None else FileSystemFinder(paths, extensions)
        self._command = command if command is not None else Command()
        self._events = events if events is not None else Events()
        self._alias = Alias(alias) if isinstance(alias, str) else alias
        self._max_depth = max_depth

    @property
    def finder(self) -> Any:
        return self._finder

    @property
    def command(self) -> Command:
        return self._command

    @property
    def events(self) -> Events:
        return self._events

    @property
    def alias(self) -> Alias | None:
        return self._alias

    @property
    def max_depth(self) -> int:
        return self._max_depth

    @property
    def helpers(self) -> FunctionRegistry:
        return self._command.helpers

    @property
    def filters(self) -> FunctionRegistry:
        return self._command.filters

    def register_helper(self, name: str, func: Callable[..., Any]) -> None:
        self._command.helpers[name] = func

    def register_filter(self, name: str, func: Callable[..., Any]) -> None:
        self._command.filters[name] = func

    def on(self, event: str, listener: Callable[..., Any]) -> None:
        """Register a lifecycle listener (see ``vellum.environment.events``)."""
        self._events.on(event, listener)

    def fire(self, event: str, *payload: Any) -> None:
        self._events.fire(event, *payload)

    def find(self, name: str) -> str | None:
        """Resolve ``name`` to an absolute path, or None."""
        return self._finder.find(name)

    def render(self, name: str, context: Mapping[str, Any] | None = None) -> str:
        """Render the template ``name`` (or absolute path) with ``context``.

        Raises:
            TemplateNotFoundError: If ``name`` does not resolve
            TemplateRuntimeError: If the nesting depth limit is reached
        """
        path = self.find(name)
        if not path:
            raise TemplateNotFoundError(self._not_found_message(name))

        if get_render_context() is None:
            logger.debug("Rendering %s", path)
            with render_context(path, max_depth=self._max_depth) as ctx:
                return self.make_template(path, ctx.sections).render(context)

        with child_render_context(path) as ctx:
            return self.make_template(path, ctx.sections).render(context)

    def make_template(self, path: str, sections: SectionStore) -> Template:
        """Build the executor for one file of one render."""
        return Template(path, sections, self, self._command, alias=self._alias)

    def _not_found_message(self, name: str) -> str:
        msg = f"Template '{name}' not found"
        list_templates = getattr(self._finder, "list_templates", None)
        if list_templates is not None:
            available = list_templates()
            match = did_you_mean(name, available)
            if match:
                return f"{msg}. Did you mean '{match}'?"
        paths = getattr(self._finder, "paths", None)
        if paths:
            msg += f" in: {', '.join(str(p) for p in paths)}"
        return msg
