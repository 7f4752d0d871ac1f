"""Vellum Template — executes one template body for one render.

A Template is bound to a body file, the SectionStore of the current render,
the Engine (for resolution, recursion and events) and a Command (for helpers
and filters). The Engine builds a fresh Template per file per render; the
object is not shared between renders.

Architecture:
    ```
    Template
    ├── _path: str                  # Absolute path of the body
    ├── _sections: SectionStore     # Shared with layouts and partials
    ├── _engine: Engine             # find() / render() / fire()
    ├── _command: Command           # run() / filter()
    ├── _context: dict              # Data of the current render
    ├── _buffer: str                # Raw body output of the last render
    └── _layout: str | None         # Layout declared by the body
    ```

Render Pass:
    ```
    prerender → exec body into buf → [layout → engine.render(layout) → renderlayout] → rendered
    ```
The body writes through ``echo()`` into a list that is joined once at the
end (StringBuilder pattern). Section capture slices that list, so nothing
is buffered twice.

Dispatch:
Attribute access for a name the class does not define goes through an
explicit table: built-in operations, then alias-prefixed operations, then a
generic helper call through the Command:

    >>> template.escape("<b>")       # == command.run("escape", "<b>")
    '&lt;b&gt;'

Thread-Safety:
A Template holds per-render state (buffer, layout, open sections). It is
owned by exactly one render pass; concurrent renders each get their own
instance from the Engine.

"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping, Sequence
from contextlib import contextmanager
from contextvars import ContextVar
from pathlib import Path
from typing import TYPE_CHECKING, Any

from vellum.environment.events import (
    AFTERPARTIAL,
    LAYOUT,
    PRERENDER,
    PREPARTIAL,
    RENDERED,
    RENDERLAYOUT,
)
from vellum.environment.exceptions import (
    LayoutNotFoundError,
    SectionError,
    TemplateNotFoundError,
    TemplateRuntimeError,
)
from vellum.template.namespace import build_namespace
from vellum.template.operations import OPERATIONS
from vellum.template.sections import Section, SectionMode

if TYPE_CHECKING:
    import types

    from vellum.environment import Command, Engine
    from vellum.template.alias import Alias
    from vellum.template.sections import SectionStore

logger = logging.getLogger(__name__)

PIPELINE_SEPARATOR = "|"

# Body output of the template a layout is about to wrap. Taken (and cleared)
# by the next Template that starts rendering, i.e. the layout itself.
_wrapped_content: ContextVar[str | None] = ContextVar("vellum_wrapped_content", default=None)


@contextmanager
def wrapping(content: str) -> Iterator[None]:
    """Make ``content`` the ``last_buffer()`` of the next template to render."""
    token = _wrapped_content.set(content)
    try:
        yield
    finally:
        _wrapped_content.reset(token)


def take_wrapped_content() -> str | None:
    content = _wrapped_content.get()
    if content is not None:
        _wrapped_content.set(None)
    return content


class Template:
    """Executor for a single template body.

    Methods:
        render(context): Run the body (and its layout) and return the output
        layout(name): Declare the layout of the current render
        last_buffer(): Raw body output of the last render
        supply(key, default): Content of a finalized section
        insert(name, context): Render a partial
        insertif(name, context): Render a partial only if it exists
        filter(pipeline, value, args): Apply a ``|``-separated filter chain
        call(name, *args): Run a helper through the Command

    Example:
            >>> template = Template("/t/page.py", SectionStore(), engine, engine.command)
            >>> template.render({"title": "Home"})
            '<html><h1>Home</h1></html>'
            >>> template.last_buffer()
            '<h1>Home</h1>'

    """

    __slots__ = (
        "_alias",
        "_buf",  # Output list while the body executes, else None
        "_buffer",
        "_command",
        "_context",
        "_engine",
        "_layout",
        "_open_sections",  # Stack of (name, start index into _buf)
        "_path",
        "_sections",
    )

    def __init__(
        self,
        path: str | Path,
        sections: SectionStore,
        engine: Engine,
        command: Command,
        alias: Alias | None = None,
    ):
        self._path = str(path)
        self._sections = sections
        self._engine = engine
        self._command = command
        self._alias = alias
        self._context: dict[str, Any] = {}
        self._buffer = ""
        self._layout: str | None = None
        self._buf: list[str] | None = None
        self._open_sections: list[tuple[str, int]] = []

    def __repr__(self) -> str:
        return f"<Template {self._path}>"

    def __getattr__(self, name: str) -> Callable[..., Any]:
        # Only reached for names the class does not define
        if name.startswith("_"):
            raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")
        return self.resolve(name)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def path(self) -> str:
        return self._path

    @property
    def context(self) -> dict[str, Any]:
        return self._context

    @property
    def buffer(self) -> str:
        return self._buffer

    @property
    def layout_path(self) -> str | None:
        """Layout declared for the render in progress (cleared when it ends)."""
        return self._layout

    @property
    def alias(self) -> Alias | None:
        return self._alias

    def set_alias(self, alias: Alias | None) -> None:
        self._alias = alias

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def resolve(self, name: str) -> Callable[..., Any]:
        """Return the callable a body gets for ``this.<name>``."""
        if name in OPERATIONS:
            return getattr(self, name)
        if self._alias is not None:
            operation = self._alias.resolve(name)
            if operation is not None:
                return getattr(self, operation)

        def helper(*args: Any) -> Any:
            return self.call(name, *args)

        helper.__name__ = name
        return helper

    def call(self, name: str, *args: Any) -> Any:
        """Run helper ``name``; its result and errors pass through untouched."""
        return self._command.run(name, *args)

    def filter(
        self,
        pipeline: str,
        value: Any,
        args_per_stage: Sequence[Sequence[Any]] = (),
    ) -> Any:
        """Apply the ``|``-separated filter stages of ``pipeline`` to ``value``.

        Stage *i* receives ``args_per_stage[i]`` (or no arguments), where *i*
        counts every slot of the split, empty ones included. A stage
        returning None or an empty string declines: the value from the
        previous stage is kept.

        Example:
            >>> this.filter("trim|upper", "  hi ")
            'HI'
            >>> this.filter("truncate|upper", "hello world", [[5]])
            'HELLO...'
        """
        stages = [stage.strip() for stage in pipeline.split(PIPELINE_SEPARATOR)]
        stage_args = list(args_per_stage or ())
        result = value
        for index, stage in enumerate(stages):
            if not stage:
                continue
            # index is the position after the split, empty stages included
            args = stage_args[index] if index < len(stage_args) else []
            filtered = self._command.filter(stage, result, args)
            if filtered is None or (isinstance(filtered, str) and filtered == ""):
                continue
            result = filtered
        return result

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self, context: Mapping[str, Any] | None = None) -> str:
        """Render the body under ``context`` and, if declared, its layout.

        Returns the layout's output when the body declared one, else the
        body's own output. Either way the body's output stays available
        through ``last_buffer()``.

        A Template rendered outside ``Engine.render()`` opens the render
        context itself, on its own SectionStore, so the layouts and partials
        it renders through the Engine share that store.

        Events:
            prerender before the body runs; layout / renderlayout around the
            layout render; rendered last, after the whole layout chain.

        Raises:
            LayoutNotFoundError: If the body declares an unresolvable layout
            TemplateRuntimeError: If this Template is already rendering
        """
        from vellum.render_context import get_render_context, render_context

        if self._buf is not None:
            raise TemplateRuntimeError(
                "Template is already rendering",
                template_name=self._path,
                suggestion="Use insert() to render a template from inside itself",
            )
        if get_render_context() is not None:
            return self._render(context)
        with render_context(
            self._path,
            max_depth=self._engine.max_depth,
            sections=self._sections,
        ):
            return self._render(context)

    def _render(self, context: Mapping[str, Any] | None) -> str:
        self._context = dict(context or {})
        wrapped = take_wrapped_content()
        if wrapped is not None:
            # Rendering as a layout: last_buffer() is the child's body until ours is done
            self._buffer = wrapped
        self._engine.fire(PRERENDER, self)
        try:
            output = self._collect()
            layout = self._layout
            if layout:
                self._engine.fire(LAYOUT, layout, self)
                with wrapping(self._buffer):
                    output = self._engine.render(layout, self._context)
                self._engine.fire(RENDERLAYOUT, layout, self)
        finally:
            self._layout = None
        self._engine.fire(RENDERED, self)
        return output

    def _compile(self) -> types.CodeType:
        try:
            source = Path(self._path).read_text(encoding="utf-8")
        except OSError as e:
            raise TemplateNotFoundError(f"Template file '{self._path}' cannot be read: {e}") from e
        return compile(source, self._path, "exec")

    def _collect(self) -> str:
        """Execute the body, capturing everything it echoes into ``buffer``."""
        code = self._compile()
        buf: list[str] = []
        self._buf = buf
        self._open_sections = []
        try:
            exec(code, build_namespace(self, self._context))
            if self._open_sections:
                names = ", ".join(f"'{name}'" for name, _ in self._open_sections)
                raise SectionError(
                    f"Section {names} opened but never closed",
                    template_name=self._path,
                    suggestion="End every section() with stop(), append(), replace() or show()",
                )
        finally:
            self._buf = None
            self._open_sections = []
        self._buffer = "".join(buf)
        return self._buffer

    def _require_buffer(self, operation: str) -> list[str]:
        if self._buf is None:
            raise TemplateRuntimeError(
                f"{operation}() can only be used while the template body executes",
                template_name=self._path,
            )
        return self._buf

    def layout(self, name: str) -> None:
        """Declare the layout this render is wrapped in.

        Raises:
            LayoutNotFoundError: If ``name`` does not resolve to a file
        """
        path = self._engine.find(name)
        if not path:
            raise LayoutNotFoundError(name, self._path)
        logger.debug("%s uses layout %s", self._path, path)
        self._layout = path

    def last_buffer(self) -> str:
        return self._buffer

    def echo(self, *values: Any) -> None:
        """Write ``values`` to the output; None writes nothing."""
        buf = self._require_buffer("echo")
        buf.extend("" if value is None else str(value) for value in values)

    def data(self, key: str | None = None, default: Any = None) -> Any:
        """Return a copy of the context, or the value of one key."""
        if key is None:
            return dict(self._context)
        return self._context.get(key, default)

    # ------------------------------------------------------------------
    # Partials
    # ------------------------------------------------------------------

    def insert(self, name: str, context: Mapping[str, Any] | None = None) -> str:
        """Render partial ``name`` with ``context`` and return its output.

        No existence check: an unresolvable name fails the way
        ``Engine.render()`` fails. Use ``insertif()`` for optional partials.
        """
        context = {} if context is None else context
        self._engine.fire(PREPARTIAL, name, context, self)
        output = self._engine.render(name, context)
        self._engine.fire(AFTERPARTIAL, self)
        return output

    def insertif(self, name: str, context: Mapping[str, Any] | None = None) -> str:
        """Like ``insert()``, but an unresolvable partial renders as ``""``.

        In that case nothing else happens: no events, no render.
        """
        if not self._engine.find(name):
            logger.debug("Skipping missing partial %r in %s", name, self._path)
            return ""
        return self.insert(name, context)

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def supply(self, key: str, default: Any = None) -> Any:
        """Return the content of section ``key``, or a fallback.

        ``default`` may be a plain value, or a callable invoked as
        ``default(key, template)``. Without a default the fallback is ``""``.
        """
        if self._sections.has(key):
            return self._sections.get(key).content()
        if callable(default):
            return default(key, self)
        return "" if default is None else default

    def section(self, name: str) -> None:
        """Start capturing output into section ``name``."""
        buf = self._require_buffer("section")
        self._open_sections.append((name, len(buf)))

    def stop(self) -> None:
        """Finish the current section; earlier content for the key wins."""
        self._end_section(SectionMode.REPLACE, "stop")

    def replace(self) -> None:
        """Same as ``stop()``."""
        self._end_section(SectionMode.REPLACE, "replace")

    def append(self) -> None:
        """Finish the current section so a layout's content goes before it."""
        self._end_section(SectionMode.APPEND, "append")

    def show(self) -> None:
        """Finish the current section and output what the key now holds."""
        section = self._end_section(SectionMode.REPLACE, "show")
        self._require_buffer("show").append(section.content())

    def _end_section(self, mode: SectionMode, operation: str) -> Section:
        buf = self._require_buffer(operation)
        if not self._open_sections:
            raise SectionError(
                f"{operation}() called without an open section",
                template_name=self._path,
                suggestion="Call section(name) first",
            )
        name, start = self._open_sections.pop()
        content = "".join(buf[start:])
        del buf[start:]
        return self._sections.put(Section(name, content, mode))
