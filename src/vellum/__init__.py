"""Vellum — a template engine whose templates are plain Python.

A template body is a Python script. It writes output with ``echo()``, reads
its data as ordinary names and reaches the engine through ``this``:

    ```python
    # templates/page.py
    this.layout("base")
    this.section("title")
    echo(title)
    this.stop()
    echo("<p>", this.filter("trim|escape", intro), "</p>")

    # templates/base.py
    echo("<html><title>", this.supply("title", "Untitled"), "</title>")
    echo("<body>", this.last_buffer(), "</body></html>")
    ```

Quickstart:
    >>> from vellum import Engine
    >>> engine = Engine("templates/")
    >>> engine.render("page", {"title": "Home", "intro": " <hi> "})
    '<html><title>Home</title><body><p>&lt;hi&gt;</p></body></html>'

Architecture:
Engine.render(name) → Finder → Template(path) → exec body → [layout → Engine.render(layout)]

Each file of each render gets its own Template executor; sections declared
by a page are shared with its layouts and partials through the render's
SectionStore and discarded afterwards.

Lifecycle Events:
``f.template.prerender``, ``f.template.layout``, ``f.template.renderlayout``,
``f.template.rendered``, ``f.template.prepartial``, ``f.template.afterpartial``
are fired through the Engine; see ``vellum.environment.events``.

"""

from vellum.environment import (
    Command,
    Engine,
    ErrorCode,
    Events,
    FileSystemFinder,
    FunctionRegistry,
    LayoutNotFoundError,
    SectionError,
    TemplateError,
    TemplateNotFoundError,
    TemplateRuntimeError,
    UnknownFilterError,
    UnknownHelperError,
)
from vellum.render_context import RenderContext, get_render_context, render_context
from vellum.template import Alias, Section, SectionMode, SectionStore, Template

__version__ = "0.1.0"

__all__ = [
    "Alias",
    "Command",
    "Engine",
    "ErrorCode",
    "Events",
    "FileSystemFinder",
    "FunctionRegistry",
    "LayoutNotFoundError",
    "RenderContext",
    "Section",
    "SectionError",
    "SectionMode",
    "SectionStore",
    "Template",
    "TemplateError",
    "TemplateNotFoundError",
    "TemplateRuntimeError",
    "UnknownFilterError",
    "UnknownHelperError",
    "get_render_context",
    "render_context",
]
