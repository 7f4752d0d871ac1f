"""Vellum Environment — the engine and the collaborators it wires together.

Re-exports the public surface so callers can write
``from vellum.environment import Engine, Command``.

"""

from vellum.environment.commands import Command
from vellum.environment.core import Engine
from vellum.environment.events import (
    AFTERPARTIAL,
    LAYOUT,
    PREPARTIAL,
    PRERENDER,
    RENDERED,
    RENDERLAYOUT,
    Events,
)
from vellum.environment.exceptions import (
    ErrorCode,
    LayoutNotFoundError,
    SectionError,
    TemplateError,
    TemplateNotFoundError,
    TemplateRuntimeError,
    UnknownFilterError,
    UnknownHelperError,
)
from vellum.environment.loaders import FileSystemFinder
from vellum.environment.registry import FunctionRegistry

__all__ = [
    "AFTERPARTIAL",
    "LAYOUT",
    "PREPARTIAL",
    "PRERENDER",
    "RENDERED",
    "RENDERLAYOUT",
    "Command",
    "Engine",
    "ErrorCode",
    "Events",
    "FileSystemFinder",
    "FunctionRegistry",
    "LayoutNotFoundError",
    "SectionError",
    "TemplateError",
    "TemplateNotFoundError",
    "TemplateRuntimeError",
    "UnknownFilterError",
    "UnknownHelperError",
]
