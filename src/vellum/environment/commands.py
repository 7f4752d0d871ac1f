"""Command dispatcher: executes named helpers and named filter stages.

The Template executor never calls helper or filter functions itself; it goes
through a Command so that the lookup tables can be swapped or extended per
Engine.

Failure semantics belong here. Unknown names raise ``UnknownHelperError`` /
``UnknownFilterError``; exceptions raised by the functions themselves
propagate unwrapped.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from vellum.environment.builtins import DEFAULT_FILTERS, DEFAULT_HELPERS
from vellum.environment.exceptions import UnknownFilterError, UnknownHelperError
from vellum.environment.registry import FunctionRegistry

logger = logging.getLogger(__name__)


class Command:
    """Dispatch helpers and filters by name.

    Example:
            >>> command = Command()
            >>> command.helpers["greet"] = lambda name: f"Hello, {name}!"
            >>> command.run("greet", "World")
            'Hello, World!'
            >>> command.filter("upper", "abc", [])
            'ABC'
    """

    __slots__ = ("_filters", "_helpers")

    def __init__(
        self,
        helpers: Mapping[str, Callable] | None = None,
        filters: Mapping[str, Callable] | None = None,
        *,
        defaults: bool = True,
    ):
        self._helpers = FunctionRegistry("helper", DEFAULT_HELPERS if defaults else None)
        self._filters = FunctionRegistry("filter", DEFAULT_FILTERS if defaults else None)
        if helpers:
            self._helpers.update(helpers)
        if filters:
            self._filters.update(filters)

    @property
    def helpers(self) -> FunctionRegistry:
        return self._helpers

    @property
    def filters(self) -> FunctionRegistry:
        return self._filters

    def run(self, name: str, *args: Any) -> Any:
        """Execute helper ``name`` with positional ``args``."""
        func = self._helpers.get(name)
        if func is None:
            logger.debug("Helper %r is not registered", name)
            raise UnknownHelperError(name, tuple(self._helpers.keys()))
        return func(*args)

    def filter(self, name: str, value: Any, args: Sequence[Any] = ()) -> Any:
        """Apply filter ``name`` to ``value`` with the stage arguments."""
        func = self._filters.get(name)
        if func is None:
            logger.debug("Filter %r is not registered", name)
            raise UnknownFilterError(name, tuple(self._filters.keys()))
        return func(value, *args)
