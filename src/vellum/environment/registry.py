"""Helper and filter registry for Vellum.

Provides a dict-like interface over a name -> callable table.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping


class FunctionRegistry:
    """Dict-like table of named callables.

    Supports:
        - registry['name'] = func
        - registry.update({'name': func})
        - func = registry['name']
        - 'name' in registry

    All mutations use copy-on-write: a render that already grabbed the
    table keeps seeing the version it started with.
    """

    __slots__ = ("_funcs", "_kind")

    def __init__(self, kind: str, funcs: Mapping[str, Callable] | None = None):
        self._kind = kind
        self._funcs: dict[str, Callable] = dict(funcs or {})

    def __getitem__(self, name: str) -> Callable:
        return self._funcs[name]

    def __setitem__(self, name: str, func: Callable) -> None:
        if not callable(func):
            raise TypeError(f"{self._kind} '{name}' must be callable, got {type(func).__name__}")
        new = self._funcs.copy()
        new[name] = func
        self._funcs = new

    def __delitem__(self, name: str) -> None:
        new = self._funcs.copy()
        del new[name]
        self._funcs = new

    def __contains__(self, name: object) -> bool:
        return name in self._funcs

    def __iter__(self) -> Iterator[str]:
        return iter(self._funcs)

    def __len__(self) -> int:
        return len(self._funcs)

    def __repr__(self) -> str:
        return f"<FunctionRegistry {self._kind}: {', '.join(sorted(self._funcs))}>"

    def get(self, name: str, default: Callable | None = None) -> Callable | None:
        return self._funcs.get(name, default)

    def update(self, mapping: Mapping[str, Callable]) -> None:
        """Batch register callables."""
        for name, func in mapping.items():
            if not callable(func):
                raise TypeError(
                    f"{self._kind} '{name}' must be callable, got {type(func).__name__}"
                )
        new = self._funcs.copy()
        new.update(mapping)
        self._funcs = new

    def copy(self) -> dict[str, Callable]:
        """Return a copy of the underlying dict."""
        return self._funcs.copy()

    def keys(self):
        return self._funcs.keys()

    def values(self):
        return self._funcs.values()

    def items(self):
        return self._funcs.items()
