"""Test doubles and file helpers shared by the Vellum test suite."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Any

from vellum import SectionStore, Template


class RecordingEngine:
    """Stand-in Engine that records every call the executor makes.

    ``paths`` maps names to what ``find()`` returns. ``render()`` executes
    real body files (so layouts work) and otherwise returns ``outputs[name]``.
    """

    def __init__(self, paths: dict[str, str] | None = None, outputs: dict[str, str] | None = None):
        self.paths = dict(paths or {})
        self.outputs = dict(outputs or {})
        self.fired: list[tuple[Any, ...]] = []
        self.finds: list[str] = []
        self.renders: list[tuple[str, Any]] = []
        self.command = RecordingCommand()
        self.sections = SectionStore()
        self.max_depth = 50

    def find(self, name: str) -> str | None:
        self.finds.append(name)
        return self.paths.get(name)

    def render(self, name: str, context: Any = None) -> str:
        self.renders.append((name, context))
        if Path(name).is_file():
            return Template(name, self.sections, self, self.command).render(context)
        return self.outputs.get(name, "")

    def fire(self, event: str, *payload: Any) -> None:
        self.fired.append((event, *payload))

    def event_names(self) -> list[str]:
        return [event[0] for event in self.fired]


class RecordingCommand:
    """Stand-in Command with scripted results and a call log."""

    def __init__(
        self,
        run_results: dict[str, Any] | None = None,
        filter_results: list[Any] | None = None,
    ):
        self.run_results = dict(run_results or {})
        self.filter_results = list(filter_results or [])
        self.runs: list[tuple[Any, ...]] = []
        self.filters: list[tuple[str, Any, Any]] = []

    def run(self, name: str, *args: Any) -> Any:
        self.runs.append((name, *args))
        return self.run_results.get(name)

    def filter(self, name: str, value: Any, args: Any) -> Any:
        self.filters.append((name, value, args))
        return self.filter_results.pop(0) if self.filter_results else None


class FakeSection:
    def __init__(self, content: str):
        self._content = content
        self.content_calls = 0

    def content(self) -> str:
        self.content_calls += 1
        return self._content


class FakeSectionStore:
    """Section store whose contents are fixed up front."""

    def __init__(self, sections: dict[str, str] | None = None):
        self._sections = {key: FakeSection(value) for key, value in (sections or {}).items()}
        self.has_calls: list[str] = []
        self.get_calls: list[str] = []

    def has(self, key: str) -> bool:
        self.has_calls.append(key)
        return key in self._sections

    def get(self, key: str) -> FakeSection:
        self.get_calls.append(key)
        return self._sections[key]


def write_templates(folder: Path, **templates: str) -> None:
    """Write dedented body files ``<name>.py`` into ``folder``."""
    for name, source in templates.items():
        path = folder / f"{name}.py"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(source).strip() + "\n", encoding="utf-8")
