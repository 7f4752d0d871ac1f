"""Named content sections shared between a template and its layouts.

A body declares a section by capturing part of its own output:

    ```python
    this.section("sidebar")
    echo("<ul>...</ul>")
    this.stop()
    ```

The captured text is finalized into a ``Section`` and put into the
``SectionStore`` of the current render, where layouts read it back with
``this.supply("sidebar")``.

Merge Rules:
Children render before their layouts, so the first section put under a key
comes from the innermost template:

- existing section in REPLACE mode: it wins, later content is dropped
- existing section in APPEND mode: later content is placed before it and
  the result takes the later section's mode
"""

from __future__ import annotations

from enum import Enum

from vellum.environment.exceptions import SectionError


class SectionMode(Enum):
    """How a finalized section merges with content put later under its key."""

    REPLACE = "replace"
    APPEND = "append"


class Section:
    """A named block of captured template output."""

    __slots__ = ("_content", "mode", "name")

    def __init__(self, name: str, content: str = "", mode: SectionMode = SectionMode.REPLACE):
        self.name = name
        self.mode = mode
        self._content = content

    def content(self) -> str:
        return self._content

    def merge(self, later: Section) -> Section:
        """Combine with a section finalized after this one under the same key."""
        if self.mode is SectionMode.APPEND:
            return Section(self.name, later.content() + self._content, later.mode)
        return self

    def __repr__(self) -> str:
        return f"Section({self.name!r}, mode={self.mode.value})"


class SectionStore:
    """Finalized sections for one render, keyed by name.

    One store is shared by every template in a render (the page, its layouts
    and the partials they insert) and discarded when the outermost render
    returns.
    """

    __slots__ = ("_sections",)

    def __init__(self) -> None:
        self._sections: dict[str, Section] = {}

    def has(self, key: str) -> bool:
        return key in self._sections

    def get(self, key: str) -> Section:
        try:
            return self._sections[key]
        except KeyError:
            raise SectionError(
                f"Section '{key}' has not been declared",
                suggestion=f"Use supply('{key}', default) for optional sections",
            ) from None

    def put(self, section: Section) -> Section:
        """Store ``section`` applying the merge rules; return what is now stored."""
        existing = self._sections.get(section.name)
        stored = section if existing is None else existing.merge(section)
        self._sections[section.name] = stored
        return stored

    def names(self) -> list[str]:
        return list(self._sections)

    def __len__(self) -> int:
        return len(self._sections)
