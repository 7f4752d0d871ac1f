"""Template finders for Vellum.

A finder maps a logical template name to the absolute path of a body file.
Unlike a loader it never reads the file: the Template executor compiles the
body itself. ``find(name)`` returns ``None`` when nothing matches, so callers
decide whether a miss is fatal (``layout()``, ``Engine.render()``) or
harmless (``insertif()``).

Name Forms:
    - ``"page"``            searched in every folder, trying each extension
    - ``"page.py"``         exact file name, searched in every folder
    - ``"admin::users"``    only searched in the folder registered as ``admin``
    - ``"/abs/page.py"``    an existing absolute path is returned as-is

Custom Finders:
Implement the finder protocol:
    ```python
    class BundleFinder:
        def find(self, name: str) -> str | None:
            path = bundle_root / f"{name}.py"
            return str(path) if path.is_file() else None
    ```

"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path

logger = logging.getLogger(__name__)

NAMESPACE_SEPARATOR = "::"


class FileSystemFinder:
    """Resolve template names against filesystem directories.

    Searches one or more directories for templates by name. The first matching
    file is returned.

    Search Order:
        Directories are searched in order. First match wins:
            ```python
            finder = FileSystemFinder(["themes/custom/", "themes/default/"])
            # Looks in themes/custom/ first, then themes/default/
            ```

    Named Folders:
        A mapping registers folders under a name as well as in the search
        order:
            ```python
            finder = FileSystemFinder({"site": "templates/", "admin": "admin/"})
            finder.find("admin::users")   # only admin/ is searched
            finder.find("users")          # templates/ then admin/
            ```

    Example:
            >>> finder = FileSystemFinder("templates/")
            >>> finder.find("pages/about")
            '/srv/app/templates/pages/about.py'
            >>> finder.find("missing") is None
            True

    """

    __slots__ = ("_extensions", "_named", "_paths")

    def __init__(
        self,
        paths: str | Path | Sequence[str | Path] | Mapping[str, str | Path],
        extensions: Sequence[str] = (".py",),
    ):
        named: dict[str, Path] = {}
        if isinstance(paths, (str, Path)):
            folders = [Path(paths)]
        elif isinstance(paths, Mapping):
            named = {key: Path(value).resolve() for key, value in paths.items()}
            folders = list(named.values())
        else:
            folders = [Path(p) for p in paths]
        self._paths = [p.resolve() for p in folders]
        self._named = named
        self._extensions = tuple(
            ext if ext.startswith(".") else f".{ext}" for ext in extensions
        )

    @property
    def paths(self) -> list[Path]:
        return list(self._paths)

    @property
    def extensions(self) -> tuple[str, ...]:
        return self._extensions

    def add_path(self, path: str | Path, name: str | None = None, *, prepend: bool = False) -> None:
        """Register another search folder, optionally under a name."""
        folder = Path(path).resolve()
        if prepend:
            self._paths.insert(0, folder)
        else:
            self._paths.append(folder)
        if name:
            self._named[name] = folder

    def find(self, name: str) -> str | None:
        """Return the absolute path ``name`` refers to, or None."""
        if not name:
            return None

        candidate = Path(name)
        if candidate.is_absolute():
            return str(candidate) if candidate.is_file() else None

        folders = self._paths
        if NAMESPACE_SEPARATOR in name:
            folder_name, name = name.split(NAMESPACE_SEPARATOR, 1)
            folder = self._named.get(folder_name)
            if folder is None:
                logger.debug("No template folder registered as %r", folder_name)
                return None
            folders = [folder]

        for base in folders:
            found = self._find_in(base, name)
            if found is not None:
                return found

        logger.debug("Template %r not found in: %s", name, ", ".join(map(str, folders)))
        return None

    def _find_in(self, base: Path, name: str) -> str | None:
        for filename in (name, *(name + ext for ext in self._extensions)):
            path = (base / filename).resolve()
            # Keep lookups inside the folder ("../secret.py" must not resolve)
            if not path.is_relative_to(base):
                return None
            if path.is_file():
                return str(path)
        return None

    def list_templates(self) -> list[str]:
        """List all template names in search paths."""
        templates: set[str] = set()
        for base in self._paths:
            if not base.is_dir():
                continue
            for ext in self._extensions:
                for path in base.rglob(f"*{ext}"):
                    templates.add(path.relative_to(base).as_posix())
        return sorted(templates)
