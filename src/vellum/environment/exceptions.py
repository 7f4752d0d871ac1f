"""Exceptions for Vellum template system.

Exception Hierarchy:
TemplateError (base)
├── TemplateNotFoundError     # Name does not resolve to a template file
│   └── LayoutNotFoundError   # layout() name does not resolve (also ValueError)
└── TemplateRuntimeError      # Render-time error with context
    ├── UnknownHelperError    # Helper name not registered
    ├── UnknownFilterError    # Filter stage name not registered
    └── SectionError          # Unbalanced section()/stop() calls

Errors raised by helpers, filters or the body itself are NOT wrapped: they
propagate to whoever called the top-level render unchanged.

Example:
    ```
    V-RUN-002: Unknown helper 'uper'. Did you mean 'upper'?
      Location: /srv/templates/page.py
      Docs: https://vellum.readthedocs.io/en/latest/errors.html#v-run-002
    ```

"""

from __future__ import annotations

from difflib import get_close_matches
from enum import Enum

# ---------------------------------------------------------------------------
# Error codes
# ---------------------------------------------------------------------------

_VELLUM_DOCS_BASE = "https://vellum.readthedocs.io/en/latest/errors.html"


class ErrorCode(Enum):
    """Searchable error codes for Vellum template errors.

    Format: V-{CATEGORY}-{NUMBER}
    Categories: RUN (runtime), TPL (template resolution)
    """

    # Runtime errors (V-RUN-xxx)
    UNKNOWN_HELPER = "V-RUN-002"
    UNKNOWN_FILTER = "V-RUN-003"
    SECTION_ERROR = "V-RUN-004"
    RENDER_DEPTH = "V-RUN-006"
    RUNTIME_ERROR = "V-RUN-007"

    # Template resolution errors (V-TPL-xxx)
    TEMPLATE_NOT_FOUND = "V-TPL-001"
    LAYOUT_NOT_FOUND = "V-TPL-002"

    @property
    def docs_url(self) -> str:
        """Documentation URL for this error code."""
        return f"{_VELLUM_DOCS_BASE}#{self.value.lower()}"

    @property
    def category(self) -> str:
        """Error category (e.g., 'runtime', 'template')."""
        prefix = self.value.split("-")[1]
        return {
            "RUN": "runtime",
            "TPL": "template",
        }.get(prefix, "unknown")


def format_template_stack(stack: list[str] | None) -> str:
    """Format the chain of template paths that led to an error.

    Example:
        >>> print(format_template_stack(["/t/page.py", "/t/layout.py"]))
        Template stack:
          • /t/page.py
          • /t/layout.py
    """
    if not stack:
        return ""
    lines = ["Template stack:"]
    lines.extend(f"  • {path}" for path in stack)
    return "\n".join(lines)


def did_you_mean(name: str, candidates: list[str] | tuple[str, ...]) -> str | None:
    """Return the closest registered name to ``name``, if any is close enough."""
    matches = get_close_matches(name, sorted(candidates), n=1, cutoff=0.6)
    return matches[0] if matches else None


class TemplateError(Exception):
    """Base exception for all Vellum template errors.

    All template-related exceptions inherit from this class, enabling
    broad exception handling:

        >>> try:
        ...     engine.render("page")
        ... except TemplateError as e:
        ...     log.error("Template error: %s", e)

    Attributes:
        code: Optional ErrorCode for searchable, documentable error identification.
    """

    code: ErrorCode | None = None

    def format_compact(self) -> str:
        """Format error as a short diagnostic: code, message and docs URL."""
        header = str(self)
        if self.code and self.code.value not in header:
            header = f"{self.code.value}: {header}"
        parts = [header]
        if self.code:
            parts.append(f"  Docs: {self.code.docs_url}")
        return "\n".join(parts)


class TemplateNotFoundError(TemplateError):
    """A logical template name could not be resolved to a file.

    Raised by ``Engine.render()`` when the finder returns nothing. Note that
    ``Template.insertif()`` checks resolution first and never triggers this.
    """

    code: ErrorCode | None = ErrorCode.TEMPLATE_NOT_FOUND


class LayoutNotFoundError(TemplateNotFoundError, ValueError):
    """``layout(name)`` was called with a name that does not resolve.

    Subclasses ``ValueError`` because this is an invalid argument: it aborts
    the current render and is never recovered inside the render pass.
    """

    code: ErrorCode | None = ErrorCode.LAYOUT_NOT_FOUND

    def __init__(self, name: str, template_name: str | None = None):
        self.name = name
        self.template_name = template_name
        msg = f"Layout '{name}' could not be resolved to a template file"
        if template_name:
            msg += f" (declared in {template_name})"
        super().__init__(msg)


class TemplateRuntimeError(TemplateError):
    """Render-time error with debugging context.

    Output Format:
            ```
            Runtime Error: Maximum render depth exceeded (50) when rendering 'nav'
              Location: /t/nav.py
              Template stack:
                • /t/page.py
                • /t/nav.py
              Suggestion: Check for templates that insert each other: A → B → A
            ```

    Attributes:
        message: Error description
        template_name: Path or name of the template being rendered
        suggestion: Actionable fix suggestion
        template_stack: Chain of template paths leading to the error
    """

    code: ErrorCode | None = ErrorCode.RUNTIME_ERROR

    def __init__(
        self,
        message: str,
        *,
        template_name: str | None = None,
        suggestion: str | None = None,
        template_stack: list[str] | None = None,
        code: ErrorCode | None = None,
    ):
        self.message = message
        self.template_name = template_name
        self.suggestion = suggestion
        self.template_stack = template_stack or []
        if code is not None:
            self.code = code
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [f"Runtime Error: {self.message}"]
        if self.template_name:
            parts.append(f"  Location: {self.template_name}")
        if self.template_stack:
            parts.append(format_template_stack(self.template_stack))
        if self.suggestion:
            parts.append(f"  Suggestion: {self.suggestion}")
        return "\n".join(parts)

    def format_compact(self) -> str:
        """Format runtime error as structured terminal diagnostic."""
        parts: list[str] = []
        code_prefix = f"{self.code.value}: " if self.code else ""
        parts.append(f"{code_prefix}{self.message}")
        if self.template_name:
            parts.append(f"  Location: {self.template_name}")
        if self.template_stack:
            parts.append(format_template_stack(self.template_stack))
        if self.suggestion:
            parts.append(f"  Hint: {self.suggestion}")
        if self.code:
            parts.append(f"  Docs: {self.code.docs_url}")
        return "\n".join(parts)


class UnknownHelperError(TemplateRuntimeError):
    """A helper was invoked by name but no such helper is registered."""

    code: ErrorCode | None = ErrorCode.UNKNOWN_HELPER

    def __init__(self, name: str, available: list[str] | tuple[str, ...] = ()):
        self.name = name
        msg = f"Unknown helper '{name}'"
        match = did_you_mean(name, available)
        if match:
            msg += f". Did you mean '{match}'?"
        super().__init__(
            msg,
            suggestion=f"Register it with engine.register_helper('{name}', func)",
        )


class UnknownFilterError(TemplateRuntimeError):
    """A filter pipeline stage names a filter that is not registered."""

    code: ErrorCode | None = ErrorCode.UNKNOWN_FILTER

    def __init__(self, name: str, available: list[str] | tuple[str, ...] = ()):
        self.name = name
        msg = f"Unknown filter '{name}'"
        match = did_you_mean(name, available)
        if match:
            msg += f". Did you mean '{match}'?"
        super().__init__(
            msg,
            suggestion=f"Register it with engine.register_filter('{name}', func)",
        )


class SectionError(TemplateRuntimeError):
    """Section declarations inside a body are unbalanced or refer to nothing."""

    code: ErrorCode | None = ErrorCode.SECTION_ERROR
