"""Vellum RenderContext — state shared by every template of one render.

A top-level ``Engine.render()`` call opens a RenderContext; the layouts and
partials it recurses into run under child contexts that share the same
SectionStore and extend the template stack. The context is held in a
ContextVar, so two renders running in different threads or asyncio tasks
never see each other's sections.

"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field

from vellum.environment.exceptions import ErrorCode, TemplateRuntimeError
from vellum.template.sections import SectionStore


@dataclass
class RenderContext:
    """Per-render state kept out of the user's data context.

    Attributes:
        sections: Finalized sections, shared by all templates of the render
        depth: How many layouts/partials deep the current template is
        max_depth: Maximum allowed depth
        template_stack: Paths from the outermost template to the current one
    """

    sections: SectionStore = field(default_factory=SectionStore)

    # 50 is deep enough for any real layout/partial hierarchy while catching
    # templates that insert each other early.
    depth: int = 0
    max_depth: int = 50

    template_stack: list[str] = field(default_factory=list)

    def check_depth(self, name: str) -> None:
        """Raise if rendering ``name`` would exceed ``max_depth``.

        Raises:
            TemplateRuntimeError: If depth >= max_depth
        """
        if self.depth >= self.max_depth:
            raise TemplateRuntimeError(
                f"Maximum render depth exceeded ({self.max_depth}) when rendering '{name}'",
                template_name=self.template_stack[-1] if self.template_stack else None,
                suggestion="Check for templates that insert each other: A → B → A",
                template_stack=self.template_stack,
                code=ErrorCode.RENDER_DEPTH,
            )

    def child_context(self, path: str) -> RenderContext:
        """Create the context for a layout or partial of the current template."""
        return RenderContext(
            sections=self.sections,
            depth=self.depth + 1,
            max_depth=self.max_depth,
            template_stack=[*self.template_stack, path],
        )


_render_context: ContextVar[RenderContext | None] = ContextVar(
    "vellum_render_context",
    default=None,
)


def get_render_context() -> RenderContext | None:
    """Get current render context (None if not in render)."""
    return _render_context.get()


@contextmanager
def render_context(
    path: str | None = None,
    max_depth: int = 50,
    sections: SectionStore | None = None,
) -> Iterator[RenderContext]:
    """Open a top-level render context for the duration of the with block.

    Example:
        with render_context("/t/page.py") as ctx:
            html = template.render(data)
            ctx.sections.names()
    """
    ctx = RenderContext(
        sections=sections if sections is not None else SectionStore(),
        max_depth=max_depth,
        template_stack=[path] if path else [],
    )
    token: Token[RenderContext | None] = _render_context.set(ctx)
    try:
        yield ctx
    finally:
        _render_context.reset(token)


@contextmanager
def child_render_context(path: str) -> Iterator[RenderContext]:
    """Enter a child of the current context for rendering ``path``.

    Raises:
        RuntimeError: If called outside a render
        TemplateRuntimeError: If the depth limit is reached
    """
    parent = _render_context.get()
    if parent is None:
        raise RuntimeError("Not in a render context")
    parent.check_depth(path)
    token = _render_context.set(parent.child_context(path))
    try:
        yield _render_context.get()  # type: ignore[misc]
    finally:
        _render_context.reset(token)
