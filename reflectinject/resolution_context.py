"""
ResolutionContext

Tracks the entries currently being resolved, so the container can detect
circular dependencies.

The context is stored in a ContextVar: each thread and each asyncio task
sees its own resolution chain.
"""

from contextvars import ContextVar
from typing import List, Optional

from .exceptions import CircularDependencyError


class ResolutionContext:
    """Chain of entry names being resolved, outermost first.

    Example (internal usage)::

        ctx = ResolutionContext(["app.Mailer"])
        child = ctx.enter("app.Transport")
        child.resolving  # ["app.Mailer", "app.Transport"]
        child.enter("app.Mailer")  # Raises CircularDependencyError
    """

    def __init__(self, resolving: Optional[List[str]] = None):
        self.resolving: List[str] = list(resolving or [])

    def enter(self, name: str) -> 'ResolutionContext':
        """Return the context for resolving ``name`` inside this one.

        Raises:
            CircularDependencyError: When ``name`` is already being resolved
        """
        if name in self.resolving:
            cycle = " -> ".join(self.resolving + [name])
            raise CircularDependencyError(f"Circular dependency detected: {cycle}")
        return ResolutionContext(self.resolving + [name])


_resolution_context: ContextVar[Optional[ResolutionContext]] = ContextVar(
    '_REFLECTINJECT_RESOLUTION_CONTEXT',
    default=None
)
