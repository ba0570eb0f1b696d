"""
Test Configuration and Utilities

Common helpers for ReflectInject tests
"""

from typing import Any, Dict, List, Optional

from reflectinject import Container, Definition
from reflectinject.exceptions import DefinitionNotFoundError


class FakeLookup:
    """
    Lookup service backed by a dict.

    Records every requested name in ``calls`` so tests can assert which
    entries were (or were not) fetched.

    Example:
        >>> lookup = FakeLookup({"app.Database": Database()})
        >>> lookup.get("app.Database")
        >>> lookup.calls
        ['app.Database']
    """

    def __init__(self, entries: Optional[Dict[str, Any]] = None):
        self.entries: Dict[str, Any] = dict(entries or {})
        self.calls: List[str] = []

    def get(self, name: str) -> Any:
        self.calls.append(name)
        if name not in self.entries:
            raise DefinitionNotFoundError(f"No entry or class found for '{name}'")
        return self.entries[name]


def create_container(*definitions: Definition) -> Container:
    """
    Create a reflection-backed container with explicit definitions.

    Args:
        *definitions: Definitions taking precedence over reflection

    Returns:
        A Container
    """
    container = Container()
    container.add_definitions(*definitions)
    return container
