"""
Value and alias resolvers
"""

from typing import Any, Optional

from .definition import AliasDefinition, ValueDefinition
from .definition_resolver import DefinitionResolver
from .parameter_resolver import LookupService, Overrides


class ValueDefinitionResolver(DefinitionResolver):
    """Returns the value stored in a ValueDefinition."""

    definition_type = ValueDefinition

    def resolve(self, definition: ValueDefinition, overrides: Optional[Overrides] = None) -> Any:
        self._ensure_kind(definition)
        return definition.value

    def is_resolvable(self, definition: ValueDefinition, overrides: Optional[Overrides] = None) -> bool:
        self._ensure_kind(definition)
        return True


class AliasDefinitionResolver(DefinitionResolver):
    """Resolves an alias by fetching its target entry from the lookup service."""

    definition_type = AliasDefinition

    def __init__(self, lookup: LookupService):
        self._lookup = lookup

    def resolve(self, definition: AliasDefinition, overrides: Optional[Overrides] = None) -> Any:
        self._ensure_kind(definition)
        with self._naming_errors(definition):
            return self._lookup.get(definition.target_name)

    def is_resolvable(self, definition: AliasDefinition, overrides: Optional[Overrides] = None) -> bool:
        self._ensure_kind(definition)
        return True
