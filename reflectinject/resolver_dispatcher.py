"""
ResolverDispatcher

Picks the resolver matching a definition's kind.
"""

import logging
from typing import Any, Dict, Optional, Type

from .class_definition_resolver import ClassDefinitionResolver
from .definition import AliasDefinition, ClassDefinition, Definition, FunctionCallDefinition, ValueDefinition
from .definition_resolver import DefinitionResolver
from .exceptions import InvalidDefinitionKindError
from .function_call_definition_resolver import FunctionCallDefinitionResolver
from .parameter_resolver import LookupService, Overrides
from .value_definition_resolver import AliasDefinitionResolver, ValueDefinitionResolver

logger = logging.getLogger(__name__)


class ResolverDispatcher:
    """Dispatches definitions to the resolver handling their kind.

    Attributes:
        _resolvers: Resolver instances by Definition subclass

    Example::

        dispatcher = ResolverDispatcher(container)
        dispatcher.resolve(ValueDefinition("app.retries", 3))  # 3
    """

    def __init__(self, lookup: LookupService):
        self._resolvers: Dict[Type[Definition], DefinitionResolver] = {
            ClassDefinition: ClassDefinitionResolver(lookup),
            FunctionCallDefinition: FunctionCallDefinitionResolver(lookup),
            ValueDefinition: ValueDefinitionResolver(),
            AliasDefinition: AliasDefinitionResolver(lookup),
        }

    def resolve(self, definition: Definition, overrides: Optional[Overrides] = None) -> Any:
        resolver = self.resolver_for(definition)
        logger.debug("Resolving %s with %s", definition.name, type(resolver).__name__)
        return resolver.resolve(definition, overrides)

    def is_resolvable(self, definition: Definition, overrides: Optional[Overrides] = None) -> bool:
        return self.resolver_for(definition).is_resolvable(definition, overrides)

    def resolver_for(self, definition: Definition) -> DefinitionResolver:
        """Return the resolver for the definition's kind.

        Raises:
            InvalidDefinitionKindError: When no resolver handles the definition
        """
        for definition_type in type(definition).__mro__:
            resolver = self._resolvers.get(definition_type)
            if resolver is not None:
                return resolver

        raise InvalidDefinitionKindError(
            f"No resolver for definitions of type {type(definition).__name__}"
        )
