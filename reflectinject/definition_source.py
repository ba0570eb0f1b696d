"""
Definition sources

A definition source looks up the Definition registered under a name.
Returning None is the normal way to say "not here": the host then moves
on to the next source.

This module holds the source interfaces, an in-memory source of explicit
definitions and the SourceChain combining several sources.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from .definition import ClassDefinition, Definition, FunctionCallDefinition
from .exceptions import DefinitionError

logger = logging.getLogger(__name__)


class DefinitionSource(ABC):
    """Source of definitions by entry name"""

    @abstractmethod
    def get_definition(
        self,
        name: str,
        parent_definition: Optional[Definition] = None,
    ) -> Optional[Definition]:
        """Return the definition for a name, merged under the parent if given.

        Args:
            name: Entry name
            parent_definition: Definition found by a higher priority source.
                Its explicit entries win over anything this source adds.

        Returns:
            The definition, or None when this source has nothing to add
        """


class CallableDefinitionSource(ABC):
    """Source building definitions for arbitrary callables"""

    @abstractmethod
    def get_callable_definition(self, target: Any) -> FunctionCallDefinition:
        """Return a FunctionCallDefinition for the callable."""


class InMemoryDefinitionSource(DefinitionSource):
    """Holds explicitly built definitions.

    Example::

        source = InMemoryDefinitionSource([
            ValueDefinition("app.retries", 3),
            AliasDefinition("app.Transport", "app.smtp.SmtpTransport"),
        ])
    """

    def __init__(self, definitions: Optional[List[Definition]] = None):
        self._definitions: Dict[str, Definition] = {}
        for definition in definitions or []:
            self.add_definition(definition)

    def add_definition(self, definition: Definition) -> None:
        """Register a definition, replacing any previous one with the same name."""
        self._definitions[definition.name] = definition

    def get_definition(
        self,
        name: str,
        parent_definition: Optional[Definition] = None,
    ) -> Optional[Definition]:
        definition = self._definitions.get(name)
        if definition is None or parent_definition is None:
            return definition

        # Only class definitions merge
        if isinstance(definition, ClassDefinition) and isinstance(parent_definition, ClassDefinition):
            return definition.merge(parent_definition)
        return None


class SourceChain(DefinitionSource, CallableDefinitionSource):
    """Queries several sources in priority order, highest first.

    The first definition found is returned as is unless it is a
    ClassDefinition: then every remaining source gets a chance to merge
    its own data underneath it (e.g. reflective auto-wiring under
    explicit configuration). Sources returning None leave it unchanged.

    Example::

        chain = SourceChain([
            InMemoryDefinitionSource([explicit_mailer_definition]),
            ReflectionDefinitionSource(),
        ])
        chain.get_definition("app.Mailer")  # explicit slots + auto-wired ones
    """

    def __init__(self, sources: List[DefinitionSource]):
        self._sources = list(sources)

    @property
    def sources(self) -> List[DefinitionSource]:
        return list(self._sources)

    def get_definition(
        self,
        name: str,
        parent_definition: Optional[Definition] = None,
    ) -> Optional[Definition]:
        definition = parent_definition
        for source in self._sources:
            if definition is not None and not isinstance(definition, ClassDefinition):
                break

            found = source.get_definition(name, definition)
            if found is not None:
                logger.debug("%s found in %s", name, type(source).__name__)
                definition = found

        return definition

    def get_callable_definition(self, target: Any) -> FunctionCallDefinition:
        """Build the callable's definition with the first source able to.

        Raises:
            DefinitionError: When no source can build callable definitions
        """
        for source in self._sources:
            if isinstance(source, CallableDefinitionSource):
                return source.get_callable_definition(target)

        raise DefinitionError(f"No definition source can describe callable {target!r}")
