"""
DefinitionResolver

Base class of the resolvers turning one kind of definition into a value.
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Iterator, Optional, Type

from .definition import Definition
from .exceptions import DefinitionError, InvalidDefinitionKindError
from .parameter_resolver import Overrides


class DefinitionResolver(ABC):
    """Turns definitions of one kind into values.

    Subclasses set ``definition_type`` to the Definition subclass they
    handle and call ``_ensure_kind()`` before doing anything else.
    """

    definition_type: Type[Definition] = Definition

    @abstractmethod
    def resolve(self, definition: Definition, overrides: Optional[Overrides] = None) -> Any:
        """Build the value described by the definition.

        Args:
            definition: The definition to resolve
            overrides: Explicit parameter values, by index or name

        Returns:
            The built value
        """

    @abstractmethod
    def is_resolvable(self, definition: Definition, overrides: Optional[Overrides] = None) -> bool:
        """Check whether resolve() can succeed for the definition."""

    def _ensure_kind(self, definition: Definition) -> None:
        """Reject definitions this resolver cannot handle.

        Raises:
            InvalidDefinitionKindError: When the definition has the wrong type
        """
        if not isinstance(definition, self.definition_type):
            raise InvalidDefinitionKindError(
                f"{type(self).__name__} is only compatible with "
                f"{self.definition_type.__name__} objects, {type(definition).__name__} given"
            )

    @contextmanager
    def _naming_errors(self, definition: Definition) -> Iterator[None]:
        """Attach the definition's name to DefinitionErrors raised inside.

        - An error naming no entry gets this definition's name
        - An error raised for this very definition passes unchanged
        - An error from a dependency is wrapped once, naming both entries.
          Outer resolvers pass the wrapped error through unchanged.

        Example::

            with self._naming_errors(definition):
                arguments = self._parameter_resolver.resolve_parameters(...)
        """
        try:
            yield
        except DefinitionError as e:
            if e.definition_name is None:
                raise DefinitionError.create(definition, str(e)) from e
            if e.nested or e.definition_name == definition.name:
                raise
            raise DefinitionError.create(definition, str(e), nested=True) from e
