"""
Container

A minimal host for the resolution engine. The container implements the
lookup service the resolvers depend on:

- Definitions are looked up in a SourceChain: explicit definitions first,
  then the configured sources (reflection by default)
- Definitions are resolved through a ResolverDispatcher
- Circular dependencies are detected per thread / per task

The container never caches: every ``get()`` builds a new value. Hosts
wanting singletons wrap it with their own cache.

Example::

    container = Container()
    container.add_definitions(
        AliasDefinition("app.Transport", "app.smtp.SmtpTransport"),
    )
    mailer = container.get(Mailer)
"""

from typing import Any, List, Optional, Type, TypeVar, Union

from .definition import Definition
from .definition_source import DefinitionSource, InMemoryDefinitionSource, SourceChain
from .exceptions import DefinitionNotFoundError
from .naming import qualified_name
from .parameter_resolver import Overrides
from .reflection_definition_source import ReflectionDefinitionSource
from .resolution_context import ResolutionContext, _resolution_context
from .resolver_dispatcher import ResolverDispatcher

T = TypeVar('T')


class Container:
    """Lookup service resolving entries by name.

    Attributes:
        _definitions: Source of explicitly added definitions, queried first
        _source: Chain of all sources
        _dispatcher: Resolver dispatcher bound to this container

    Example::

        container = Container(sources=[ReflectionDefinitionSource()])
        service = container.get("app.services.UserService")
        same_type = container.get(UserService)  # classes work as names too
    """

    def __init__(self, sources: Optional[List[DefinitionSource]] = None):
        """Initialize the container.

        Args:
            sources: Definition sources by priority, highest first.
                Defaults to a single ReflectionDefinitionSource.
        """
        if sources is None:
            sources = [ReflectionDefinitionSource()]

        self._definitions = InMemoryDefinitionSource()
        self._source = SourceChain([self._definitions, *sources])
        self._dispatcher = ResolverDispatcher(self)

    def add_definitions(self, *definitions: Definition) -> None:
        """Add explicit definitions, taking precedence over other sources.

        A ClassDefinition added here is merged over what the other sources
        find for the same name, slot by slot.
        """
        for definition in definitions:
            self._definitions.add_definition(definition)

    def get(self, name: Union[str, Type[T]]) -> Any:
        """Resolve an entry.

        Args:
            name: Entry name, or a class standing for its qualified name

        Returns:
            A newly built value

        Raises:
            DefinitionNotFoundError: When no source defines the entry
            CircularDependencyError: When the entry depends on itself
            DefinitionError: When the entry cannot be resolved
        """
        return self._resolve(self._entry_name(name), None)

    def make(self, name: Union[str, type], overrides: Optional[Overrides] = None) -> Any:
        """Resolve an entry with explicit parameter values.

        Args:
            name: Entry name, or a class standing for its qualified name
            overrides: Parameter values by index or parameter name

        Example::

            mailer = container.make(Mailer, {"retries": 5})
        """
        return self._resolve(self._entry_name(name), overrides)

    def has(self, name: Union[str, type]) -> bool:
        """Check whether an entry is defined and resolvable."""
        definition = self._source.get_definition(self._entry_name(name))
        if definition is None:
            return False
        return self._dispatcher.is_resolvable(definition)

    def call(self, target: Any, overrides: Optional[Overrides] = None) -> Any:
        """Call a callable with its parameters injected.

        Args:
            target: Function, lambda, invocable object, bound method or
                ``(receiver, "method")`` pair
            overrides: Parameter values by index or parameter name

        Returns:
            Whatever the callable returns

        Example::

            container.call(send_newsletter, {"dry_run": True})
        """
        definition = self._source.get_callable_definition(target)
        return self._dispatcher.resolve(definition, overrides)

    def _resolve(self, name: str, overrides: Optional[Overrides]) -> Any:
        definition = self._source.get_definition(name)
        if definition is None:
            raise DefinitionNotFoundError(
                f"No entry or class found for '{name}'.\n"
                f"Hint: container.add_definitions(AliasDefinition('{name}', ...))"
            )

        parent_ctx = _resolution_context.get()
        ctx = (parent_ctx or ResolutionContext()).enter(name)

        token = _resolution_context.set(ctx)
        try:
            return self._dispatcher.resolve(definition, overrides)
        finally:
            _resolution_context.reset(token)

    @staticmethod
    def _entry_name(name: Union[str, type]) -> str:
        if isinstance(name, str):
            return name
        return qualified_name(name)
