"""
ClassDefinitionResolver

Resolves a ClassDefinition by instantiating its class with resolved
constructor arguments, then applying property and method injections.
"""

import inspect
import logging
from typing import Any, Optional

from .callables import classify_callable
from .definition import ClassDefinition, EntryReference
from .definition_resolver import DefinitionResolver
from .exceptions import DefinitionError
from .introspection import constructor_signature, signature_of
from .naming import locate
from .parameter_resolver import Arguments, LookupService, Overrides, ParameterResolver

logger = logging.getLogger(__name__)


class ClassDefinitionResolver(DefinitionResolver):
    """Instantiates classes with their dependencies injected.

    Resolution happens in three steps:

    1. Constructor arguments are resolved (overrides apply here only)
    2. The class is instantiated
    3. Property injections are set, then method injections are called
       in the order they were defined

    Exceptions raised by the constructor or injected methods propagate
    unchanged.
    """

    definition_type = ClassDefinition

    def __init__(self, lookup: LookupService):
        self._lookup = lookup
        self._parameter_resolver = ParameterResolver(lookup)

    def resolve(self, definition: ClassDefinition, overrides: Optional[Overrides] = None) -> Any:
        """Instantiate the definition's class.

        Raises:
            InvalidDefinitionKindError: When not given a ClassDefinition
            DefinitionError: When the class does not exist, is abstract,
                or a constructor parameter cannot be resolved
        """
        self._ensure_kind(definition)

        with self._naming_errors(definition):
            cls = self._class_of(definition)
            arguments = self._constructor_arguments(definition, cls, overrides)

        logger.debug("Instantiating %s for entry %s", cls.__qualname__, definition.name)
        instance = cls(*arguments.args, **arguments.kwargs)

        self._inject_properties(definition, instance)
        self._inject_methods(definition, instance)
        return instance

    def is_resolvable(self, definition: ClassDefinition, overrides: Optional[Overrides] = None) -> bool:
        """A class definition is resolvable when its class exists and is concrete.

        Abstract classes and Protocols are not: they need an alias to an
        implementation.
        """
        self._ensure_kind(definition)
        cls = locate(definition.target_class_name)
        return inspect.isclass(cls) and _is_instantiable(cls)

    def _class_of(self, definition: ClassDefinition) -> type:
        cls = locate(definition.target_class_name)
        if not inspect.isclass(cls):
            raise DefinitionError(f"class {definition.target_class_name} does not exist")
        if not _is_instantiable(cls):
            raise DefinitionError(f"{definition.target_class_name} is not instantiable")
        return cls

    def _constructor_arguments(
        self,
        definition: ClassDefinition,
        cls: type,
        overrides: Optional[Overrides],
    ) -> Arguments:
        signature = constructor_signature(cls)
        if signature is None:
            return Arguments([], {})

        injection = definition.constructor_injection
        return self._parameter_resolver.resolve_parameters(
            definition,
            signature,
            overrides,
            injection.parameters if injection is not None else {},
        )

    def _inject_properties(self, definition: ClassDefinition, instance: Any) -> None:
        for injection in definition.property_injections.values():
            value = injection.value
            if isinstance(value, EntryReference):
                with self._naming_errors(definition):
                    value = self._lookup.get(value.name)
            setattr(instance, injection.property_name, value)

    def _inject_methods(self, definition: ClassDefinition, instance: Any) -> None:
        for injection in definition.method_injections.values():
            with self._naming_errors(definition):
                target = classify_callable((instance, injection.method_name))
                arguments = self._parameter_resolver.resolve_parameters(
                    definition, signature_of(target), None, injection.parameters
                )

            getattr(instance, injection.method_name)(*arguments.args, **arguments.kwargs)


def _is_instantiable(cls: type) -> bool:
    # Protocol classes refuse instantiation with a TypeError
    return not inspect.isabstract(cls) and not getattr(cls, '_is_protocol', False)
