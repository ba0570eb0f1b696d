"""
FunctionCallDefinitionResolver

Resolves a FunctionCallDefinition by calling its target with resolved
arguments and returning the result.
"""

import logging
from typing import Any, Optional

from .callables import CallableKind, CallableTarget, MethodBinding, classify_callable
from .definition import FunctionCallDefinition
from .definition_resolver import DefinitionResolver
from .introspection import signature_of
from .parameter_resolver import LookupService, Overrides, ParameterResolver

logger = logging.getLogger(__name__)


class FunctionCallDefinitionResolver(DefinitionResolver):
    """Calls functions and methods with their dependencies injected.

    The receiver of an instance method is:

    - fetched from the lookup service when given as a class or class name
    - used directly when given as an object

    Static methods and classmethods are called without fetching anything.
    Exceptions raised by the called code propagate unchanged.

    Example::

        resolver = FunctionCallDefinitionResolver(container)
        report = resolver.resolve(FunctionCallDefinition((ReportBuilder, "build")))
    """

    definition_type = FunctionCallDefinition

    def __init__(self, lookup: LookupService):
        self._lookup = lookup
        self._parameter_resolver = ParameterResolver(lookup)

    def resolve(self, definition: FunctionCallDefinition, overrides: Optional[Overrides] = None) -> Any:
        """Call the definition's target and return its result.

        Raises:
            InvalidDefinitionKindError: When not given a FunctionCallDefinition
            DefinitionError: When the callable is invalid or a parameter
                cannot be resolved
        """
        self._ensure_kind(definition)

        with self._naming_errors(definition):
            target = classify_callable(definition.target)
            signature = signature_of(target)
            arguments = self._parameter_resolver.resolve_parameters(definition, signature, overrides)
            function = self._function(target)

        logger.debug("Calling %s (%s)", target.describe(), target.kind.value)
        return function(*arguments.args, **arguments.kwargs)

    def is_resolvable(self, definition: FunctionCallDefinition, overrides: Optional[Overrides] = None) -> bool:
        self._ensure_kind(definition)
        return True

    def _function(self, target: CallableTarget) -> Any:
        """Return the object to call for the target."""
        if target.kind is CallableKind.METHOD:
            if target.binding is MethodBinding.INSTANCE:
                if target.receiver_is_name:
                    receiver = self._lookup.get(target.receiver_name)
                else:
                    receiver = target.receiver
            else:
                receiver = target.owner
            return getattr(receiver, target.method_name)
        elif target.kind is CallableKind.CLOSURE:
            return target.function
        elif target.kind is CallableKind.INVOCABLE:
            return target.function.__call__
        else:
            return target.function
