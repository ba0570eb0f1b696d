"""
ReflectionDefinitionSource

Builds definitions by reading constructor and callable signatures.

Each required parameter with a class type-hint becomes an EntryReference
to that class. Optional parameters are never auto-wired, even when they
have a class type-hint: their default applies unless configured
explicitly. Parameters without a class type-hint are left unset for the
ParameterResolver to handle.
"""

import inspect
from typing import Any, Optional

from .callables import classify_callable
from .definition import (
    ClassDefinition,
    Definition,
    EntryReference,
    FunctionCallDefinition,
    MethodInjection,
    ParameterDefinitions,
)
from .definition_source import CallableDefinitionSource, DefinitionSource
from .introspection import Signature, constructor_signature, signature_of
from .naming import locate


class ReflectionDefinitionSource(DefinitionSource, CallableDefinitionSource):
    """Auto-wiring definition source based on type-hints.

    Example::

        class Mailer:
            def __init__(self, transport: Transport, retries: int = 3): ...

        source = ReflectionDefinitionSource()
        source.get_definition("app.Mailer")
        # ClassDefinition("app.Mailer", constructor_injection=MethodInjection(
        #     "__init__", {0: EntryReference("app.Transport")}))
    """

    def get_definition(
        self,
        name: str,
        parent_definition: Optional[Definition] = None,
    ) -> Optional[Definition]:
        """Reflect the class named by the entry or by the parent definition.

        Returns:
            The reflected ClassDefinition merged under the parent, or None
            when the parent is not a class definition or the class does
            not exist
        """
        if parent_definition is not None and not isinstance(parent_definition, ClassDefinition):
            return None

        class_name = parent_definition.target_class_name if parent_definition is not None else name

        cls = locate(class_name)
        if not inspect.isclass(cls):
            return None

        signature = constructor_signature(cls)
        definition = ClassDefinition(
            name,
            class_name=class_name if class_name != name else None,
            constructor_injection=(
                MethodInjection.constructor(self._parameters_definition(signature))
                if signature is not None else None
            ),
        )

        if parent_definition is not None:
            definition = definition.merge(parent_definition)

        return definition

    def get_callable_definition(self, target: Any) -> FunctionCallDefinition:
        """Reflect the parameters of any supported callable."""
        signature = signature_of(classify_callable(target))
        return FunctionCallDefinition(target, self._parameters_definition(signature))

    @staticmethod
    def _parameters_definition(signature: Signature) -> ParameterDefinitions:
        parameters: ParameterDefinitions = {}
        for info in signature:
            if info.optional:
                continue
            if info.declared_type is not None:
                parameters[info.index] = EntryReference(info.declared_type)
        return parameters
