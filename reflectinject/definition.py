"""
Definition

Data classes describing what to build: class instantiations, function
calls, plain values and aliases, plus the references and injections
they are made of.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional

from .callables import classify_callable
from .exceptions import DefinitionError, InvalidDefinitionKindError


# Positional index -> EntryReference or literal value. Missing indices are "absent".
ParameterDefinitions = Dict[int, Any]


@dataclass(frozen=True)
class EntryReference:
    """By-name pointer to another entry, resolved lazily through the lookup service."""
    name: str


class Definition:
    """Base class of all definitions.

    Every definition exposes a ``name``: the key under which it is looked
    up. The name never changes once the definition is built.
    """

    name: str


@dataclass(frozen=True)
class ValueDefinition(Definition):
    """Entry bound to a literal value"""
    name: str
    value: Any


@dataclass(frozen=True)
class AliasDefinition(Definition):
    """Entry resolving to another entry (e.g. an interface to its implementation)"""
    name: str
    target_name: str


@dataclass(frozen=True)
class MethodInjection:
    """Parameters to pass to a method when it is called.

    Attributes:
        method_name: Name of the method, ``"__init__"`` for the constructor
        parameters: Values by positional index
    """
    method_name: str
    parameters: ParameterDefinitions = field(default_factory=dict)

    CONSTRUCTOR = '__init__'

    @classmethod
    def constructor(cls, parameters: Optional[ParameterDefinitions] = None) -> 'MethodInjection':
        """Build the constructor injection."""
        return cls(cls.CONSTRUCTOR, dict(parameters or {}))

    @property
    def is_constructor(self) -> bool:
        return self.method_name == self.CONSTRUCTOR

    def merge(self, child: 'MethodInjection') -> 'MethodInjection':
        """Return a copy where the child's parameters override these ones.

        Indices only set here are kept.
        """
        parameters = dict(self.parameters)
        parameters.update(child.parameters)
        return MethodInjection(child.method_name, parameters)


@dataclass(frozen=True)
class PropertyInjection:
    """Attribute set on the instance right after construction"""
    property_name: str
    value: Any


@dataclass(frozen=True)
class ClassDefinition(Definition):
    """Build plan for instantiating a class.

    Attributes:
        name: Entry name
        class_name: Dotted name of the class to instantiate; None means the
            entry name is the class name
        constructor_injection: Constructor parameters, if any are configured
        property_injections: Attributes to set after construction, by name
        method_injections: Methods to call after construction, by name

    Example::

        definition = ClassDefinition(
            "app.Mailer",
            class_name="app.smtp.SmtpMailer",
            constructor_injection=MethodInjection.constructor(
                {0: EntryReference("app.Transport"), 1: 3}
            ),
        )
    """
    name: str
    class_name: Optional[str] = None
    constructor_injection: Optional[MethodInjection] = None
    property_injections: Dict[str, PropertyInjection] = field(default_factory=dict)
    method_injections: Dict[str, MethodInjection] = field(default_factory=dict)

    @property
    def target_class_name(self) -> str:
        """Name of the class this definition instantiates."""
        return self.class_name if self.class_name is not None else self.name

    def merge(self, child: 'ClassDefinition') -> 'ClassDefinition':
        """Combine this definition with a child definition overriding it.

        Every slot set on the child wins. Slots the child leaves unset fall
        back to this definition's. The result takes the child's name.

        Args:
            child: Definition whose explicit entries take precedence

        Returns:
            A new ClassDefinition, neither input is modified

        Raises:
            InvalidDefinitionKindError: When child is not a ClassDefinition
        """
        if not isinstance(child, ClassDefinition):
            raise InvalidDefinitionKindError(
                f"A ClassDefinition can only be merged with another ClassDefinition, "
                f"{type(child).__name__} given"
            )

        constructor_injection = self.constructor_injection
        if child.constructor_injection is not None:
            if constructor_injection is None:
                constructor_injection = child.constructor_injection
            else:
                constructor_injection = constructor_injection.merge(child.constructor_injection)

        method_injections = dict(self.method_injections)
        for method_name, injection in child.method_injections.items():
            inherited = method_injections.get(method_name)
            method_injections[method_name] = (
                inherited.merge(injection) if inherited is not None else injection
            )

        return replace(
            child,
            class_name=child.class_name if child.class_name is not None else self.class_name,
            constructor_injection=constructor_injection,
            property_injections={**self.property_injections, **child.property_injections},
            method_injections=method_injections,
        )


@dataclass(frozen=True)
class FunctionCallDefinition(Definition):
    """Build plan for calling a function or method.

    Attributes:
        target: The callable: a ``(receiver, "method")`` pair, a lambda or
            nested function, an invocable object, or a plain function
        parameters: Values by positional index
        entry_name: Explicit entry name; derived from the callable when None
    """
    target: Any
    parameters: ParameterDefinitions = field(default_factory=dict)
    entry_name: Optional[str] = None

    @property
    def name(self) -> str:
        if self.entry_name is not None:
            return self.entry_name
        try:
            return classify_callable(self.target).describe()
        except DefinitionError:
            # Invalid targets are reported by the resolver, under their repr
            return repr(self.target)
