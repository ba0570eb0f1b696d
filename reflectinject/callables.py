"""
Callables

Classification of the callables a FunctionCallDefinition can target.

Every callable is normalized into a CallableTarget of exactly one of four
kinds, which the introspector and the function call resolver both match
on explicitly:

- METHOD: ``(receiver, "method")`` where the receiver is a class, the
  dotted name of a class, or an object. Bound methods are normalized to
  this shape, and so are ``"package.Class::method"`` strings.
- CLOSURE: a lambda or a function defined inside another function.
- INVOCABLE: an object whose class defines ``__call__`` (including
  ``functools.partial``).
- FUNCTION: a module-level function, a builtin, a class used as a
  factory, or the dotted name of a module-level function.
"""

import inspect
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from .exceptions import DefinitionError
from .naming import locate, qualified_name


class CallableKind(Enum):
    """Shape of a callable"""
    METHOD = "METHOD"
    CLOSURE = "CLOSURE"
    INVOCABLE = "INVOCABLE"
    FUNCTION = "FUNCTION"


class MethodBinding(Enum):
    """How a METHOD target is bound when invoked"""
    STATIC = "STATIC"  # staticmethod, no receiver
    CLASS = "CLASS"  # classmethod, bound to the owner class
    INSTANCE = "INSTANCE"  # needs an instance of the owner class


@dataclass(frozen=True)
class CallableTarget:
    """A classified callable.

    Attributes:
        kind: Which of the four shapes this is
        function: The function, class or invocable object (all kinds but METHOD)
        receiver: The class, class name or object given with the method (METHOD)
        method_name: Name of the method (METHOD)
        owner: The class declaring the method (METHOD)
        binding: How the method is bound (METHOD)
    """
    kind: CallableKind
    function: Any = None
    receiver: Any = None
    method_name: Optional[str] = None
    owner: Optional[type] = None
    binding: Optional[MethodBinding] = None

    @property
    def receiver_is_name(self) -> bool:
        """True when the receiver must be fetched from the lookup service."""
        return isinstance(self.receiver, str) or inspect.isclass(self.receiver)

    @property
    def receiver_name(self) -> str:
        if isinstance(self.receiver, str):
            return self.receiver
        return qualified_name(self.receiver)

    def describe(self) -> str:
        """Human readable name, also used as the default entry name."""
        if self.kind is CallableKind.METHOD:
            return f"{qualified_name(self.owner)}::{self.method_name}"
        if self.kind is CallableKind.INVOCABLE:
            return f"{qualified_name(type(self.function))}::__call__"
        return qualified_name(self.function)


def classify_callable(value: Any) -> CallableTarget:
    """Normalize a callable into a CallableTarget.

    Args:
        value: Any supported callable shape

    Returns:
        The classified target

    Raises:
        DefinitionError: When the value is not callable, or names a class,
            method or function that does not exist

    Example::

        >>> classify_callable((Mailer, "send")).kind
        <CallableKind.METHOD: 'METHOD'>
        >>> classify_callable(lambda: 42).kind
        <CallableKind.CLOSURE: 'CLOSURE'>
    """
    if isinstance(value, CallableTarget):
        return value

    if isinstance(value, (tuple, list)):
        if len(value) != 2 or not isinstance(value[1], str):
            raise DefinitionError(
                f"A method callable must be a (receiver, method name) pair, got {value!r}"
            )
        return _method_target(value[0], value[1])

    if inspect.ismethod(value):
        return _method_target(value.__self__, value.__func__.__name__)

    if isinstance(value, str):
        return _named_target(value)

    if inspect.isfunction(value):
        if value.__name__ == '<lambda>' or '<locals>' in value.__qualname__:
            return CallableTarget(CallableKind.CLOSURE, function=value)
        return CallableTarget(CallableKind.FUNCTION, function=value)

    if inspect.isbuiltin(value) or inspect.isclass(value):
        return CallableTarget(CallableKind.FUNCTION, function=value)

    if callable(value):
        return CallableTarget(CallableKind.INVOCABLE, function=value)

    raise DefinitionError(f"{value!r} is not a callable")


def _named_target(name: str) -> CallableTarget:
    """Classify ``"package.function"`` and ``"package.Class::method"`` strings."""
    if '::' in name:
        class_name, method_name = name.split('::', 1)
        return _method_target(class_name, method_name)

    function = locate(name)
    if function is None or not callable(function):
        raise DefinitionError(f"'{name}' is not the name of a callable")
    return classify_callable(function)


def _method_target(receiver: Any, method_name: str) -> CallableTarget:
    if isinstance(receiver, str):
        owner = locate(receiver)
        if not inspect.isclass(owner):
            raise DefinitionError(
                f"Cannot call {receiver}::{method_name}(): class '{receiver}' does not exist"
            )
    elif inspect.isclass(receiver):
        owner = receiver
    else:
        owner = type(receiver)

    try:
        attribute = inspect.getattr_static(owner, method_name)
    except AttributeError:
        raise DefinitionError(
            f"Cannot call {qualified_name(owner)}::{method_name}(): no such method"
        ) from None

    if isinstance(attribute, staticmethod):
        binding = MethodBinding.STATIC
    elif isinstance(attribute, classmethod):
        binding = MethodBinding.CLASS
    else:
        binding = MethodBinding.INSTANCE

    return CallableTarget(
        CallableKind.METHOD,
        receiver=receiver,
        method_name=method_name,
        owner=owner,
        binding=binding,
    )
