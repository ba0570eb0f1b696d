"""
ReflectInject Exceptions

Exception hierarchy for the ReflectInject resolution engine
"""

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .definition import Definition


class ReflectInjectError(Exception):
    """
    Base exception for all ReflectInject errors.

    All ReflectInject-specific exceptions inherit from this class.
    Exceptions raised by the constructed classes or invoked functions
    themselves are never wrapped and do not inherit from it.

    Example:
        >>> try:
        ...     service = container.get("app.services.Mailer")
        ... except ReflectInjectError as e:
        ...     print(f"DI error: {e}")
    """

    pass


class InvalidDefinitionKindError(ReflectInjectError, TypeError):
    """
    Raised when a resolver receives a definition it cannot handle.

    Each resolver handles exactly one definition kind: a
    ``FunctionCallDefinitionResolver`` only accepts ``FunctionCallDefinition``,
    a ``ClassDefinitionResolver`` only accepts ``ClassDefinition`` and so on.
    This is a programming error and is raised before anything is resolved.

    Solution:
        Dispatch through ``ResolverDispatcher``, which picks the resolver
        matching the definition's type::

            dispatcher = ResolverDispatcher(container)
            value = dispatcher.resolve(definition)
    """

    pass


class DefinitionError(ReflectInjectError):
    """
    Raised when a definition cannot be turned into a value.

    The ``definition_name`` attribute holds the name of the entry whose
    resolution failed, when it is known. ``nested`` is True when the error
    wraps the failure of another entry this one depends on: such an error
    already names both entries and is never wrapped again.

    Common causes:
        - A required parameter has no override, no configured value
          and no class type-hint
        - The class named by a ``ClassDefinition`` does not exist
        - The class is abstract or a Protocol and cannot be instantiated
        - A callable cannot be classified
    """

    def __init__(self, message: str, definition_name: Optional[str] = None):
        super().__init__(message)
        self.definition_name = definition_name
        self.nested = False

    @classmethod
    def create(cls, definition: 'Definition', message: str, nested: bool = False) -> 'DefinitionError':
        """Build an error that names the entry being resolved.

        Args:
            definition: The definition whose resolution failed
            message: Description of the failure
            nested: True when the failure belongs to a dependency of the entry

        Returns:
            A DefinitionError carrying the definition's name
        """
        error = cls(
            f"Entry {definition.name} cannot be resolved: {message}",
            definition_name=definition.name,
        )
        error.nested = nested
        return error


class UnresolvableParameterError(DefinitionError):
    """
    Raised when a required parameter has no value and cannot be guessed.

    A parameter is filled from (in order) an explicit override, the
    definition's own parameter list, or its class type-hint. Scalar
    type-hints such as ``int`` or ``str`` cannot be guessed.

    Example of an unresolvable parameter::

        class Mailer:
            def __init__(self, transport: Transport, retries: int): ...

        container.get(qualified_name(Mailer))  # retries has no value!

    Solution:
        Provide the value through an override or the definition::

            container.make(qualified_name(Mailer), {1: 3})
            container.make(qualified_name(Mailer), {"retries": 3})
    """

    def __init__(
        self,
        message: str,
        index: int,
        parameter_name: str,
        definition_name: Optional[str] = None,
    ):
        super().__init__(message, definition_name=definition_name)
        self.index = index
        self.parameter_name = parameter_name


class TypeInferenceError(DefinitionError):
    """
    Raised when a parameter annotation cannot be turned into a type.

    This happens with forward references (string annotations) naming a type
    that does not exist in the module declaring the callable.

    Solution:
        Make sure the referenced type is defined or imported in that module::

            class Mailer:
                def __init__(self, transport: "Transport"): ...

            class Transport:  # must exist at resolution time
                pass
    """

    pass


class DefinitionNotFoundError(ReflectInjectError, LookupError):
    """
    Raised when a requested entry has no definition in any source.

    Resolvers never catch this error: it surfaces unchanged from the
    lookup service when an entry reference or a receiver named by a
    method callable cannot be found.

    Common causes:
        - Typo in the entry name
        - The class cannot be imported from its dotted path
        - The entry is an interface without an alias to an implementation

    Solution:
        Register an explicit definition for the name::

            container.add_definitions(
                AliasDefinition("app.Transport", "app.smtp.SmtpTransport")
            )
    """

    pass


class CircularDependencyError(ReflectInjectError):
    """
    Raised when circular dependency is detected during resolution.

    This error occurs when entry A depends on entry B, and entry B
    (directly or indirectly) depends on entry A.

    Example of circular dependency::

        class ServiceA:
            def __init__(self, b: ServiceB): ...

        class ServiceB:
            def __init__(self, a: ServiceA): ...  # Circular!

    Solution:
        1. Refactor to remove the circular dependency
        2. Pass an already built instance as an explicit override
        3. Extract common functionality to a third service
    """

    pass
