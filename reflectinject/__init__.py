# Public API
from .callables import CallableKind, CallableTarget, MethodBinding, classify_callable
from .class_definition_resolver import ClassDefinitionResolver
from .container import Container
from .definition import (
    AliasDefinition,
    ClassDefinition,
    Definition,
    EntryReference,
    FunctionCallDefinition,
    MethodInjection,
    PropertyInjection,
    ValueDefinition,
)
from .definition_resolver import DefinitionResolver
from .definition_source import (
    CallableDefinitionSource,
    DefinitionSource,
    InMemoryDefinitionSource,
    SourceChain,
)
from .exceptions import (
    CircularDependencyError,
    DefinitionError,
    DefinitionNotFoundError,
    InvalidDefinitionKindError,
    ReflectInjectError,
    TypeInferenceError,
    UnresolvableParameterError,
)
from .function_call_definition_resolver import FunctionCallDefinitionResolver
from .introspection import ParameterInfo, Signature, constructor_signature, signature_of
from .naming import locate, qualified_name
from .parameter_resolver import Arguments, LookupService, ParameterResolver
from .reflection_definition_source import ReflectionDefinitionSource
from .resolver_dispatcher import ResolverDispatcher
from .value_definition_resolver import AliasDefinitionResolver, ValueDefinitionResolver

__all__ = [
    "Container",
    # Definitions
    "Definition",
    "ClassDefinition",
    "FunctionCallDefinition",
    "ValueDefinition",
    "AliasDefinition",
    "EntryReference",
    "MethodInjection",
    "PropertyInjection",
    # Callables and introspection
    "CallableKind",
    "CallableTarget",
    "MethodBinding",
    "classify_callable",
    "ParameterInfo",
    "Signature",
    "signature_of",
    "constructor_signature",
    "qualified_name",
    "locate",
    # Resolvers
    "Arguments",
    "LookupService",
    "ParameterResolver",
    "DefinitionResolver",
    "ClassDefinitionResolver",
    "FunctionCallDefinitionResolver",
    "ValueDefinitionResolver",
    "AliasDefinitionResolver",
    "ResolverDispatcher",
    # Sources
    "DefinitionSource",
    "CallableDefinitionSource",
    "InMemoryDefinitionSource",
    "SourceChain",
    "ReflectionDefinitionSource",
    # Exceptions
    "ReflectInjectError",
    "InvalidDefinitionKindError",
    "DefinitionError",
    "UnresolvableParameterError",
    "TypeInferenceError",
    "DefinitionNotFoundError",
    "CircularDependencyError",
]

__version__ = '0.1.0'
