"""
ParameterResolver

This module turns a definition's configured parameters, the caller's
overrides and a callable's Signature into the arguments of the call.

For each parameter, the first available source wins:

1. The caller's override, keyed by index or by parameter name
2. The definition's parameter at that index: an EntryReference is fetched
   from the lookup service, any other value is used as is
3. The declared class type, fetched from the lookup service by name
4. Nothing: optional parameters are left out so the callee applies its
   own default, required ones raise UnresolvableParameterError

Trailing optional parameters with nothing configured are never passed.
"""

import logging
from typing import Any, Dict, List, Mapping, NamedTuple, Optional, Protocol, Tuple, Union

from .definition import Definition, EntryReference, FunctionCallDefinition, ParameterDefinitions
from .exceptions import UnresolvableParameterError
from .introspection import ParameterInfo, Signature

logger = logging.getLogger(__name__)

# Overrides are keyed by parameter index or parameter name
Overrides = Mapping[Union[int, str], Any]

_OMITTED = object()


class LookupService(Protocol):
    """Capability fetching a value by entry name (usually the container)."""

    def get(self, name: str) -> Any:
        ...


class Arguments(NamedTuple):
    """Arguments ready to be applied as ``target(*args, **kwargs)``"""
    args: List[Any]
    kwargs: Dict[str, Any]


class ParameterResolver:
    """Resolves the arguments of a constructor, method or function call.

    The resolver holds no state besides the lookup service: every call is
    independent and nothing is cached. Lookups may recursively resolve
    other entries.

    Attributes:
        _lookup: Service fetching entries by name

    Example::

        resolver = ParameterResolver(container)
        arguments = resolver.resolve_parameters(definition, signature, {1: "smtp"})
        mailer = Mailer(*arguments.args, **arguments.kwargs)
    """

    def __init__(self, lookup: LookupService):
        self._lookup = lookup

    def resolve_parameters(
        self,
        definition: Definition,
        signature: Signature,
        overrides: Optional[Overrides] = None,
        parameters: Optional[ParameterDefinitions] = None,
    ) -> Arguments:
        """Resolve the arguments for a call.

        Args:
            definition: The definition being resolved (named in errors)
            signature: Signature of the callable about to be called
            overrides: Values given by the caller, by index or name
            parameters: Values configured by the definition, by index.
                Defaults to the definition's own parameters for function calls.

        Returns:
            Positional and keyword arguments

        Raises:
            UnresolvableParameterError: When a required parameter has no
                value and no class type-hint
        """
        overrides = overrides or {}
        if parameters is None:
            parameters = definition.parameters if isinstance(definition, FunctionCallDefinition) else {}

        bound = -1
        for info in signature:
            if _has_override(overrides, info) or info.index in parameters or not info.optional:
                bound = info.index

        # FunctionCallDefinition names are derived from the callable
        entry_name = definition.name
        slots: List[Tuple[ParameterInfo, Any]] = []
        for info in signature.parameters[:bound + 1]:
            slots.append((info, self._resolve_parameter(entry_name, info, overrides, parameters)))

        return _to_arguments(slots)

    def _resolve_parameter(
        self,
        entry_name: str,
        info: ParameterInfo,
        overrides: Overrides,
        parameters: ParameterDefinitions,
    ) -> Any:
        if info.index in overrides:
            logger.debug("%s: parameter %s overridden by index", entry_name, info.name)
            return overrides[info.index]
        if info.name in overrides:
            logger.debug("%s: parameter %s overridden by name", entry_name, info.name)
            return overrides[info.name]

        if info.index in parameters:
            value = parameters[info.index]
            if isinstance(value, EntryReference):
                logger.debug("%s: parameter %s references %s", entry_name, info.name, value.name)
                return self._lookup.get(value.name)
            return value

        if info.declared_type is not None:
            logger.debug("%s: parameter %s guessed from type %s", entry_name, info.name, info.declared_type)
            return self._lookup.get(info.declared_type)

        if info.optional:
            logger.debug("%s: parameter %s left to its default", entry_name, info.name)
            return _OMITTED

        raise UnresolvableParameterError(
            f"Parameter ${info.index} ({info.name}) of entry {entry_name} "
            f"has no value defined or guessable and no type-hint",
            index=info.index,
            parameter_name=info.name,
            definition_name=entry_name,
        )


def _has_override(overrides: Overrides, info: ParameterInfo) -> bool:
    return info.index in overrides or info.name in overrides


def _to_arguments(slots: List[Tuple[ParameterInfo, Any]]) -> Arguments:
    """Map resolved slots to positional and keyword arguments.

    Values are passed positionally up to the first omitted parameter, and
    by keyword after it. A positional-only parameter cannot be skipped, so
    omitted positional-only parameters before it get their own defaults.
    """
    args: List[Any] = []
    kwargs: Dict[str, Any] = {}
    omitted: List[ParameterInfo] = []

    for info, value in slots:
        if value is _OMITTED:
            omitted.append(info)
        elif info.keyword_only:
            kwargs[info.name] = value
        elif not omitted:
            args.append(value)
        elif info.positional_only:
            args.extend(skipped.default for skipped in omitted)
            omitted = []
            args.append(value)
        else:
            kwargs[info.name] = value

    return Arguments(args, kwargs)
