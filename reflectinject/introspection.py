"""
Introspection

This module reads the parameter lists of callables and constructors into
a normalized Signature value.

For each parameter the Signature records:
- Its position index (``self``/``cls``, ``*args`` and ``**kwargs`` excluded)
- Whether it has a default value (is optional)
- The fully qualified name of its declared class type, if any

Scalar annotations (anything from ``builtins``, such as ``int`` or ``str``),
``typing.Any``, missing annotations, unions of several types and generic
aliases have no declared type. ``Optional[X]`` and ``Annotated[X, ...]`` declare ``X``.

Forward references (string annotations and PEP 563) are resolved with
``typing.get_type_hints()``, falling back to evaluating the string in the
namespace of the module declaring the callable.
"""

import ast
import functools
import inspect
import types
import typing
from dataclasses import dataclass
from typing import Annotated, Any, Dict, Iterator, List, Optional, Tuple, Union

from .callables import CallableKind, CallableTarget, MethodBinding
from .exceptions import TypeInferenceError
from .naming import qualified_name

_SKIPPED_KINDS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


@dataclass(frozen=True)
class ParameterInfo:
    """Normalized metadata of one parameter.

    Attributes:
        index: Position of the parameter, starting at 0
        name: Parameter name
        kind: The ``inspect.Parameter`` kind
        declared_type: Qualified name of the declared class, None for
            scalar or missing type-hints
        optional: True when the parameter has a default value
        default: The default value, ``inspect.Parameter.empty`` if none
    """
    index: int
    name: str
    kind: Any
    declared_type: Optional[str]
    optional: bool
    default: Any = inspect.Parameter.empty

    @property
    def keyword_only(self) -> bool:
        return self.kind is inspect.Parameter.KEYWORD_ONLY

    @property
    def positional_only(self) -> bool:
        return self.kind is inspect.Parameter.POSITIONAL_ONLY


@dataclass(frozen=True)
class Signature:
    """Parameters of a callable, in declaration order"""
    parameters: Tuple[ParameterInfo, ...] = ()

    def __len__(self) -> int:
        return len(self.parameters)

    def __iter__(self) -> Iterator[ParameterInfo]:
        return iter(self.parameters)

    def __getitem__(self, index: int) -> ParameterInfo:
        return self.parameters[index]


def signature_of(target: CallableTarget) -> Signature:
    """Read the signature of a classified callable.

    Args:
        target: The callable, as returned by ``classify_callable()``

    Returns:
        The normalized Signature

    Raises:
        TypeInferenceError: When the callable cannot be inspected or an
            annotation cannot be resolved
    """
    if target.kind is CallableKind.METHOD:
        method = getattr(target.owner, target.method_name)
        # Unbound instance methods still list self; classmethods come bound
        skip_first = target.binding is MethodBinding.INSTANCE
        return _build_signature(method, method, skip_first=skip_first)

    if target.kind is CallableKind.INVOCABLE:
        invocable = target.function
        if isinstance(invocable, functools.partial):
            return _build_signature(invocable, invocable.func)
        call = getattr(invocable, '__call__')
        return _build_signature(call, call)

    if inspect.isclass(target.function):
        return constructor_signature(target.function) or Signature()

    # CLOSURE and FUNCTION
    return _build_signature(target.function, target.function)


def constructor_signature(cls: type) -> Optional[Signature]:
    """Read the signature of a class constructor.

    Args:
        cls: The class to analyze

    Returns:
        The constructor Signature, or None when neither the class nor any
        of its bases declares an ``__init__``

    Raises:
        TypeInferenceError: When the constructor cannot be inspected
            (e.g. C extension classes) or an annotation cannot be resolved
    """
    if cls.__init__ is object.__init__:
        return None
    return _build_signature(cls.__init__, cls.__init__, skip_first=True, owner=cls)


def _build_signature(
    function: Any,
    hints_source: Any,
    skip_first: bool = False,
    owner: Optional[type] = None,
) -> Signature:
    label = getattr(function, '__qualname__', repr(function))

    try:
        sig = inspect.signature(function)
    except ValueError as e:
        raise TypeInferenceError(
            f"Cannot inspect {label}: {e}. "
            f"This may occur with built-in types or C extension classes."
        ) from e
    except TypeError as e:
        raise TypeInferenceError(f"Cannot get signature for {label}: {e}.") from e

    hints = _resolve_type_hints(hints_source)

    parameters = list(sig.parameters.values())
    if skip_first and parameters:
        parameters = parameters[1:]

    infos: List[ParameterInfo] = []
    for param in parameters:
        if param.kind in _SKIPPED_KINDS:
            continue

        annotation = hints.get(param.name, param.annotation)
        if isinstance(annotation, str):
            annotation = _resolve_string_annotation(
                hints_source, owner, label, param.name, annotation
            )

        infos.append(ParameterInfo(
            index=len(infos),
            name=param.name,
            kind=param.kind,
            declared_type=declared_type_name(annotation),
            optional=param.default is not inspect.Parameter.empty,
            default=param.default,
        ))

    return Signature(tuple(infos))


def declared_type_name(annotation: Any) -> Optional[str]:
    """Return the qualified name of the class an annotation declares.

    Example::

        >>> declared_type_name(Optional[Database])
        'app.db.Database'
        >>> declared_type_name(int) is None
        True
    """
    if annotation is inspect.Parameter.empty or annotation is None:
        return None

    origin = typing.get_origin(annotation)
    if origin is Annotated:
        return declared_type_name(typing.get_args(annotation)[0])

    if origin is Union or origin is types.UnionType:
        members = [a for a in typing.get_args(annotation) if a is not type(None)]
        if len(members) == 1:
            return declared_type_name(members[0])
        return None

    if origin is not None or not inspect.isclass(annotation):
        return None

    # Scalars and typing's own special classes (Any, Protocol, Generic)
    if annotation.__module__ in ('builtins', 'typing'):
        return None

    return qualified_name(annotation)


def _resolve_type_hints(function: Any) -> Dict[str, Any]:
    """Resolve type hints with typing.get_type_hints().

    Returns an empty dict when resolution fails, so the raw annotations are
    used instead and string ones go through _resolve_string_annotation().
    """
    target = inspect.unwrap(getattr(function, '__func__', function))
    try:
        # include_extras=True preserves Annotated[] metadata
        return typing.get_type_hints(target, include_extras=True)
    except (NameError, TypeError, AttributeError, RecursionError):
        # NameError: type not in scope, common with local classes
        # TypeError: PEP 604 | on a type that doesn't support it
        return {}


def _resolve_string_annotation(
    function: Any,
    owner: Optional[type],
    label: str,
    param_name: str,
    annotation: str,
) -> Any:
    """Evaluate a string annotation in the namespace of its module.

    Raises:
        TypeInferenceError: When the annotation cannot be evaluated
    """
    namespace: Dict[str, Any] = {}

    module = inspect.getmodule(owner if owner is not None else function)
    if module is not None:
        namespace.update(vars(module))

    target = inspect.unwrap(getattr(function, '__func__', function))
    namespace.update(getattr(target, '__globals__', {}))

    # Nested classes
    if owner is not None:
        namespace.update(vars(owner))

    namespace.setdefault('Union', Union)
    namespace.setdefault('Optional', Optional)

    try:
        return eval(_convert_union_syntax(annotation), namespace)
    except NameError:
        raise TypeInferenceError(
            f"Cannot resolve forward reference '{annotation}' for parameter "
            f"'{param_name}' of {label}. "
            f"Hint: Ensure '{annotation}' is defined and imported in the module "
            f"declaring {label}."
        ) from None
    except SyntaxError as e:
        raise TypeInferenceError(
            f"Invalid forward reference '{annotation}' for parameter "
            f"'{param_name}' of {label}: {e}."
        ) from e
    except (AttributeError, TypeError) as e:
        raise TypeInferenceError(
            f"Failed to resolve forward reference '{annotation}' for parameter "
            f"'{param_name}' of {label}: {e}."
        ) from e


def _convert_union_syntax(annotation: str) -> str:
    """Convert PEP 604 union syntax (X | Y) to Union[X, Y].

    Some callables used as annotations (like ``multiprocessing.Queue``)
    don't support the ``|`` operator, so evaluating ``X | None`` fails.

    Example::

        >>> _convert_union_syntax('Queue | None')
        'Union[Queue, None]'
    """
    if '|' not in annotation:
        return annotation

    try:
        tree = ast.parse(annotation, mode='eval')
    except SyntaxError:
        # Let eval() report the error
        return annotation

    class UnionTransformer(ast.NodeTransformer):
        def visit_BinOp(self, node: ast.BinOp) -> ast.AST:
            if isinstance(node.op, ast.BitOr):
                # Flatten first so X | Y | Z becomes Union[X, Y, Z]
                members = [self.visit(member) for member in _collect_union_members(node)]
                return ast.Subscript(
                    value=ast.Name(id='Union', ctx=ast.Load()),
                    slice=ast.Tuple(elts=members, ctx=ast.Load()),
                    ctx=ast.Load()
                )
            self.generic_visit(node)
            return node

    new_tree = UnionTransformer().visit(tree)
    ast.fix_missing_locations(new_tree)
    return ast.unparse(new_tree.body)


def _collect_union_members(node: ast.BinOp) -> List[ast.AST]:
    members: List[ast.AST] = []

    def collect(n: ast.AST) -> None:
        if isinstance(n, ast.BinOp) and isinstance(n.op, ast.BitOr):
            collect(n.left)
            collect(n.right)
        else:
            members.append(n)

    collect(node)
    return members
